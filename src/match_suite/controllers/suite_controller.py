from __future__ import annotations

import json
import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from tqdm.auto import tqdm

from match_suite.model import CaseResult, SuiteManifest, SuiteReport
from match_suite.services.case_worker import match_case_worker

logger = logging.getLogger(__name__)


class SuiteController:
    """
    Runs a manifest of document pairs through the loose matcher and collects a
    PASSED/FAILED/ERROR verdict per case.

    Cases are independent, so they are spread over a process pool; with a single
    worker they run inline.
    """

    def __init__(self, *, default_workers: Optional[int] = None) -> None:
        self.default_workers = default_workers or (os.cpu_count() or 4)

    @staticmethod
    def load_manifest(path: Union[str, Path]) -> Tuple[SuiteManifest, Path]:
        """
        Reads a manifest file and resolves its data directory.

        Returns:
            Tuple[SuiteManifest, Path]: The manifest and the absolute directory
            that relative case paths are resolved against.
        """
        manifest_path = Path(path).resolve()
        with open(manifest_path, "r", encoding="utf-8") as f:
            manifest = SuiteManifest.model_validate(json.load(f))

        data_dir = manifest_path.parent
        if manifest.data_dir:
            data_dir = (data_dir / manifest.data_dir).resolve()

        logger.info("Loaded %d cases from %s (data dir: %s)", len(manifest.cases), manifest_path, data_dir)
        return manifest, data_dir

    def run(
            self,
            manifest: SuiteManifest,
            *,
            data_dir: Union[str, Path],
            workers: Optional[int] = None,
            show_progress: bool = True,
            trim_text: bool = False,
    ) -> SuiteReport:
        """Evaluates every case and returns the results in manifest order."""
        if not manifest.cases:
            return SuiteReport()

        n_workers = max(1, int(workers or self.default_workers))
        data_dir_str = str(data_dir)
        start = time.perf_counter()
        collected: Dict[int, CaseResult] = {}

        if n_workers == 1:
            iterator = enumerate(manifest.cases)
            if show_progress:
                iterator = tqdm(iterator, total=len(manifest.cases), desc="Matching", unit=" case", leave=False)
            for index, case in iterator:
                raw = match_case_worker(index, case, data_dir_str, trim_text)
                collected[index] = CaseResult.model_validate_json(raw)
        else:
            with ProcessPoolExecutor(max_workers=n_workers) as pool:
                futures = {
                    pool.submit(match_case_worker, index, case, data_dir_str, trim_text): index
                    for index, case in enumerate(manifest.cases)
                }
                iterator = as_completed(futures)
                if show_progress:
                    iterator = tqdm(iterator, total=len(futures), desc="Matching", unit=" case", leave=False)

                for fut in iterator:
                    index = futures[fut]
                    case = manifest.cases[index]
                    try:
                        collected[index] = CaseResult.model_validate_json(fut.result())
                    except Exception as e:
                        logger.error("Worker failed for case %d: %s", index, e, exc_info=True)
                        collected[index] = CaseResult(
                            index=index,
                            lhs=case.lhs,
                            rhs=case.rhs,
                            expected=case.expected,
                            status="ERROR",
                            error=str(e),
                        )

        duration = time.perf_counter() - start
        report = SuiteReport(
            results=[collected[i] for i in sorted(collected)],
            duration_s=round(duration, 3),
        )
        logger.info(
            "Suite finished: %d passed, %d failed, %d errors in %.3fs",
            report.passed, report.failed, report.errors, report.duration_s,
        )
        return report
