# src/match_suite/services/case_worker.py
import logging
from pathlib import Path

from matcher.hasher import compute_document_key
from matcher.matcher import match_documents_loosely
from match_suite.model import CaseResult, MatchCase
from xml_loader.services.xml_load_service import XmlLoadService

logger = logging.getLogger(__name__)


def match_case_worker(index: int, case: MatchCase, data_dir: str, trim_text: bool = False) -> str:
    """
    Worker function evaluating a single case.

    Loads both documents, asks the matcher for a verdict and compares it with the
    expectation. Returns the CaseResult as a JSON string so that results cross
    the process boundary without pickling model instances.
    """
    base = Path(data_dir)
    loader = XmlLoadService(trim_text=trim_text)

    try:
        lhs_doc = loader.load_file(base / case.lhs)
        rhs_doc = loader.load_file(base / case.rhs)
        matched = match_documents_loosely(lhs_doc, rhs_doc)
        # Reported alongside the verdict only.
        lhs_key = compute_document_key(lhs_doc)
        rhs_key = compute_document_key(rhs_doc)
    except (OSError, ValueError) as e:
        logger.error("Failed to evaluate case %d ([%s] / [%s]): %s", index, case.lhs, case.rhs, e)
        result = CaseResult(
            index=index,
            lhs=case.lhs,
            rhs=case.rhs,
            expected=case.expected,
            status="ERROR",
            error=str(e),
        )
        return result.model_dump_json()

    result = CaseResult(
        index=index,
        lhs=case.lhs,
        rhs=case.rhs,
        expected=case.expected,
        matched=matched,
        lhs_key=f"{lhs_key:016x}",
        rhs_key=f"{rhs_key:016x}",
        status="PASSED" if matched == case.expected else "FAILED",
    )
    return result.model_dump_json()
