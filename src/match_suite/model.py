# src/match_suite/model.py
from __future__ import annotations

from typing import List, Literal, Optional

import pandas as pd
from pydantic import BaseModel, Field

CaseStatus = Literal["PASSED", "FAILED", "ERROR"]


class MatchCase(BaseModel):
    """One pair of documents and whether they are expected to match."""
    lhs: str
    rhs: str
    expected: bool


class SuiteManifest(BaseModel):
    """
    A list of cases. `data_dir` is resolved against the manifest's own directory
    by the controller; case paths are resolved against `data_dir`.
    """
    data_dir: Optional[str] = None
    cases: List[MatchCase] = Field(default_factory=list)


class CaseResult(BaseModel):
    index: int
    lhs: str
    rhs: str
    expected: bool
    matched: Optional[bool] = None
    lhs_key: Optional[str] = None
    rhs_key: Optional[str] = None
    status: CaseStatus
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == "PASSED"

    def summary_line(self) -> str:
        """Console line in the form `[1.xml] == [2.xml] ---> PASSED`."""
        operator = "==" if self.expected else "!="
        line = f"[{self.lhs}] {operator} [{self.rhs}] ---> {self.status}"
        if self.error:
            line += f" ({self.error})"
        return line


class SuiteReport(BaseModel):
    results: List[CaseResult] = Field(default_factory=list)
    duration_s: float = 0.0

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.status == "PASSED")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == "FAILED")

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.status == "ERROR")

    @property
    def all_passed(self) -> bool:
        return self.passed == self.total

    def to_dataframe(self) -> pd.DataFrame:
        """One row per case, in manifest order."""
        columns = list(CaseResult.model_fields.keys())
        return pd.DataFrame([r.model_dump() for r in self.results], columns=columns)
