from __future__ import annotations
from typing import Optional

from pydantic import BaseModel

from bqcheck.models.types import ErrorKind, Verdict

QUALIFIED_TEXT = "✅\nYou Are Qualified for Boston 2026 Marathon"
NOT_QUALIFIED_TEXT = "❌\nYou Are Not Qualified for Boston 2026 Marathon"


class QualificationResult(BaseModel):
    verdict: Verdict
    message: Optional[str] = None      # raw RESULT_MESSAGE_OUT, when one was read
    error: Optional[ErrorKind] = None
    detail: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def is_error(self) -> bool:
        # an unexpected classification is shown as an error, not a verdict
        return self.verdict not in (Verdict.QUALIFIED, Verdict.NOT_QUALIFIED)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        detail: str,
        status_code: Optional[int] = None,
    ) -> "QualificationResult":
        return cls(verdict=Verdict.ERROR, error=kind, detail=detail, status_code=status_code)

    def display_text(self) -> str:
        if self.verdict == Verdict.QUALIFIED:
            return QUALIFIED_TEXT
        if self.verdict == Verdict.NOT_QUALIFIED:
            return NOT_QUALIFIED_TEXT
        if self.verdict == Verdict.UNRECOGNIZED:
            return f'❗ Error: Unexpected result "{self.message}"'

        if self.error == ErrorKind.HTTP_STATUS:
            return f"❗ Error {self.status_code}: {self.detail}"
        if self.error == ErrorKind.PARSE:
            return f"❗ Error: Could not read response: {self.detail}"
        return f"❗ Exception: {self.detail}"


def classify(message: str) -> QualificationResult:
    if message == Verdict.QUALIFIED.value:
        return QualificationResult(verdict=Verdict.QUALIFIED, message=message)
    if message == Verdict.NOT_QUALIFIED.value:
        return QualificationResult(verdict=Verdict.NOT_QUALIFIED, message=message)
    return QualificationResult(verdict=Verdict.UNRECOGNIZED, message=message)
