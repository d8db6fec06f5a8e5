"""
Verification errors.

Each error carries the wire code and HTTP status the API renders it with.
Per-source lookup failures are not errors at this level: the evidence
aggregator absorbs them into "not found" outcomes.
"""

from typing import Any, Dict


class VerificationError(Exception):
    """Base class for failures surfaced to the caller of a verification."""

    code: str = "VerificationError"
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class EmptyInputError(VerificationError):
    """The submitted text is blank after trimming."""

    code = "EmptyInput"
    status_code = 400

    def __init__(self, message: str = "Please enter a claim to verify."):
        super().__init__(message)


class LookupPanelUnavailableError(VerificationError):
    """No source panel or lookup provider is available to check claims against."""

    code = "LookupPanelUnavailable"
    status_code = 503


class VerificationTimeoutError(VerificationError):
    """The request ran past its deadline; in-flight lookups were abandoned."""

    code = "VerificationTimeout"
    status_code = 504
