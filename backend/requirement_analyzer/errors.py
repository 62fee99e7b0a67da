"""
Error taxonomy for one analysis run.

Every failure that reaches the caller is an AnalysisError carrying the HTTP
status and the fields of the uniform `{success: false, error}` envelope.
"""

from enum import Enum
from typing import Optional


class ProviderErrorKind(Enum):
    QUOTA_EXHAUSTED = "quota_exhausted"  # 402, no credits left
    RATE_LIMITED = "rate_limited"        # 429, provider throttling
    UNAVAILABLE = "unavailable"          # network error / unexpected status


class ProviderError(Exception):
    """A failed call to one candidate model. Never leaves the orchestrator."""

    def __init__(
        self,
        kind: ProviderErrorKind,
        status: Optional[int] = None,
        details: str = "",
    ):
        super().__init__(kind.value)
        self.kind = kind
        self.status = status
        self.details = details

    def __str__(self) -> str:
        return f"{self.kind.value} (status={self.status}): {self.details[:200]}"


class AnalysisError(Exception):
    status_code = 500

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        retry_after_ms: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        self.retry_after_ms = retry_after_ms

    def to_payload(self) -> dict:
        payload = {"success": False, "error": self.message}
        if self.retry_after_ms is not None:
            payload["retry_after_ms"] = self.retry_after_ms
        if self.details is not None:
            payload["details"] = self.details
        return payload


class EmptySpecificationError(AnalysisError):
    status_code = 400

    def __init__(self):
        super().__init__("Please enter a specification.")


class ConfigurationError(AnalysisError):
    status_code = 500


class InsufficientCreditsError(AnalysisError):
    status_code = 402

    def __init__(self, details: Optional[str] = None):
        super().__init__("Insufficient OpenRouter credits.", details=details)


class ProviderSaturatedError(AnalysisError):
    status_code = 429

    def __init__(self, retry_after_ms: int):
        super().__init__(
            "OpenRouter is temporarily saturated. Please try again in 30-60 seconds.",
            retry_after_ms=retry_after_ms,
        )


# ------------------------------------------------------------
# Output shape errors (422)
# ------------------------------------------------------------

class OutputShapeError(AnalysisError):
    status_code = 422

    def __init__(self, details: str):
        super().__init__(
            "The AI did not produce valid JSON with the expected structure.",
            details=details,
        )


class IncompleteResponseError(OutputShapeError):
    def __init__(self):
        super().__init__(
            "The AI response is incomplete. "
            "Try a shorter or simpler specification."
        )


class MalformedJSONError(OutputShapeError):
    pass


class InvalidStructureError(OutputShapeError):
    pass


class PersistenceError(AnalysisError):
    status_code = 500
