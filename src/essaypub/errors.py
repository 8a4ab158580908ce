from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    FETCH_FAILED = "FETCH_FAILED"
    MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"
    STORAGE_CREDENTIALS_MISSING = "STORAGE_CREDENTIALS_MISSING"
    USAGE = "USAGE"


class EssayPubError(Exception):
    """Raised for all expected failure conditions of a publish run.

    Caught by cli.py, logged with its suggestion, and mapped to a non-zero
    exit status. Business logic lets it propagate; only the retry loop
    catches it, and re-raises the last one once attempts are exhausted.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class TransportError(EssayPubError):
    """Network failure or non-200 response while fetching a document."""

    def __init__(self, message: str, suggestion: str = "") -> None:
        super().__init__(
            code=ErrorCode.FETCH_FAILED,
            message=message,
            suggestion=suggestion or "The document host may be temporarily unavailable.",
            recoverable=True,
        )


class MalformedDocument(EssayPubError):
    """A fetched document lacks an element the extractor requires."""

    def __init__(self, message: str, suggestion: str = "") -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_DOCUMENT,
            message=message,
            suggestion=suggestion or "Check that the URL points at a published HTML document.",
            recoverable=False,
        )


class StorageWriteError(EssayPubError):
    def __init__(
        self,
        message: str,
        suggestion: str = "",
        code: ErrorCode = ErrorCode.STORAGE_WRITE_FAILED,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            suggestion=suggestion or "The storage service may be temporarily unavailable.",
            recoverable=code == ErrorCode.STORAGE_WRITE_FAILED,
        )


class UsageError(EssayPubError):
    def __init__(self, message: str, suggestion: str = "") -> None:
        super().__init__(
            code=ErrorCode.USAGE,
            message=message,
            suggestion=suggestion or "Pass the essay URL as the first argument.",
            recoverable=False,
        )
