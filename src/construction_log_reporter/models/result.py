"""Explicit success/failure values returned at component boundaries."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class FailureKind(str, Enum):
    """Classification of a failed operation, for user-facing messages."""

    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    HTTP_ERROR = "http_error"
    TIMEOUT = "timeout"
    NETWORK_UNREACHABLE = "network_unreachable"
    UNEXPECTED = "unexpected"
    INVALID_RESPONSE = "invalid_response"
    WRITE_FAILED = "write_failed"
    STORAGE_UNAVAILABLE = "storage_unavailable"


class Result(BaseModel):
    """Outcome of a fetch or build: a value on success, a kind and message on failure."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    value: Any = None
    kind: FailureKind | None = None
    message: str = ""
    attempts: int = 0

    @classmethod
    def success(cls, value: Any, attempts: int = 1) -> "Result":
        return cls(ok=True, value=value, attempts=attempts)

    @classmethod
    def failure(cls, kind: FailureKind, message: str, attempts: int = 0) -> "Result":
        return cls(ok=False, kind=kind, message=message, attempts=attempts)

    def unwrap(self) -> Any:
        """Return the value, or raise ValueError for a failure."""
        if not self.ok:
            raise ValueError(f"{self.kind.value}: {self.message}")
        return self.value
