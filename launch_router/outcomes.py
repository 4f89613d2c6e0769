from dataclasses import dataclass, field
from pydantic import BaseModel, field_validator


@dataclass(frozen=True)
class ErrorDetail:
    """
    Normalized description of a configuration-fetch failure.

    Fields:
        domain      : Error family, one of the tags in launch_router.utils
                      (e.g. "TransportError", "HttpStatusError").
        code        : HTTP status for HTTP errors, -1 for everything else.
        message     : Human-readable text, shown to the user as-is.
        error_type  : Name of the underlying exception (e.g. "TimeoutError"),
                      kept for logs only and ignored by equality.
    """
    domain: str
    code: int
    message: str
    error_type: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Completed:
    """2xx response with a parsed body. destination is None when no redirect was requested."""
    destination: str | None = None

    @property
    def has_destination(self) -> bool:
        return bool(self.destination)


@dataclass(frozen=True)
class RateLimited:
    """Server answered 429."""


@dataclass(frozen=True)
class Failed:
    cause: ErrorDetail


@dataclass(frozen=True)
class Pending:
    """Resolver default before the first fetch completes. Never returned by a fetch."""


FetchOutcome = Completed | RateLimited | Failed | Pending


class RemoteUrlPayload(BaseModel):
    """
    JSON envelope served by the configuration endpoint: {"url": "..."}.

    A url value that is not a string counts as "no redirect" rather than a
    decode failure.
    """
    url: str | None = None

    @field_validator("url", mode="before")
    @classmethod
    def _drop_non_string(cls, value):
        return value if isinstance(value, str) else None
