"""GitHub REST client errors."""

from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when GitHub returns a non-success HTTP status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, path: str) -> GitHubAPIError:
        """Return an error for a non-2xx response to ``GET path``."""
        return cls(
            f"GitHub REST HTTP {status_code} for {path}", status_code=status_code
        )


class GitHubResponseShapeError(RuntimeError):
    """Raised when a GitHub response body cannot be decoded as expected."""

    @classmethod
    def null_payload(cls, path: str) -> GitHubResponseShapeError:
        """Return an error for a JSON ``null`` body."""
        return cls(f"GitHub REST response for {path} was null")

    @classmethod
    def undecodable(cls, path: str, detail: str) -> GitHubResponseShapeError:
        """Return an error for a body that does not match the expected type."""
        return cls(f"GitHub REST response for {path} could not be decoded: {detail}")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def empty_organisation(cls) -> GitHubConfigError:
        """Return an error when no organisation is configured."""
        return cls("GitHub organisation must be non-empty")

    @classmethod
    def invalid_timeout(cls, raw: str) -> GitHubConfigError:
        """Return an error for a timeout that is not a positive number."""
        return cls(
            f"ORGCATALOG_GITHUB_TIMEOUT_S must be a positive number, got: {raw!r}"
        )
