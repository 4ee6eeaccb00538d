"""Organisation catalog errors."""

from __future__ import annotations


class DuplicateRepositoryError(RuntimeError):
    """Raised when a name lookup matches more than one catalog entry.

    Repository names are unique within an organisation, so several
    case-insensitive matches mean the upstream data is inconsistent.
    """

    def __init__(self, name: str, matches: list[str]) -> None:
        """Record the requested name and every matching repository name."""
        self.name = name
        self.matches = matches
        super().__init__(
            f"Repository name {name!r} matches {len(matches)} catalog entries: "
            f"{', '.join(matches)}"
        )


class CatalogConfigError(ValueError):
    """Raised when catalog configuration is invalid."""

    @classmethod
    def invalid_duration(cls, env_var: str, raw: str) -> CatalogConfigError:
        """Return an error for a duration that is not a positive number."""
        return cls(f"{env_var} must be a positive number of seconds, got: {raw!r}")

    @classmethod
    def empty_bot_account(cls) -> CatalogConfigError:
        """Return an error when the bot account name is blank."""
        return cls("ORGCATALOG_BOT_ACCOUNT must be non-empty")
