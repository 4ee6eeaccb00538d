"""Configuration for the organisation catalog.

Usage
-----
Create a configuration with defaults:

>>> config = CatalogConfig()
>>> config.bot_account_name
'ATCBot'

Or load from environment variables:

>>> import os
>>> os.environ["ORGCATALOG_BOT_ACCOUNT"] = "release-bot"
>>> CatalogConfig.from_env().bot_account_name
'release-bot'

"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import os

from orgcatalog.cache import NO_EXPIRY, CachePolicy

from .errors import CatalogConfigError

CACHE_KEY_REPOSITORIES = "repositories"
CACHE_KEY_CONTRIBUTORS = "contributors"

_DEFAULT_EXCLUDED_REPOSITORIES = frozenset({"atc-dummy", "atc-template-dotnet-package"})
_DEFAULT_BOT_ACCOUNT = "ATCBot"
_DEFAULT_CONTRIBUTORS_SLIDING = dt.timedelta(hours=1)
_DEFAULT_CONTRIBUTORS_ABSOLUTE = dt.timedelta(hours=12)


@dc.dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Filtering and caching rules for the organisation catalog.

    Attributes
    ----------
    excluded_repositories
        Repository names dropped from the catalog. Matching is exact and
        case-sensitive.
    bot_account_name
        Contributor display name never included in the aggregated list.
    contributors_sliding
        Idle window for the aggregated contributor entry.
    contributors_absolute
        Lifetime ceiling for the aggregated contributor entry.
    repositories_ttl
        Absolute lifetime for the repository catalog entry. ``None`` keeps
        the entry until it is evicted explicitly.

    """

    excluded_repositories: frozenset[str] = _DEFAULT_EXCLUDED_REPOSITORIES
    bot_account_name: str = _DEFAULT_BOT_ACCOUNT
    contributors_sliding: dt.timedelta = _DEFAULT_CONTRIBUTORS_SLIDING
    contributors_absolute: dt.timedelta = _DEFAULT_CONTRIBUTORS_ABSOLUTE
    repositories_ttl: dt.timedelta | None = None

    def cache_policies(self) -> dict[str, CachePolicy]:
        """Return the expiration policy for every cache key the catalog owns."""
        repositories = (
            NO_EXPIRY
            if self.repositories_ttl is None
            else CachePolicy(absolute=self.repositories_ttl)
        )
        return {
            CACHE_KEY_REPOSITORIES: repositories,
            CACHE_KEY_CONTRIBUTORS: CachePolicy(
                sliding=self.contributors_sliding,
                absolute=self.contributors_absolute,
            ),
        }

    @staticmethod
    def _parse_seconds(env_var: str) -> dt.timedelta | None:
        """Read a positive number of seconds; ``None`` when unset."""
        raw = os.environ.get(env_var, "").strip()
        if not raw:
            return None
        try:
            seconds = float(raw)
        except ValueError as exc:
            raise CatalogConfigError.invalid_duration(env_var, raw) from exc
        if seconds <= 0:
            raise CatalogConfigError.invalid_duration(env_var, raw)
        return dt.timedelta(seconds=seconds)

    @staticmethod
    def _parse_names(env_var: str) -> frozenset[str] | None:
        raw = os.environ.get(env_var)
        if raw is None:
            return None
        return frozenset(name.strip() for name in raw.split(",") if name.strip())

    @classmethod
    def from_env(cls) -> CatalogConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``ORGCATALOG_EXCLUDED_REPOSITORIES``: comma-separated names. Set
          it to an empty string to exclude nothing.
        - ``ORGCATALOG_BOT_ACCOUNT``: bot display name.
        - ``ORGCATALOG_CONTRIBUTORS_SLIDING_S``: sliding window in seconds.
        - ``ORGCATALOG_CONTRIBUTORS_ABSOLUTE_S``: absolute ceiling in
          seconds.
        - ``ORGCATALOG_REPOSITORIES_TTL_S``: optional catalog lifetime in
          seconds.

        Raises
        ------
        CatalogConfigError
            If a duration is not a positive number or the bot name is blank.

        """
        excluded = cls._parse_names("ORGCATALOG_EXCLUDED_REPOSITORIES")
        bot_account = os.environ.get("ORGCATALOG_BOT_ACCOUNT", _DEFAULT_BOT_ACCOUNT)
        if not bot_account.strip():
            raise CatalogConfigError.empty_bot_account()

        sliding = cls._parse_seconds("ORGCATALOG_CONTRIBUTORS_SLIDING_S")
        absolute = cls._parse_seconds("ORGCATALOG_CONTRIBUTORS_ABSOLUTE_S")
        return cls(
            excluded_repositories=(
                _DEFAULT_EXCLUDED_REPOSITORIES if excluded is None else excluded
            ),
            bot_account_name=bot_account.strip(),
            contributors_sliding=sliding or _DEFAULT_CONTRIBUTORS_SLIDING,
            contributors_absolute=absolute or _DEFAULT_CONTRIBUTORS_ABSOLUTE,
            repositories_ttl=cls._parse_seconds("ORGCATALOG_REPOSITORIES_TTL_S"),
        )
