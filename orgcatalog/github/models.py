"""Typed GitHub REST payloads.

Only the fields orgcatalog reads are declared; msgspec ignores the rest of
each wire object.
"""

from __future__ import annotations

import msgspec


class GitHubRepository(msgspec.Struct, frozen=True, kw_only=True):
    """Repository entry from ``GET /orgs/{org}/repos``.

    Attributes
    ----------
    name : str
        Repository name. Stored as returned; lookups compare it
        case-insensitively.
    default_branch : str
        Branch used when listing the repository tree.

    """

    name: str
    default_branch: str = "main"
    id: int | None = None
    full_name: str | None = None
    description: str | None = None
    html_url: str | None = None
    fork: bool = False
    archived: bool = False
    language: str | None = None
    stargazers_count: int = 0
    open_issues_count: int = 0
    topics: list[str] = msgspec.field(default_factory=list)


class GitHubContributor(msgspec.Struct, frozen=True, kw_only=True):
    """Contributor entry from ``GET /repos/{org}/{repo}/contributors``.

    ``id`` is the identity used for deduplication; ``name`` is the display
    name, carried on the wire as ``login``.
    """

    id: int
    name: str = msgspec.field(name="login")
    contributions: int = 0
    avatar_url: str | None = None
    html_url: str | None = None
    type: str = "User"


class GitHubPath(msgspec.Struct, frozen=True, kw_only=True):
    """One entry of a recursive git tree."""

    path: str
    type: str
    mode: str | None = None
    sha: str | None = None
    size: int | None = None
    url: str | None = None


class GitHubTree(msgspec.Struct, frozen=True, kw_only=True):
    """Body of ``GET /repos/{org}/{repo}/git/trees/{branch}?recursive=true``."""

    sha: str | None = None
    truncated: bool = False
    tree: list[GitHubPath] = msgspec.field(default_factory=list)
