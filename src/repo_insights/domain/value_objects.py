"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from repo_insights.domain.exceptions import InvalidReferenceError


@dataclass(frozen=True, slots=True)
class RepoRef:
    """Repository identifier derived from a URL.

    Takes the first two non-empty path segments of a URL such as
    ``https://github.com/psf/requests`` as *owner* and *name*.  Anything after
    the second segment (sub-paths, a ``.git`` suffix on a later segment, query
    strings, fragments) is ignored rather than validated.
    """

    owner: str
    name: str

    def __post_init__(self) -> None:
        if not self.owner or not self.name:
            raise InvalidReferenceError(
                "Repository reference needs both an owner and a name."
            )

    @classmethod
    def from_url(cls, url: str) -> RepoRef:
        """Parse a raw URL string."""
        url = url.strip()
        try:
            parts = urlsplit(url)
        except ValueError as exc:
            raise InvalidReferenceError(f"Invalid repository URL: '{url}'.") from exc

        if not parts.scheme or not parts.netloc:
            raise InvalidReferenceError(
                f"Invalid repository URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )

        segments = [segment for segment in parts.path.split("/") if segment]
        if len(segments) < 2:
            raise InvalidReferenceError(
                f"Invalid repository URL: '{url}'. "
                "The path must contain an owner and a repository name."
            )
        return cls(owner=segments[0], name=segments[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def resolve(url: str) -> RepoRef:
    """Resolve a repository URL into a :class:`RepoRef`."""
    return RepoRef.from_url(url)
