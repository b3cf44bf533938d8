"""Repository references and ingress sources.

RepositoryReference is the validated {host, owner, name} locator parsed from a
URL. ProjectSource is what the caller hands to the pipeline: either a URL or
uploaded archive bytes.
"""

import re
from dataclasses import dataclass
from enum import Enum

from codebrief.errors import InvalidReferenceError

DEFAULT_HOST = "github.com"


class SourceKind(Enum):
    """Where the project archive comes from."""

    GITHUB = "github"
    ZIP = "zip"


@dataclass(frozen=True)
class RepositoryReference:
    """Validated locator for a hosted repository.

    Attributes:
        host: Code host the URL pointed at (e.g., "github.com")
        owner: Account or organisation name
        name: Repository name (without a trailing ".git")
    """

    host: str
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        """Return "owner/name"."""
        return f"{self.owner}/{self.name}"

    def archive_url(self, api_host: str) -> str:
        """Return the zipball endpoint for this repository.

        Args:
            api_host: API host name (e.g., "api.github.com")
        """
        return f"https://{api_host}/repos/{self.owner}/{self.name}/zipball"

    @classmethod
    def parse(cls, url: str, host: str = DEFAULT_HOST) -> "RepositoryReference":
        """Parse a repository URL.

        Accepts anything containing "<host>/<owner>/<name>", with or without a
        scheme. Surrounding whitespace and trailing slashes are ignored.

        Args:
            url: Repository URL
            host: Recognized code host

        Returns:
            RepositoryReference for the URL

        Raises:
            InvalidReferenceError: If the URL does not match the expected shape
        """
        if not isinstance(url, str):
            raise InvalidReferenceError(repr(url))

        clean = url.strip().rstrip("/")
        pattern = re.compile(rf"(?:^|[/@.]){re.escape(host)}/([^/\s?#]+)/([^/\s?#]+)")
        match = pattern.search(clean)
        if not match:
            raise InvalidReferenceError(url)

        owner, name = match.group(1), match.group(2)
        if name.endswith(".git"):
            name = name[: -len(".git")]
        if not owner or not name:
            raise InvalidReferenceError(url)

        return cls(host=host, owner=owner, name=name)


@dataclass(frozen=True)
class ProjectSource:
    """Ingress value for one pipeline run.

    Exactly one of url or archive must be set.

    Attributes:
        kind: Source kind (github or zip)
        url: Repository URL for github sources
        archive: Raw archive bytes for zip sources
        filename: Upload filename for zip sources
    """

    kind: SourceKind
    url: str | None = None
    archive: bytes | None = None
    filename: str | None = None

    def __post_init__(self) -> None:
        """Validate that the source matches its kind."""
        if self.kind == SourceKind.GITHUB and not self.url:
            raise ValueError("A github source requires a URL")
        if self.kind == SourceKind.ZIP and self.archive is None:
            raise ValueError("A zip source requires archive bytes")
        if self.url and self.archive is not None:
            raise ValueError("Provide either a URL or an archive, not both")

    @classmethod
    def from_url(cls, url: str) -> "ProjectSource":
        """Create a github source."""
        return cls(kind=SourceKind.GITHUB, url=url)

    @classmethod
    def from_archive(cls, data: bytes, filename: str | None = None) -> "ProjectSource":
        """Create a zip upload source."""
        return cls(kind=SourceKind.ZIP, archive=data, filename=filename)

    @property
    def identifier(self) -> str:
        """Provenance identifier recorded with the result."""
        if self.kind == SourceKind.GITHUB:
            return self.url or ""
        return "Zip File"

    @property
    def title(self) -> str:
        """Human-readable project title."""
        if self.kind == SourceKind.GITHUB and self.url:
            return "/".join(self.url.strip().rstrip("/").split("/")[-2:])
        return self.filename or "Unknown Project"
