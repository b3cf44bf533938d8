"""Archive acquisition.

Resolves a repository URL into zipball bytes from the GitHub API, or accepts
uploaded archive bytes. The whole archive is buffered in memory before corpus
assembly starts.
"""

import http.client
import logging
import urllib.error
import urllib.request
from collections.abc import Callable
from typing import Any

from codebrief import __version__
from codebrief.config import GitHubConfig
from codebrief.errors import DownloadError, InvalidArchiveError, RateLimitedError
from codebrief.models.repository import RepositoryReference

logger = logging.getLogger(__name__)

# GitHub answers 403 for primary rate limits and 429 for secondary ones
RATE_LIMIT_STATUSES = frozenset({403, 429})

CHUNK_SIZE = 64 * 1024

Opener = Callable[..., Any]


class ArchiveFetcher:
    """Obtains project archives as in-memory bytes.

    Usage:
        fetcher = ArchiveFetcher(GitHubConfig(token="ghp_..."))
        data = fetcher.fetch("https://github.com/user/repo")
    """

    def __init__(
        self,
        config: GitHubConfig | None = None,
        max_upload_bytes: int | None = None,
        opener: Opener | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            config: Download settings (token, hosts, timeout, size ceiling)
            max_upload_bytes: Largest accepted upload (None for no limit)
            opener: urlopen-compatible callable, replaceable in tests
        """
        self.config = config or GitHubConfig()
        self.max_upload_bytes = max_upload_bytes
        self._opener = opener or urllib.request.urlopen

    def parse_reference(self, url: str) -> RepositoryReference:
        """Parse a repository URL against the configured host.

        Raises:
            InvalidReferenceError: If the URL does not match host/owner/name
        """
        return RepositoryReference.parse(url, host=self.config.host)

    def build_request(self, reference: RepositoryReference) -> urllib.request.Request:
        """Build the zipball request for a reference."""
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"codebrief/{__version__}",
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        return urllib.request.Request(
            reference.archive_url(self.config.api_host),
            headers=headers,
            method="GET",
        )

    def fetch(self, url: str) -> bytes:
        """Download a repository archive.

        Args:
            url: Repository URL (e.g., https://github.com/user/repo)

        Returns:
            The complete archive bytes

        Raises:
            InvalidReferenceError: If the URL is malformed (no request is made)
            RateLimitedError: If the API refuses because of rate limiting
            DownloadError: On any other failure
        """
        reference = self.parse_reference(url)
        request = self.build_request(reference)

        logger.info("Downloading repo from: %s", request.full_url)

        try:
            with self._opener(request, timeout=self.config.timeout) as response:
                status = getattr(response, "status", 200)
                if status != 200:
                    self._raise_for_status(status, getattr(response, "reason", ""))
                data = self._read_bounded(response)
        except urllib.error.HTTPError as e:
            self._raise_for_status(e.code, e.reason)
        except urllib.error.URLError as e:
            raise DownloadError(f"Failed to download repository: {e.reason}") from e
        except TimeoutError as e:
            raise DownloadError(
                f"Failed to download repository: timed out after {self.config.timeout}s"
            ) from e
        except (OSError, http.client.HTTPException) as e:
            raise DownloadError(f"Failed to download repository: {e!r}") from e

        logger.info("Downloaded %s (%d bytes)", reference.full_name, len(data))
        return data

    def accept_upload(self, data: bytes, filename: str | None = None) -> bytes:
        """Validate uploaded archive bytes.

        Args:
            data: Uploaded bytes
            filename: Upload filename, for messages only

        Returns:
            The same bytes

        Raises:
            InvalidArchiveError: If the upload is empty or too large
        """
        label = filename or "upload"
        if not isinstance(data, (bytes, bytearray)) or not data:
            raise InvalidArchiveError(f"Invalid file upload: {label} is empty")
        if self.max_upload_bytes and len(data) > self.max_upload_bytes:
            raise InvalidArchiveError(
                f"Invalid file upload: {label} is {len(data)} bytes "
                f"(limit {self.max_upload_bytes})"
            )
        logger.info("Accepted upload %s (%d bytes)", label, len(data))
        return bytes(data)

    def _read_bounded(self, response: Any) -> bytes:
        """Read a response body, enforcing max_download_bytes when set."""
        limit = self.config.max_download_bytes
        chunks: list[bytes] = []
        total = 0
        while True:
            chunk = response.read(CHUNK_SIZE)
            if not chunk:
                break
            total += len(chunk)
            if limit and total > limit:
                raise DownloadError(
                    f"Failed to download repository: archive exceeds {limit} bytes"
                )
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def _raise_for_status(status: int, reason: str) -> None:
        """Translate a non-success status into the matching error."""
        if status in RATE_LIMIT_STATUSES:
            raise RateLimitedError(status)
        raise DownloadError(
            f"Failed to download repository: {status} {reason}".rstrip(),
            status=status,
        )
