"""Error taxonomy for the codebrief pipeline.

Every error here is terminal for the current invocation. The CLI catches
CodebriefError and prints its message; no stage retries the whole pipeline.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from codebrief.llm.orchestrator import InferenceAttempt


class CodebriefError(Exception):
    """Base class for all pipeline errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# =============================================================================
# Acquisition
# =============================================================================


class InvalidReferenceError(CodebriefError):
    """Raised when a repository URL does not match host/owner/name."""

    def __init__(self, reference: str, message: str | None = None) -> None:
        self.reference = reference
        super().__init__(
            message
            or f"Invalid GitHub URL: {reference!r}. Must be like https://github.com/user/repo"
        )


class RateLimitedError(CodebriefError):
    """Raised when the code host refuses the download because of rate limits."""

    def __init__(self, status: int, message: str | None = None) -> None:
        self.status = status
        super().__init__(
            message
            or "GitHub API rate limit exceeded. Set GITHUB_TOKEN (or github.token "
            "in the config file) to raise the limit."
        )


class DownloadError(CodebriefError):
    """Raised when the archive cannot be downloaded."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)


class InvalidArchiveError(CodebriefError):
    """Raised when supplied bytes are not a usable zip archive."""


# =============================================================================
# Corpus
# =============================================================================


class EmptyCorpusError(CodebriefError):
    """Raised when no usable code remains after filtering."""

    def __init__(self, length: int, minimum: int) -> None:
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"No code found in the project ({length} chars, need at least {minimum}). "
            "Please check the files."
        )


# =============================================================================
# Inference
# =============================================================================


class BackendError(CodebriefError):
    """Raised by a single model backend when generation fails."""

    def __init__(self, tier: str, message: str) -> None:
        self.tier = tier
        super().__init__(message)


class AllTiersExhaustedError(CodebriefError):
    """Raised when every configured model tier failed.

    Attributes:
        attempts: One failed InferenceAttempt per tier, in tier order
    """

    def __init__(self, attempts: "list[InferenceAttempt]") -> None:
        self.attempts = list(attempts)
        details = " | ".join(f"{a.tier}: {a.error}" for a in self.attempts)
        super().__init__(f"AI model error: all models failed. {details}")


class MalformedResponseError(CodebriefError):
    """Raised when no JSON object can be recovered from a model reply.

    Attributes:
        raw_text: The unmodified model reply, kept for operator review
        parse_error: The underlying parse failure description
    """

    def __init__(self, raw_text: str, parse_error: str) -> None:
        self.raw_text = raw_text
        self.parse_error = parse_error
        super().__init__(f"Failed to parse AI response: {parse_error}")
