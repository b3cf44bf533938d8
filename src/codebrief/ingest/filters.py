"""Path filtering for archive entries.

Decides from the path alone whether an archive member belongs in the corpus.
There is no include-list: anything not excluded is included.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

# Directories never worth sending to the model (dependencies, VCS, build output)
IGNORED_DIRS: frozenset[str] = frozenset(
    {
        "node_modules",
        ".git",
        ".github",
        ".vscode",
        ".idea",
        "dist",
        "build",
        ".next",
        "coverage",
        "__pycache__",
    }
)

# Lockfiles: large, generated, no design signal
IGNORED_FILES: frozenset[str] = frozenset(
    {
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "bun.lockb",
        "cargo.lock",
        "gemfile.lock",
        "composer.lock",
    }
)

# Binary formats, compared against the lower-cased extension
IGNORED_EXTENSIONS: frozenset[str] = frozenset(
    {
        # images
        ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".webp",
        # audio / video
        ".mp4", ".webm", ".mp3", ".wav", ".ogg",
        # documents
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
        # archives
        ".zip", ".tar", ".gz", ".7z", ".rar",
        # native binaries
        ".exe", ".dll", ".so", ".dylib", ".bin",
        # fonts
        ".eot", ".ttf", ".woff", ".woff2",
        # macOS folder metadata (".DS_Store" has no stem)
        ".ds_store",
    }
)


def split_path(name: str) -> tuple[str, ...]:
    """Split an archive member name into path segments.

    Empty segments (leading, trailing or doubled slashes) are dropped.

    Args:
        name: Member name using "/" separators

    Returns:
        Tuple of path segments
    """
    return tuple(part for part in name.replace("\\", "/").split("/") if part)


def get_extension(basename: str) -> str:
    """Return the lower-cased extension from the last dot, or "" if none."""
    dot = basename.rfind(".")
    if dot == -1:
        return ""
    return basename[dot:].lower()


@dataclass(frozen=True)
class FilterRuleSet:
    """Static exclusion rules consulted by should_include.

    Attributes:
        ignored_dirs: Directory names excluded anywhere in the path (case-sensitive)
        ignored_files: Basenames excluded exactly (case-sensitive)
        ignored_extensions: Extensions excluded (case-insensitive)
    """

    ignored_dirs: frozenset[str] = IGNORED_DIRS
    ignored_files: frozenset[str] = IGNORED_FILES
    ignored_extensions: frozenset[str] = IGNORED_EXTENSIONS

    def __post_init__(self) -> None:
        """Freeze the sets and normalize extensions to lower case."""
        object.__setattr__(self, "ignored_dirs", frozenset(self.ignored_dirs))
        object.__setattr__(self, "ignored_files", frozenset(self.ignored_files))
        object.__setattr__(
            self,
            "ignored_extensions",
            frozenset(ext.lower() for ext in self.ignored_extensions),
        )

    def should_include(self, path: Sequence[str]) -> bool:
        """Classify an archive path.

        Exclusion order, first match wins:
        1. any segment is an ignored directory
        2. the basename is an ignored file
        3. the basename's extension is an ignored extension

        Args:
            path: Ordered path segments

        Returns:
            True if the entry belongs in the corpus
        """
        if not path:
            return False

        if any(segment in self.ignored_dirs for segment in path):
            return False

        basename = path[-1]
        if basename in self.ignored_files:
            return False

        extension = get_extension(basename)
        if extension and extension in self.ignored_extensions:
            return False

        return True

    def extend(
        self,
        dirs: Iterable[str] = (),
        files: Iterable[str] = (),
        extensions: Iterable[str] = (),
    ) -> "FilterRuleSet":
        """Return a new rule set with additional exclusions."""
        return FilterRuleSet(
            ignored_dirs=self.ignored_dirs | frozenset(dirs),
            ignored_files=self.ignored_files | frozenset(files),
            ignored_extensions=self.ignored_extensions | frozenset(extensions),
        )


DEFAULT_RULES = FilterRuleSet()


def should_include(path: Sequence[str], rules: FilterRuleSet = DEFAULT_RULES) -> bool:
    """Classify an archive path with the given (default) rules."""
    return rules.should_include(path)
