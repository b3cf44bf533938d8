"""Unit tests for archive path filtering."""

import pytest

from codebrief.ingest.filters import (
    DEFAULT_RULES,
    IGNORED_DIRS,
    FilterRuleSet,
    get_extension,
    should_include,
    split_path,
)


class TestSplitPath:
    """Tests for split_path."""

    def test_splits_on_slashes(self) -> None:
        assert split_path("repo-sha/src/app.py") == ("repo-sha", "src", "app.py")

    def test_drops_empty_segments(self) -> None:
        assert split_path("repo-sha//src/") == ("repo-sha", "src")

    def test_normalizes_backslashes(self) -> None:
        """Some Windows tools write backslash separators into zip files."""
        assert split_path("repo\\src\\app.py") == ("repo", "src", "app.py")


class TestGetExtension:
    """Tests for get_extension."""

    def test_lowercases(self) -> None:
        assert get_extension("Logo.PNG") == ".png"

    def test_uses_last_dot(self) -> None:
        assert get_extension("archive.tar.gz") == ".gz"

    def test_no_extension(self) -> None:
        assert get_extension("Makefile") == ""

    def test_dotfile_is_all_extension(self) -> None:
        assert get_extension(".DS_Store") == ".ds_store"


class TestShouldInclude:
    """Tests for the include/exclude decision."""

    def test_plain_source_included(self) -> None:
        assert should_include(("repo-sha", "src", "app.py")) is True

    def test_file_without_extension_included(self) -> None:
        assert should_include(("repo-sha", "Dockerfile")) is True

    @pytest.mark.parametrize("directory", sorted(IGNORED_DIRS))
    def test_ignored_directory_excluded_at_any_depth(self, directory: str) -> None:
        assert should_include(("repo-sha", "a", directory, "b", "main.py")) is False

    def test_ignored_directory_wins_over_extension(self) -> None:
        """A source file inside node_modules is excluded regardless of extension."""
        assert should_include(("repo-sha", "node_modules", "lib", "index.ts")) is False

    def test_directory_match_is_case_sensitive(self) -> None:
        assert should_include(("repo-sha", "Build", "notes.txt")) is True

    def test_directory_name_as_file_name_excluded(self) -> None:
        """Any segment counts, including the basename."""
        assert should_include(("repo-sha", "coverage")) is False

    def test_lockfile_excluded(self) -> None:
        assert should_include(("repo-sha", "package-lock.json")) is False
        assert should_include(("repo-sha", "web", "yarn.lock")) is False

    def test_lockfile_match_is_case_sensitive(self) -> None:
        assert should_include(("repo-sha", "Cargo.lock")) is True

    def test_binary_extension_excluded_case_insensitively(self) -> None:
        assert should_include(("repo-sha", "assets", "logo.PNG")) is False
        assert should_include(("repo-sha", "fonts", "Inter.woff2")) is False

    def test_ds_store_excluded(self) -> None:
        assert should_include(("repo-sha", ".DS_Store")) is False

    def test_similar_extension_not_excluded(self) -> None:
        assert should_include(("repo-sha", "src", "binary_search.py")) is True
        assert should_include(("repo-sha", "src", "image.pngx")) is True

    def test_empty_path_excluded(self) -> None:
        assert should_include(()) is False

    def test_decision_depends_only_on_path(self) -> None:
        """Same path, same answer, whatever is asked before it."""
        path = ("repo-sha", "src", "main.go")
        first = should_include(path)
        should_include(("repo-sha", "dist", "x.js"))
        assert should_include(path) == first


class TestFilterRuleSet:
    """Tests for custom rule sets."""

    def test_extensions_normalized_to_lowercase(self) -> None:
        rules = FilterRuleSet(ignored_extensions=frozenset({".LOG"}))
        assert rules.should_include(("repo", "server.log")) is False

    def test_extend_adds_rules(self) -> None:
        rules = DEFAULT_RULES.extend(dirs=["vendor"], extensions=[".min.js", ".map"])

        assert rules.should_include(("repo", "vendor", "lib.go")) is False
        assert rules.should_include(("repo", "app.js.map")) is False
        assert rules.should_include(("repo", "node_modules", "a.js")) is False
        assert DEFAULT_RULES.should_include(("repo", "vendor", "lib.go")) is True

    def test_rule_set_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_RULES.ignored_dirs = frozenset()  # type: ignore[misc]
