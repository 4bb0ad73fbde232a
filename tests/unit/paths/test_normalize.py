"""Unit tests for path normalization."""

import pytest

from pathfinder.exceptions import PathTooLongError
from pathfinder.paths.normalize import (
    MAX_PATH_LENGTH,
    has_wildcard,
    is_path_like,
    normalize,
)


class TestNormalize:
    """Tests for normalize function."""

    def test_joins_fragments_with_single_separator(self) -> None:
        """Stray separators between fragments collapse into one."""
        assert normalize("a/", "/b", "\\c\\") == "a/b/c"

    @pytest.mark.parametrize(
        ("fragments", "expected"),
        [
            (("a\\\\b//c",), "a/b/c"),
            (("a/\\/b",), "a/b"),
            (("./assets\\\\/scripts///example.js",), "./assets/scripts/example.js"),
            (("C:\\Users\\app", "data"), "C:/Users/app/data"),
        ],
    )
    def test_mixed_separators(self, fragments: tuple[str, ...], expected: str) -> None:
        """Any mix of slashes and backslashes becomes forward slashes."""
        assert normalize(*fragments) == expected

    def test_preserves_leading_separator(self) -> None:
        """Absolute paths keep exactly one leading separator."""
        assert normalize("//srv//app/", "cache") == "/srv/app/cache"

    def test_leading_backslash_is_absolute(self) -> None:
        """A leading backslash also marks an absolute path."""
        assert normalize("\\srv\\app") == "/srv/app"

    def test_only_first_fragment_decides_absolute(self) -> None:
        """A separator on a later fragment does not make the path absolute."""
        assert normalize("srv", "/app") == "srv/app"

    def test_trims_whitespace_around_segments(self) -> None:
        """Whitespace at segment edges is removed, inner spaces are kept."""
        assert normalize(" /srv/ my app \n", "\tcache ") == "/srv/my app/cache"

    def test_root_only(self) -> None:
        """The root path stays a single separator."""
        assert normalize("/") == "/"

    def test_empty_input(self) -> None:
        """No fragments or empty fragments produce an empty string."""
        assert normalize() == ""
        assert normalize("", "") == ""

    def test_accepts_pathlike(self, tmp_path) -> None:
        """os.PathLike fragments are accepted."""
        assert normalize(tmp_path, "x") == f"{tmp_path.as_posix()}/x"

    def test_is_deterministic(self) -> None:
        """Identical inputs give identical outputs."""
        assert normalize("a//b", "c") == normalize("a//b", "c")

    def test_raises_when_too_long(self) -> None:
        """Results over the limit minus the margin are rejected."""
        with pytest.raises(PathTooLongError) as exc_info:
            normalize("a" * 99, max_length=100)
        assert exc_info.value.length == 99
        assert exc_info.value.limit == 98

    def test_accepts_path_at_limit(self) -> None:
        """A result exactly at the limit minus the margin is accepted."""
        assert normalize("a" * 98, max_length=100) == "a" * 98

    def test_default_limit_is_host_limit(self) -> None:
        """The default limit is the host path-length limit."""
        with pytest.raises(PathTooLongError):
            normalize("x" * MAX_PATH_LENGTH)


class TestIsPathLike:
    """Tests for is_path_like function."""

    @pytest.mark.parametrize(
        "value",
        ["/srv/app", "var/cache", "C:\\data", "data.db", ".env", "..", "../up"],
    )
    def test_path_like_values(self, value: str) -> None:
        """Separators, extensions, dot files and traversal are path-like."""
        assert is_path_like(value) is True

    @pytest.mark.parametrize("value", ["", "   ", "production", "true", "v1-2"])
    def test_non_path_like_values(self, value: str) -> None:
        """Plain words are not path-like."""
        assert is_path_like(value) is False


class TestHasWildcard:
    """Tests for has_wildcard function."""

    def test_detects_star(self) -> None:
        assert has_wildcard("/srv/assets/*.js") is True

    def test_plain_path(self) -> None:
        assert has_wildcard("/srv/assets/app.js") is False
