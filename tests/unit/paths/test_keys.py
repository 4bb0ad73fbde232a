"""Unit tests for the parameter key grammar and cache keys."""

import pytest

from pathfinder.paths.keys import (
    CACHE_KEY_LENGTH,
    cache_key_of,
    is_valid_key,
    split_leading_key,
)


class TestIsValidKey:
    """Tests for is_valid_key function."""

    @pytest.mark.parametrize(
        "key",
        ["app.storage", "dir.root", "a.b.c", "my-app.cache_dir", "App2.Dir9"],
    )
    def test_valid_keys(self, key: str) -> None:
        """Dotted keys of letters, digits, '-' and '_' are valid."""
        assert is_valid_key(key) is True

    @pytest.mark.parametrize(
        "key",
        [
            "",
            "storage",  # no period
            ".storage",  # leading period
            "storage.",  # trailing period
            "app.stor age",  # whitespace
            "app.storage/cache",  # separator
            "app.%storage%",  # placeholder syntax
            "app.störage",  # non-ASCII letter
        ],
    )
    def test_invalid_keys(self, key: str) -> None:
        """Keys breaking any single rule are invalid."""
        assert is_valid_key(key) is False

    def test_slash_allowed_when_requested(self) -> None:
        """The slash variant accepts '/' inside the key."""
        assert is_valid_key("app.storage/cache", allow_slash=True) is True
        assert is_valid_key("app.storage/cache.", allow_slash=True) is False

    def test_non_string_is_invalid(self) -> None:
        """Non-string input is never a key."""
        assert is_valid_key(None) is False  # type: ignore[arg-type]


class TestSplitLeadingKey:
    """Tests for split_leading_key function."""

    def test_splits_key_and_suffix(self) -> None:
        """A leading key is separated from its suffix."""
        assert split_leading_key("app.storage/cache/data.db") == (
            "app.storage",
            "/cache/data.db",
        )

    def test_backslash_separator(self) -> None:
        """Backslashes are treated as separators."""
        assert split_leading_key("app.storage\\cache") == ("app.storage", "/cache")

    def test_bare_key(self) -> None:
        """A key without suffix gives an empty suffix."""
        assert split_leading_key("app.storage") == ("app.storage", "")

    def test_absolute_path_has_no_key(self) -> None:
        """Absolute literal paths are returned unchanged."""
        assert split_leading_key("/var/www/index.php") == (None, "/var/www/index.php")

    def test_relative_path_has_no_key(self) -> None:
        """A first segment without a period is not a key."""
        assert split_leading_key("cache\\data.db") == (None, "cache\\data.db")

    def test_dot_relative_path_has_no_key(self) -> None:
        """'./' and '../' prefixes are not keys."""
        assert split_leading_key("./assets/app.js") == (None, "./assets/app.js")
        assert split_leading_key("../assets") == (None, "../assets")

    def test_suffix_is_not_searched(self) -> None:
        """Only the first segment can be a key."""
        assert split_leading_key("cache/app.storage/x") == (None, "cache/app.storage/x")


class TestCacheKeyOf:
    """Tests for cache_key_of function."""

    def test_valid_key_is_verbatim(self) -> None:
        """A single part that is a valid key is used as-is."""
        assert cache_key_of("app.storage") == "app.storage"

    def test_parts_are_delimited(self) -> None:
        """Parts never run together into another input's key."""
        assert cache_key_of("a.b", "c.d") != cache_key_of("a.bc.d")
        assert cache_key_of("app.", "storage") != "app.storage"

    def test_pairs_do_not_collide(self) -> None:
        """Moving characters across the part boundary changes the key."""
        assert cache_key_of("/srv/app", "/srv") != cache_key_of("/srv/app/srv")
        assert cache_key_of("/srv/a", "pp/x") != cache_key_of("/srv/ap", "p/x")

    def test_multiple_parts_are_hashed(self) -> None:
        """A multi-part key is never mistaken for a parameter key."""
        key = cache_key_of("dir.a", "dir.b")
        assert not is_valid_key(key)
        assert len(key) == CACHE_KEY_LENGTH

    def test_unsafe_input_is_hashed(self) -> None:
        """Inputs with unsafe characters become a fixed-width digest."""
        key = cache_key_of("app.storage/cache", "dir.root")
        assert len(key) == CACHE_KEY_LENGTH
        assert all(ch in "0123456789abcdef" for ch in key)

    def test_is_deterministic(self) -> None:
        """The same inputs always give the same key."""
        assert cache_key_of("/srv/app", "x") == cache_key_of("/srv/app", "x")

    def test_different_inputs_differ(self) -> None:
        """Different inputs give different keys."""
        assert cache_key_of("/srv/a") != cache_key_of("/srv/b")

    def test_hashed_when_not_readable(self) -> None:
        """readable=False hashes even valid keys."""
        key = cache_key_of("app.storage", readable=False)
        assert key != "app.storage"
        assert len(key) == CACHE_KEY_LENGTH

    def test_none_parts_are_skipped(self) -> None:
        """An absent part leaves the key unchanged."""
        assert cache_key_of("app.storage", None) == "app.storage"
        assert cache_key_of("/srv/app", None) == cache_key_of("/srv/app")

    def test_bool_parts(self) -> None:
        """False stringifies to '' and True to '1'."""
        assert cache_key_of("app.storage", False) == cache_key_of("app.storage", "")
        assert cache_key_of("app.storage", True) == cache_key_of("app.storage", "1")
        assert cache_key_of("app.storage", True) != cache_key_of("app.storage1")

    def test_int_parts(self) -> None:
        """Integers are stringified."""
        assert cache_key_of("app.v", 2) == cache_key_of("app.v", "2")
