"""
Tests for index name normalization.
"""

import pytest

from aisearch_memory.core.errors import InvalidArgumentError
from aisearch_memory.storage.index_names import normalize_index_name, MAX_INDEX_NAME_LENGTH


class TestNormalizeIndexName:
    """Tests for normalize_index_name()"""

    def test_lower_cases(self):
        assert normalize_index_name("MyIndex") == "myindex"

    @pytest.mark.parametrize("name,expected", [
        ("my index", "my-index"),
        ("my\\index", "my-index"),
        ("my/index", "my-index"),
        ("my.index", "my-index"),
        ("my_index", "my-index"),
        ("my:index", "my-index"),
        ("a\tb", "a-b"),
    ])
    def test_replaces_special_chars(self, name, expected):
        """Whitespace and \\ / . _ : become dashes"""
        assert normalize_index_name(name) == expected

    def test_trims_surrounding_whitespace(self):
        assert normalize_index_name("  notes  ") == "notes"

    def test_guards_leading_dash(self):
        assert normalize_index_name("_notes") == "z-notes"

    def test_guards_trailing_dash(self):
        assert normalize_index_name("notes.") == "notes-z"

    def test_guards_both_ends(self):
        assert normalize_index_name("-notes-") == "z-notes-z"

    @pytest.mark.parametrize("name", [
        "Notes", "_a_", "user:42/notes", "x" * MAX_INDEX_NAME_LENGTH, "- -", "already-normal",
    ])
    def test_is_idempotent(self, name):
        once = normalize_index_name(name)
        assert normalize_index_name(once) == once

    def test_equivalent_names_collide(self):
        """Different spellings can map to the same index"""
        assert normalize_index_name("the-user") == normalize_index_name("the_user")

    @pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
    def test_rejects_empty_names(self, name):
        with pytest.raises(InvalidArgumentError):
            normalize_index_name(name)

    def test_rejects_long_names(self):
        with pytest.raises(InvalidArgumentError):
            normalize_index_name("x" * (MAX_INDEX_NAME_LENGTH + 1))

    def test_accepts_max_length(self):
        assert len(normalize_index_name("x" * MAX_INDEX_NAME_LENGTH)) == MAX_INDEX_NAME_LENGTH

    def test_rejects_names_that_grow_too_long(self):
        """A dash guard pushing the name over the limit is rejected"""
        with pytest.raises(InvalidArgumentError):
            normalize_index_name("_" + "x" * (MAX_INDEX_NAME_LENGTH - 1))

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            normalize_index_name("")
