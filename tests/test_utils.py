"""Tests for gsloth.utils."""

from datetime import datetime

import pytest

from gsloth.utils import (
    coerce_boolean_or_string,
    file_safe_local_date,
    parse_boolean_or_string,
    to_file_safe_string,
)


class TestParseBooleanOrString:
    @pytest.mark.parametrize("raw", ["false", "FALSE", "0", "n", "No", "  no  "])
    def test_false_tokens(self, raw):
        parsed = parse_boolean_or_string(raw)
        assert parsed.kind == "boolean"
        assert parsed.value is False

    @pytest.mark.parametrize("raw", ["true", "True", "1", "y", "YES", " yes\n"])
    def test_true_tokens(self, raw):
        parsed = parse_boolean_or_string(raw)
        assert parsed.kind == "boolean"
        assert parsed.value is True

    @pytest.mark.parametrize("raw", [None, "", "   ", "\t\n"])
    def test_none(self, raw):
        parsed = parse_boolean_or_string(raw)
        assert parsed.kind == "none"
        assert parsed.value is None

    def test_other_values_are_trimmed_strings(self):
        parsed = parse_boolean_or_string("  review.md ")
        assert parsed.kind == "string"
        assert parsed.value == "review.md"

    def test_almost_boolean_is_a_string(self):
        assert parse_boolean_or_string("nope").kind == "string"

    def test_coerce_returns_value(self):
        assert coerce_boolean_or_string("no") is False
        assert coerce_boolean_or_string("out.md") == "out.md"
        assert coerce_boolean_or_string(None) is None


class TestFileSafe:
    def test_to_file_safe_string(self):
        assert to_file_safe_string("PR-42/fix bug.md") == "PR-42-fix-bug-md"

    def test_alnum_unchanged(self):
        assert to_file_safe_string("REVIEW") == "REVIEW"

    def test_file_safe_local_date(self):
        assert file_safe_local_date(datetime(2025, 1, 31, 14, 5, 9)) == "2025-01-31_14-05-09"

    def test_file_safe_local_date_defaults_to_now(self):
        assert len(file_safe_local_date()) == len("2025-01-31_14-05-09")
