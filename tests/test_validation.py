"""Tests for pricetag.services.validation."""

import pytest

from pricetag.core.exceptions import ErrorKind
from pricetag.services.validation import (
    FALLBACK_HEIGHT,
    FALLBACK_WIDTH,
    MAX_HEIGHT,
    MAX_WIDTH,
    sanitize_product_id,
    validate_height,
    validate_product_id,
    validate_width,
)

# =============================================================================
# Product id
# =============================================================================

class TestValidateProductId:

    @pytest.mark.parametrize(
        "raw",
        ["sku-123", "SKU_456", "a", "0", "-", "_", "abcXYZ019-_"],
    )
    def test_allowed_ids_pass_unchanged(self, raw: str):
        result = validate_product_id(raw)
        assert result.ok
        assert result.value == raw

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "../etc/passwd",
            "sku 123",
            " sku",
            "sku.123",
            "sku/123",
            "sku%2F",
            "ünïcode",
            "sku\n",
            "<script>",
            "!!!",
        ],
        ids=[
            "empty", "traversal", "space", "leading-space", "dot", "slash",
            "percent", "unicode", "newline", "markup", "only-disallowed",
        ],
    )
    def test_disallowed_ids_rejected(self, raw: str):
        result = validate_product_id(raw)
        assert not result.ok
        assert result.error is ErrorKind.INVALID_ID
        assert result.value is None

    def test_none_rejected(self):
        assert validate_product_id(None).error is ErrorKind.INVALID_ID

    def test_sanitize_strips_disallowed(self):
        assert sanitize_product_id("../etc/passwd") == "etcpasswd"


# =============================================================================
# Width / height
# =============================================================================

class TestValidateWidth:

    @pytest.mark.parametrize("raw", [1, 2, 999, 1000, 1999, 2000])
    def test_in_range_int(self, raw: int):
        assert validate_width(raw).value == raw

    @pytest.mark.parametrize(
        "raw, expected",
        [("1", 1), ("2000", 2000), (" 640 ", 640), ("+12", 12), ("007", 7)],
    )
    def test_in_range_string(self, raw: str, expected: int):
        assert validate_width(raw).value == expected

    @pytest.mark.parametrize(
        "raw",
        [0, 2001, -5, "0", "2001", "5000", "-1", "abc", "", "12px", "1.5", "1e3", "1_000", True],
    )
    def test_rejected(self, raw):
        result = validate_width(raw)
        assert result.error is ErrorKind.INVALID_WIDTH

    def test_overlong_digit_string_rejected(self):
        assert validate_width("9" * 5000).error is ErrorKind.INVALID_WIDTH
        assert validate_width("-" + "9" * 5000).error is ErrorKind.INVALID_WIDTH

    def test_leading_zeros_do_not_count_as_digits(self):
        assert validate_width("0" * 5000 + "640").value == 640

    def test_absent_uses_fallback(self):
        assert validate_width(None).value == FALLBACK_WIDTH == 1000

    def test_custom_bounds(self):
        assert validate_width("300", max_width=300).ok
        assert validate_width("301", max_width=300).error is ErrorKind.INVALID_WIDTH
        assert validate_width(None, fallback=42).value == 42

    def test_bound_constant(self):
        assert MAX_WIDTH == 2000


class TestValidateHeight:

    @pytest.mark.parametrize("raw", [1, 500, 1000, "1000"])
    def test_in_range(self, raw):
        assert validate_height(raw).value == int(raw)

    @pytest.mark.parametrize("raw", [0, 1001, "1001", "tall", ""])
    def test_rejected(self, raw):
        assert validate_height(raw).error is ErrorKind.INVALID_HEIGHT

    def test_absent_uses_fallback_above_bound(self):
        result = validate_height(None)
        assert result.ok
        assert result.value == FALLBACK_HEIGHT == 1415
        assert FALLBACK_HEIGHT > MAX_HEIGHT

    def test_overlong_digit_string_rejected(self):
        assert validate_height("9" * 5000).error is ErrorKind.INVALID_HEIGHT
