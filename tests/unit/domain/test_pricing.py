"""Unit tests for price list input normalization."""

import pytest

from src.domain.pricing import parse_status, reject_boolean, split_comma_list


@pytest.mark.unit
class TestSplitCommaList:
    """Comma-separated list parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("a, b", ["a", "b"]),
            ("  single  ", ["single"]),
            ("a,,b", ["a", "b"]),
            ("a, ,b,", ["a", "b"]),
            ([" a ", "b"], ["a", "b"]),
        ],
    )
    def test_splits_and_trims(self, value: str | list[str], expected: list[str]) -> None:
        assert split_comma_list(value) == expected

    @pytest.mark.parametrize("value", ["", " , ,", []])
    def test_rejects_empty_result(self, value: str | list[str]) -> None:
        with pytest.raises(ValueError, match="at least one item"):
            split_comma_list(value)

    @pytest.mark.parametrize("value", [None, 5, {"a": 1}])
    def test_rejects_non_text(self, value: object) -> None:
        with pytest.raises(ValueError, match="comma-separated string"):
            split_comma_list(value)

    def test_rejects_non_string_items(self) -> None:
        with pytest.raises(ValueError, match="items must be strings"):
            split_comma_list(["a", 1])


@pytest.mark.unit
class TestParseStatus:
    """Status flag parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("true", True), ("false", False), (True, True), (False, False)],
    )
    def test_accepts_literals(self, value: object, expected: bool) -> None:
        assert parse_status(value) is expected

    @pytest.mark.parametrize("value", ["maybe", "True", "1", 1, None, ""])
    def test_rejects_anything_else(self, value: object) -> None:
        with pytest.raises(ValueError, match='"true" or "false"'):
            parse_status(value)


@pytest.mark.unit
class TestRejectBoolean:
    """Price input guard."""

    @pytest.mark.parametrize("value", [True, False])
    def test_rejects_booleans(self, value: bool) -> None:
        with pytest.raises(ValueError, match="number or numeric string"):
            reject_boolean(value)

    @pytest.mark.parametrize("value", [12.5, 3, "1500.50"])
    def test_passes_numbers_through(self, value: object) -> None:
        assert reject_boolean(value) == value
