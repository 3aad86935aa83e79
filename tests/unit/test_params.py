"""Unit tests for path id parsing."""
import pytest

from album_server.utils.params import SQLITE_MAX_INT, parse_id


class TestParseId:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1", 1),
            ("42", 42),
            ("007", 7),
            ("+3", 3),
            ("-4", -4),
            (" 12 ", 12),
            (str(SQLITE_MAX_INT), SQLITE_MAX_INT),
        ],
    )
    def test_valid_integers(self, raw: str, expected: int):
        assert parse_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "1.5", "0x1", "1e3", "+", "-", "12abc", "١٢", str(SQLITE_MAX_INT + 1)],
    )
    def test_invalid_values_become_zero(self, raw: str):
        assert parse_id(raw) == 0
