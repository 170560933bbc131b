"""Unit tests for gemmkit.textio parsing and formatting."""

import numpy as np
import pytest

from gemmkit import Matrix
from gemmkit.errors import ParseError, ShapeError
from gemmkit.textio import format_matrix, format_value, parse_matrix, read_matrix


class TestParse:
    """Tests for parse_matrix."""

    def test_basic(self) -> None:
        """Rows are lines and elements are whitespace separated."""
        result = parse_matrix("1 2 3\n4\t5   6\n")
        assert result.dtype == np.float32
        np.testing.assert_array_equal(result, [[1, 2, 3], [4, 5, 6]])

    def test_blank_lines_ignored(self) -> None:
        """Blank and whitespace-only lines between and around rows are skipped."""
        result = parse_matrix("\n1 2\n\n   \n3 4\n\n")
        np.testing.assert_array_equal(result, [[1, 2], [3, 4]])

    def test_float_syntax(self) -> None:
        """Signs, decimals and exponents are accepted."""
        np.testing.assert_array_equal(parse_matrix("-0.5 1e3 +2"), [[-0.5, 1000, 2]])

    def test_invalid_token_location(self) -> None:
        """ParseError reports the 0-based row and column of the first bad token."""
        with pytest.raises(ParseError) as exc_info:
            parse_matrix("1 2 3\n4 five 6\n7 8 x\n")
        assert exc_info.value.row == 1
        assert exc_info.value.col == 1
        assert exc_info.value.token == "five"
        assert "row 1 col 1" in str(exc_info.value)

    def test_row_count_skips_blank_lines(self) -> None:
        """Blank lines do not count towards the reported row."""
        with pytest.raises(ParseError) as exc_info:
            parse_matrix("1 2\n\n\n3 ?\n")
        assert (exc_info.value.row, exc_info.value.col) == (1, 1)

    def test_parse_error_chains_cause(self) -> None:
        """The underlying numeric error is chained as __cause__."""
        with pytest.raises(ParseError) as exc_info:
            parse_matrix("abc")
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert isinstance(exc_info.value, ValueError)

    @pytest.mark.parametrize("token", ["1_000", "1_0.5", "2e1_0"])
    def test_digit_separators_rejected(self, token: str) -> None:
        """Underscore digit separators are a ParseError at the token's position."""
        with pytest.raises(ParseError) as exc_info:
            parse_matrix(f"1 2\n3 {token}\n")
        assert (exc_info.value.row, exc_info.value.col) == (1, 1)
        assert exc_info.value.token == token

    @pytest.mark.parametrize("text", ["", "\n\n", "   \n"])
    def test_empty(self, text: str) -> None:
        """Input without rows raises ShapeError."""
        with pytest.raises(ShapeError):
            parse_matrix(text)

    def test_jagged(self) -> None:
        """Rows of unequal length raise ShapeError."""
        with pytest.raises(ShapeError, match="Row 1"):
            parse_matrix("1 2\n3\n")

    def test_read_matrix(self, tmp_path) -> None:
        """read_matrix parses a file from disk."""
        path = tmp_path / "a.txt"
        path.write_text("1 2\n3 4\n")
        np.testing.assert_array_equal(read_matrix(path), [[1, 2], [3, 4]])

    def test_read_missing_file(self, tmp_path) -> None:
        """A missing file surfaces as OSError."""
        with pytest.raises(OSError):
            read_matrix(tmp_path / "missing.txt")


class TestFormat:
    """Tests for format_matrix and format_value."""

    def test_rows_end_with_newline(self) -> None:
        """Each row is space-joined and newline-terminated."""
        assert format_matrix(np.array([[19, 22], [43, 50]], dtype=np.float32)) == "19 22\n43 50\n"

    @pytest.mark.parametrize("value, text", [(3.0, "3"), (-2.0, "-2"), (0.5, "0.5"), (0.1, "0.1"), (1.25, "1.25")])
    def test_format_value(self, value: float, text: str) -> None:
        """Integral values drop the fraction; others use the shortest float32 repr."""
        assert format_value(np.float32(value)) == text

    def test_negative_zero_keeps_sign(self) -> None:
        """-0.0 is not collapsed to 0 and parses back with its sign."""
        text = format_value(np.float32(-0.0))
        assert text == "-0.0"
        assert np.signbit(parse_matrix(text)[0, 0])

    @pytest.mark.parametrize("value, text", [(1e30, "1e+30"), (-3e10, "-3e+10"), (2.0**24, "16777216.0")])
    def test_large_integral_values_use_float_repr(self, value: float, text: str) -> None:
        """Integral values at or beyond 2**24 render as floats, not long digit strings."""
        assert format_value(np.float32(value)) == text

    def test_largest_exact_integer(self) -> None:
        """Integers just below 2**24 still render without a fraction."""
        assert format_value(np.float32(2**24 - 1)) == "16777215"

    def test_integer_round_trip(self, rng) -> None:
        """Formatting then parsing an integer-valued matrix reproduces it exactly."""
        original = Matrix.from_host(rng.integers(-1000, 1000, size=(4, 7)).astype(np.float32))
        assert Matrix.from_text(str(original)) == original

    def test_fractional_round_trip(self) -> None:
        """Shortest float32 reprs parse back to the same float32 values."""
        original = np.array([[0.1, 1 / 3], [2.5e-8, -7.75]], dtype=np.float32)
        np.testing.assert_array_equal(parse_matrix(format_matrix(original)), original)
