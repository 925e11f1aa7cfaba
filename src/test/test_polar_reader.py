"""
Test polar file reading: delimiter detection, tokenizing, metadata.
"""

import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.errors import PolarParseError
from core.io import (
    DelimiterKind, PolarFileParser, MetadataExtractor, QBLADE_PLR,
    detect_delimiter, reynolds_from_filename,
)
from plr_samples import plr_lines, write_plr


class TestDelimiterDetector:
    """Test detect_delimiter."""

    def test_tab_line(self, tmp_path):
        path = write_plr(tmp_path / "a.plr", [[0.0, 0.1, 0.01, 0.0]], delimiter="\t")
        result = detect_delimiter(path)
        assert result.value is DelimiterKind.TAB
        assert not result.is_fallback

    def test_space_line(self, tmp_path):
        path = write_plr(tmp_path / "a.plr", [[0.0, 0.1, 0.01, 0.0]], delimiter="   ")
        result = detect_delimiter(path)
        assert result.value is DelimiterKind.SPACE
        assert not result.is_fallback

    def test_missing_file_falls_back_to_space(self, tmp_path):
        result = detect_delimiter(tmp_path / "missing.plr")
        assert result.value is DelimiterKind.SPACE
        assert result.is_fallback

    def test_short_file_falls_back_to_space(self, tmp_path):
        path = tmp_path / "short.plr"
        path.write_text("only\nthree\nlines\n", encoding="utf-8")
        result = detect_delimiter(path)
        assert result.value is DelimiterKind.SPACE
        assert "line 18" in result.fallback_reason


class TestPolarFileParser:
    """Test PolarFileParser."""

    def test_repeated_spaces_collapse(self):
        parser = PolarFileParser()
        a = parser.parse_lines(plr_lines([["1.0   2.0   3.0    4.0"]]), DelimiterKind.SPACE)
        b = parser.parse_lines(plr_lines([["1.0 2.0 3.0 4.0"]]), DelimiterKind.SPACE)
        np.testing.assert_array_equal(a, b)
        np.testing.assert_array_equal(a, [[1.0, 2.0, 3.0, 4.0]])

    def test_repeated_tabs_collapse(self):
        parser = PolarFileParser()
        table = parser.parse_lines(plr_lines([[1, 2, 3, 4]], delimiter="\t\t"), DelimiterKind.TAB)
        np.testing.assert_array_equal(table, [[1.0, 2.0, 3.0, 4.0]])

    def test_seven_columns(self, tmp_path):
        rows = [[-10, -0.8, 0.02, 0.01, 1, 2, 3], [10, 0.8, 0.02, -0.01, 4, 5, 6]]
        path = write_plr(tmp_path / "a.plr", rows)
        table = PolarFileParser().parse(path, DelimiterKind.SPACE)
        assert table.shape == (2, 7)
        np.testing.assert_array_equal(table[:, 0], [-10.0, 10.0])

    def test_extra_columns_dropped(self):
        lines = plr_lines([[1, 2, 3, 4, 5, 6, 7, 8, 9]])
        table = PolarFileParser().parse_lines(lines, DelimiterKind.SPACE)
        assert table.shape == (1, 7)

    def test_header_skipped_even_if_numeric(self):
        lines = plr_lines([[5, 6, 7, 8]])
        lines[16] = "1 2 3 4"
        table = PolarFileParser().parse_lines(lines, DelimiterKind.SPACE)
        np.testing.assert_array_equal(table, [[5.0, 6.0, 7.0, 8.0]])

    def test_blank_lines_skipped(self):
        lines = plr_lines([[1, 2, 3, 4]]) + ["", "   ", "2 3 4 5"]
        table = PolarFileParser().parse_lines(lines, DelimiterKind.SPACE)
        assert table.shape == (2, 4)

    def test_bad_token_stops_tokenizing(self):
        lines = plr_lines([[1, 2, 3, 4], [2, 3, "x", 5], [3, 4, 5, 6]])
        table = PolarFileParser().parse_lines(lines, DelimiterKind.SPACE)
        np.testing.assert_array_equal(table, [[1.0, 2.0, 3.0, 4.0]])

    def test_ragged_rows_padded_with_nan(self):
        lines = plr_lines([[1, 2, 3, 4], [2, 3, 4]])
        table = PolarFileParser().parse_lines(lines, DelimiterKind.SPACE)
        assert table.shape == (2, 4)
        assert np.isnan(table[1, 3])

    def test_nan_and_inf_tokens_parse(self):
        lines = plr_lines([["1", "nan", "inf", "-inf"]])
        table = PolarFileParser().parse_lines(lines, DelimiterKind.SPACE)
        assert np.isnan(table[0, 1])
        assert np.isinf(table[0, 2])

    def test_too_short_for_header(self):
        with pytest.raises(PolarParseError, match="header"):
            PolarFileParser().parse_lines(["a"] * 16, DelimiterKind.SPACE)

    def test_no_numeric_rows(self):
        with pytest.raises(PolarParseError, match="no numeric"):
            PolarFileParser().parse_lines(plr_lines([["alpha", "cl"]]), DelimiterKind.SPACE)

    def test_header_only_is_failure(self):
        with pytest.raises(PolarParseError):
            PolarFileParser().parse_lines(plr_lines([]), DelimiterKind.SPACE)

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(PolarParseError, match="Cannot read"):
            PolarFileParser().parse(tmp_path / "missing.plr", DelimiterKind.SPACE)


class TestMetadataExtractor:
    """Test Reynolds and label extraction."""

    def test_reynolds_second_token(self):
        lines = plr_lines([], reynolds_line="1 2500000 foo")
        result = MetadataExtractor().reynolds(lines)
        assert result.value == pytest.approx(2.5)
        assert not result.is_fallback

    def test_reynolds_single_token(self):
        lines = plr_lines([], reynolds_line="1")
        result = MetadataExtractor().reynolds(lines)
        assert result.value == 1.0
        assert result.is_fallback

    def test_reynolds_non_numeric(self):
        lines = plr_lines([], reynolds_line="Re abc")
        result = MetadataExtractor().reynolds(lines)
        assert result.value == 1.0
        assert result.is_fallback

    def test_reynolds_non_positive(self):
        lines = plr_lines([], reynolds_line="1 -5")
        assert MetadataExtractor().reynolds(lines).value == 1.0

    def test_reynolds_missing_line(self):
        assert MetadataExtractor().reynolds(["a"] * 5).is_fallback

    def test_label_with_separator(self):
        lines = plr_lines([], label_line="  POLARNAME  -  NACA0012  ")
        result = MetadataExtractor().label(lines, default="file")
        assert result.value == "NACA0012"
        assert not result.is_fallback

    def test_label_without_separator(self):
        lines = plr_lines([], label_line="POLARNAME DU21_A17")
        assert MetadataExtractor().label(lines, default="file").value == "DU21_A17"

    def test_label_no_match(self):
        lines = plr_lines([], label_line="something else")
        result = MetadataExtractor().label(lines, default="my_polar")
        assert result.value == "my_polar"
        assert result.is_fallback

    def test_label_empty_value(self):
        lines = plr_lines([], label_line="POLARNAME  -   ")
        assert MetadataExtractor().label(lines, default="x").value == "x"

    def test_label_missing_line(self):
        assert MetadataExtractor().label(["a"] * 3, default="x").value == "x"

    def test_format_offsets(self):
        assert QBLADE_PLR.first_data_line == 18
        assert QBLADE_PLR.label_line == 10
        assert QBLADE_PLR.reynolds_line == 14


class TestFilenameReynolds:

    def test_thousands_to_millions(self):
        assert reynolds_from_filename("NACA0012_Re500.000_M0.00.plr") == pytest.approx(0.5)

    def test_no_token(self):
        assert reynolds_from_filename("NACA0012.plr") is None
