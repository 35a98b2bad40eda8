import pytest

from app.errors import UpstreamError
from app.grid import Fill, Grid, classify_background


class TestClassifyBackground:
    def test_missing_color_is_free(self):
        assert classify_background(None) is Fill.FREE
        assert classify_background({}) is Fill.FREE

    def test_white_is_free(self):
        assert classify_background({"red": 1, "green": 1, "blue": 1}) is Fill.FREE

    def test_any_fill_is_other(self):
        assert classify_background({"red": 1, "green": 0.8}) is Fill.OTHER
        assert classify_background({"blue": 0.5}) is Fill.OTHER


class TestGrid:
    def test_rows_are_padded_to_common_width(self):
        grid = Grid.from_values([["a"], ["b", "c", "d"]])
        assert grid.width == 3
        assert grid.cells[0] == ["a", "", ""]
        assert len(grid.backgrounds[0]) == 3
        assert grid.fill(0, 2) is Fill.FREE

    def test_out_of_range_reads(self):
        grid = Grid.from_values([["a"]])
        assert grid.cell(5, 5) == ""
        assert grid.fill(5, 5) is Fill.FREE

    def test_empty_grid(self):
        grid = Grid.from_values([])
        assert grid.rows == 0
        assert grid.width == 0

    def test_from_sheet_response(self):
        payload = {
            "sheets": [
                {
                    "data": [
                        {
                            "rowData": [
                                {"values": [{"formattedValue": "NO."}, {"formattedValue": "TYPE OF CABIN"}]},
                                {},
                                {
                                    "values": [
                                        {},
                                        {
                                            "formattedValue": "x",
                                            "userEnteredFormat": {
                                                "backgroundColor": {"red": 0.9}
                                            },
                                        },
                                    ]
                                },
                            ]
                        }
                    ]
                }
            ]
        }
        grid = Grid.from_sheet_response(payload)
        assert grid.rows == 3
        assert grid.cells[1] == ["", ""]
        assert grid.cell(2, 1) == "x"
        assert grid.fill(2, 1) is Fill.OTHER
        assert grid.fill(2, 0) is Fill.FREE

    def test_missing_sheet(self):
        with pytest.raises(UpstreamError):
            Grid.from_sheet_response({})
