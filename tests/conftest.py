import pytest
from fastapi.testclient import TestClient

from app import main
from app.cache import GridCache
from app.grid import Fill, Grid

OPERATORS = ["SEMESTA VOYAGES", "AKASSA CRUISE", "DERYA LIVEABOARD", "GIONA LIVEABOARD"]


def build_grid(rows, colored=()):
    """Grid from text rows; ``colored`` lists (row, col) cells with a non-white fill."""
    backgrounds = [
        [Fill.OTHER if (r, c) in colored else Fill.FREE for c in range(len(row))]
        for r, row in enumerate(rows)
    ]
    return Grid.from_values(rows, backgrounds)


def semesta_rows():
    return [
        ["SEMESTA VOYAGES", "", ""],
        ["", "", ""],
        ["NO.", "TYPE OF CABIN", "MAR"],
        ["NO.", "TYPE OF CABIN", "10-15"],
        ["1", "1. Ocean View", ""],
        ["", "", ""],
    ]


class FakeSheets:
    def __init__(self, grid=None, values=None):
        self.grid = grid
        self.values = values or {}
        self.grid_calls = []
        self.value_calls = []

    def fetch_grid(self, sheet_name):
        self.grid_calls.append(sheet_name)
        return self.grid

    def fetch_values(self, sheet_name):
        self.value_calls.append(sheet_name)
        return self.values.get(sheet_name, [])

    def check_connection(self):
        return {
            "connected": True,
            "spreadsheet_accessible": True,
            "spreadsheet_title": "Fake",
            "error": None,
        }


@pytest.fixture
def semesta_grid():
    return build_grid(semesta_rows())


@pytest.fixture
def fake_sheets(monkeypatch, semesta_grid):
    fake = FakeSheets(grid=semesta_grid)
    monkeypatch.setattr(main, "sheets", fake)
    monkeypatch.setattr(main, "cache", GridCache())
    monkeypatch.delenv("OPERATORS", raising=False)
    return fake


@pytest.fixture
def client():
    return TestClient(main.app)
