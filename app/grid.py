import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from app.errors import UpstreamError


class Fill(str, enum.Enum):
    FREE = "free"
    OTHER = "other"


def classify_background(color: Optional[Dict[str, Any]]) -> Fill:
    """White (or no fill at all) means the cabin is not booked."""
    color = color or {}
    red = color.get("red") or 0
    green = color.get("green") or 0
    blue = color.get("blue") or 0
    if not red and not green and not blue:
        return Fill.FREE
    if red == 1 and green == 1 and blue == 1:
        return Fill.FREE
    return Fill.OTHER


@dataclass(frozen=True)
class Grid:
    cells: List[List[str]]
    backgrounds: List[List[Fill]]

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def cell(self, row: int, col: int) -> str:
        if row < 0 or row >= len(self.cells):
            return ""
        values = self.cells[row]
        return values[col] if 0 <= col < len(values) else ""

    def fill(self, row: int, col: int) -> Fill:
        if row < 0 or row >= len(self.backgrounds):
            return Fill.FREE
        values = self.backgrounds[row]
        return values[col] if 0 <= col < len(values) else Fill.FREE

    @classmethod
    def from_values(
        cls,
        cells: Sequence[Sequence[Any]],
        backgrounds: Optional[Sequence[Sequence[Any]]] = None,
    ) -> "Grid":
        """Build a rectangular grid; short rows are padded with empty free cells."""
        width = max((len(row) for row in cells), default=0)
        text_rows: List[List[str]] = []
        fill_rows: List[List[Fill]] = []
        for row_idx, row in enumerate(cells):
            text = ["" if value is None else str(value) for value in row]
            text_rows.append(text + [""] * (width - len(text)))

            fills = [Fill.FREE] * width
            if backgrounds is not None and row_idx < len(backgrounds):
                for col_idx, value in enumerate(backgrounds[row_idx][:width]):
                    fills[col_idx] = Fill(value) if value else Fill.FREE
            fill_rows.append(fills)
        return cls(cells=text_rows, backgrounds=fill_rows)

    @classmethod
    def from_sheet_response(cls, payload: Dict[str, Any]) -> "Grid":
        """Convert a ``spreadsheets.get(includeGridData=True)`` response."""
        sheets = payload.get("sheets") or []
        if not sheets:
            raise UpstreamError("Sheet not found")

        data = sheets[0].get("data") or [{}]
        row_data = data[0].get("rowData") or []

        cells: List[List[str]] = []
        backgrounds: List[List[Fill]] = []
        for row in row_data:
            text_row: List[str] = []
            fill_row: List[Fill] = []
            for cell in row.get("values") or []:
                text_row.append(cell.get("formattedValue") or "")
                color = (cell.get("userEnteredFormat") or {}).get("backgroundColor")
                fill_row.append(classify_background(color))
            cells.append(text_row)
            backgrounds.append(fill_row)
        return cls.from_values(cells, backgrounds)
