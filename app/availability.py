"""Cabin availability from the operator's normalized availability sheet.

The sheet holds one sub-table per ship and month. A ship section starts at a
row whose first or second column holds the operator name. Each sub-table opens
with two consecutive ``NO. | TYPE OF CABIN`` rows: the first carries month
labels above each date column, the second the day spans (``"10-15"``). Cabin
rows follow until column B is empty. A cabin is available for a date column
when its cell is empty and has a white background.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from app.grid import Fill, Grid
from app.models import (AvailabilitySummary, CabinAvailability, OperatorSummary,
                        SearchMatch)
from app.normalize import (detect_month_from_text, normalize_cabin_name,
                           parse_day_span)

logger = logging.getLogger(__name__)

HEADER_MARKER = ("NO.", "TYPE OF CABIN")
FIRST_DATE_COLUMN = 2


@dataclass(frozen=True)
class AvailabilityBlock:
    ship: str
    month_row: int
    span_row: int
    end_row: int

    @property
    def cabin_rows(self) -> range:
        return range(self.span_row + 1, self.end_row)


def _upper(value: str) -> str:
    return (value or "").strip().upper()


def locate_ships(grid: Grid, operators: Sequence[str]) -> Tuple[Optional[str], ...]:
    """Label every row with the most recent operator name seen in column A or B."""
    labels: List[Optional[str]] = []
    current: Optional[str] = None
    for row in range(grid.rows):
        first, second = _upper(grid.cell(row, 0)), _upper(grid.cell(row, 1))
        found = next(
            (name for name in operators if first == name or second == name), None
        )
        current = found or current
        labels.append(current)
    return tuple(labels)


def _is_header(grid: Grid, row: int) -> bool:
    return (_upper(grid.cell(row, 0)), _upper(grid.cell(row, 1))) == HEADER_MARKER


def find_blocks(
    grid: Grid, ship_labels: Sequence[Optional[str]]
) -> Iterator[AvailabilityBlock]:
    for row in range(grid.rows - 1):
        if not (_is_header(grid, row) and _is_header(grid, row + 1)):
            continue

        ship = ship_labels[row]
        if not ship:
            logger.debug("Skipping header pair at row %s without a ship", row + 1)
            continue

        end_row = row + 2
        while end_row < grid.rows and grid.cell(end_row, 1):
            end_row += 1
        yield AvailabilityBlock(ship, month_row=row, span_row=row + 1, end_row=end_row)


def matching_columns(grid: Grid, block: AvailabilityBlock, target: date) -> List[int]:
    columns = []
    for col in range(FIRST_DATE_COLUMN, grid.width):
        span = parse_day_span(grid.cell(block.span_row, col))
        if span is None:
            continue
        # No month label means the column is taken to belong to the query month.
        month = detect_month_from_text(grid.cell(block.month_row, col)) or target.month
        if month != target.month:
            continue
        if span.covers(target.day):
            columns.append(col)
    return columns


def count_available(
    grid: Grid, operators: Sequence[str], target: date
) -> Dict[str, Dict[str, int]]:
    per_ship: Dict[str, Dict[str, int]] = {name: {} for name in operators}
    labels = locate_ships(grid, operators)

    for block in find_blocks(grid, labels):
        for col in matching_columns(grid, block, target):
            for row in block.cabin_rows:
                name = normalize_cabin_name(grid.cell(row, 1))
                if not name:
                    continue
                empty = grid.cell(row, col).strip() == ""
                if empty and grid.fill(row, col) is Fill.FREE:
                    counts = per_ship[block.ship]
                    counts[name] = counts.get(name, 0) + 1
    return per_ship


def summarize_by_date(
    grid: Grid, target: date, operators: Sequence[str]
) -> AvailabilitySummary:
    per_ship = count_available(grid, operators, target)

    summaries = []
    for operator in operators:
        counts = per_ship.get(operator, {})
        cabins = [
            CabinAvailability(name=name, available=counts[name])
            for name in sorted(counts)
        ]
        summaries.append(
            OperatorSummary(
                operator=operator,
                total=sum(cabin.available for cabin in cabins),
                cabins=cabins,
            )
        )
    return AvailabilitySummary(
        total=sum(summary.total for summary in summaries), operators=summaries
    )


def list_cabins_all(grid: Grid) -> List[str]:
    names = set()
    for row in range(grid.rows):
        name = normalize_cabin_name(grid.cell(row, 0)) or normalize_cabin_name(
            grid.cell(row, 1)
        )
        if name:
            names.add(name)
    return sorted(names)


def search_cabin(
    summary: AvailabilitySummary, cabin_name: str, guests: int
) -> List[SearchMatch]:
    wanted = cabin_name.upper()
    matches = []
    for operator in summary.operators:
        found = next(
            (cabin for cabin in operator.cabins if cabin.name.upper() == wanted), None
        )
        if found and found.available >= guests:
            matches.append(
                SearchMatch(operator=operator.operator, available=found.available)
            )
    return matches
