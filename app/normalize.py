"""Pure helpers that turn raw sheet cell text into cabin names, months and day spans."""
import re
from typing import NamedTuple, Optional

CABIN_PREFIX = re.compile(r"^\d+[.\-)]*")
RANGE_SPAN = re.compile(r"(\d{1,2})\s*-\s*(\d{1,2})")
SINGLE_SPAN = re.compile(r"(\d{1,2})")

# Checked in order, first hit wins. There is no January token, so
# "JANUARI"/"JANUARY" headers fall back to the query month.
MONTH_TOKENS = (
    (("FEB",), 2),
    (("MAR",), 3),
    (("APR",), 4),
    (("MEI", "MAY"), 5),
    (("JUN",), 6),
    (("JUL",), 7),
    (("AUG", "AGU"), 8),
    (("SEP",), 9),
    (("OCT", "OKT"), 10),
    (("NOV",), 11),
    (("DEC", "DES"), 12),
)


class DaySpan(NamedTuple):
    start: int
    end: int

    def covers(self, day: int) -> bool:
        # end < start is how the sheet writes a single departure day.
        if self.end < self.start:
            return day == self.start
        return self.start <= day <= self.end


def normalize_cabin_name(text) -> Optional[str]:
    """Strip a ``12.``/``3-``/``4)`` numbering prefix and fix the casing.

    ``"12. Deluxe CABIN"`` becomes ``"Deluxe cabin"``: first character upper,
    the rest lower.
    """
    if not text:
        return None
    clean = CABIN_PREFIX.sub("", str(text)).strip()
    if not clean:
        return None
    return clean[0].upper() + clean[1:].lower()


def parse_day_span(text) -> Optional[DaySpan]:
    if not text:
        return None
    value = str(text).strip()

    match = RANGE_SPAN.fullmatch(value)
    if match:
        return DaySpan(int(match.group(1)), int(match.group(2)))

    match = SINGLE_SPAN.fullmatch(value)
    if match:
        day = int(match.group(1))
        return DaySpan(day, day)
    return None


def detect_month_from_text(text) -> Optional[int]:
    if not text:
        return None
    upper = str(text).upper()
    for tokens, month in MONTH_TOKENS:
        if any(token in upper for token in tokens):
            return month
    return None
