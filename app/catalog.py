"""Parsers for the header-keyed "Cabin Detail" and "Ship Detail" sheets."""
import re
from typing import Dict, List, Optional, Sequence, TypeVar
from urllib.parse import parse_qs, urlparse

from app.models import CabinDetail, ShipDetail

URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
DRIVE_FILE_PATH = re.compile(r"/file/d/([A-Za-z0-9_-]+)")
DRIVE_VIEW_URL = "https://drive.google.com/uc?export=view&id={file_id}"

T = TypeVar("T")


def _to_int(value: Optional[str]) -> int:
    if not value:
        return 0
    try:
        return int(float(value.replace(",", ".")))
    except (ValueError, OverflowError):
        return 0


def _digits(value: Optional[str]) -> int:
    digits = re.sub(r"[^\d]", "", value or "")
    return int(digits) if digits else 0


def _records(rows: Sequence[Sequence]) -> List[Dict[str, str]]:
    """Key every data row by its lower-cased header, dropping empty cells."""
    if not rows or len(rows) < 2:
        return []

    headers = [str(h or "").strip().lower() for h in rows[0]]
    records = []
    for row in rows[1:]:
        record = {}
        for idx, header in enumerate(headers):
            value = str(row[idx]).strip() if idx < len(row) and row[idx] is not None else ""
            if header and value:
                record[header] = value
        records.append(record)
    return records


def _image_urls(record: Dict[str, str]) -> List[str]:
    return [value for value in record.values() if URL_PATTERN.match(value)]


def drive_image_url(url: str) -> str:
    """Rewrite Google Drive share links into a direct-view image URL."""
    parsed = urlparse(url)
    if "drive.google.com" not in parsed.netloc:
        return url

    match = DRIVE_FILE_PATH.search(parsed.path)
    if match:
        return DRIVE_VIEW_URL.format(file_id=match.group(1))

    file_ids = parse_qs(parsed.query).get("id")
    if file_ids and file_ids[0]:
        return DRIVE_VIEW_URL.format(file_id=file_ids[0])
    return url


def parse_cabin_details(rows: Sequence[Sequence]) -> List[CabinDetail]:
    details = []
    for record in _records(rows):
        cabin_name = record.get("name cabin")
        if not cabin_name:
            continue

        capacity = _to_int(record.get("base capacity")) + _to_int(
            record.get("extra pax capacity")
        )
        if not capacity:
            capacity = _to_int(record.get("total capacity") or record.get("capacity"))

        images = _image_urls(record)
        details.append(
            CabinDetail(
                api_name=record.get("name cabin api", "").upper().strip(),
                cabin_name=cabin_name,
                operator=record.get("name boat") or "Unknown",
                description=record.get("description", ""),
                capacity=capacity,
                price=_digits(record.get("price") or record.get("komodo cruises-pricing")),
                trip_days=_to_int(record.get("trip (days)") or record.get("days")),
                images=images,
                image_main=images[0] if images else "",
            )
        )
    return details


def parse_ship_details(rows: Sequence[Sequence]) -> List[ShipDetail]:
    ships = []
    for record in _records(rows):
        name = record.get("name boat") or record.get("ship name") or record.get("name")
        if not name:
            continue

        year = _to_int(record.get("year built") or record.get("built"))
        facilities = record.get("facilities", "")
        images = [drive_image_url(url) for url in _image_urls(record)]
        ships.append(
            ShipDetail(
                name=name,
                operator=record.get("operator", name).upper(),
                description=record.get("description", ""),
                length=record.get("length", ""),
                year_built=year or None,
                capacity=_to_int(record.get("total capacity") or record.get("capacity")),
                cabin_count=_to_int(record.get("cabins") or record.get("total cabin")),
                facilities=[item.strip() for item in facilities.split(",") if item.strip()],
                images=images,
                image_main=images[0] if images else "",
            )
        )
    return ships


def find_by_name(items: Sequence[T], attr: str, name: str) -> Optional[T]:
    wanted = name.strip().upper()
    return next(
        (item for item in items if str(getattr(item, attr, "")).upper() == wanted),
        None,
    )
