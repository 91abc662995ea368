"""Linear lookup of a guest record by identifier."""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from guestlist.core.constants import (
    CHECKED_AT_COLUMN,
    CHECKED_COLUMN,
    CHECKED_VALUES,
    EMAIL_COLUMN,
    FIRST_DATA_ROW_NUMBER,
    ID_COLUMN,
    TEAMNAME_COLUMN,
    TSHIRT_COLUMN,
    USERNAME_COLUMN,
)
from guestlist.services.schema import ColumnMap


def is_checked_value(raw: str) -> bool:
    """True when a raw ``checked`` cell means the guest is already in."""
    return raw.lower() in CHECKED_VALUES


@dataclass(frozen=True)
class Record:
    """One guest row, materialized from a freshly fetched grid."""

    identifier: str
    email: str
    username: str
    team_name: str
    tshirt: str
    checked: str
    checked_at: str
    row_number: int  # 1-based sheet row, header is row 1

    @property
    def is_checked(self) -> bool:
        return is_checked_value(self.checked)

    def profile(self) -> Dict[str, str]:
        return {
            "email": self.email,
            "username": self.username,
            "team_name": self.team_name,
            "tshirt": self.tshirt,
        }


def record_from_row(row: Sequence[Any], column_map: ColumnMap, row_number: int) -> Record:
    return Record(
        identifier=column_map.value(row, ID_COLUMN).strip(),
        email=column_map.value(row, EMAIL_COLUMN),
        username=column_map.value(row, USERNAME_COLUMN),
        team_name=column_map.value(row, TEAMNAME_COLUMN),
        tshirt=column_map.value(row, TSHIRT_COLUMN),
        checked=column_map.value(row, CHECKED_COLUMN),
        checked_at=column_map.value(row, CHECKED_AT_COLUMN),
        row_number=row_number,
    )


def locate(
    data_rows: Sequence[Sequence[Any]],
    column_map: ColumnMap,
    target_id: str,
) -> Optional[Record]:
    """
    Find the first data row whose ``id`` cell equals ``target_id``.

    Both sides are whitespace-trimmed and compared as exact strings. Duplicate
    identifiers are not an error; the earliest row wins. A blank target never
    matches, even against rows with a blank id cell.

    Returns:
        The matching Record, or None when no row matches
    """
    target = target_id.strip()
    if not target:
        return None
    for offset, row in enumerate(data_rows):
        if column_map.value(row, ID_COLUMN).strip() == target:
            return record_from_row(row, column_map, FIRST_DATA_ROW_NUMBER + offset)
    return None
