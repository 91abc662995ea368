"""Check-in business logic."""
from contextlib import nullcontext
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from gspread.utils import rowcol_to_a1

from guestlist.core.constants import CHECKED_AT_COLUMN, CHECKED_COLUMN, CHECKED_FLAG_VALUE
from guestlist.core.exceptions import BackendError
from guestlist.core.locks import KeyedLock
from guestlist.core.logging_config import get_logger
from guestlist.core.utils import iso_timestamp
from guestlist.services.locator import Record, locate
from guestlist.services.schema import ColumnMap, resolve
from guestlist.sheets.base import InputMode, TableStore

logger = get_logger(__name__)


class CheckinOutcome(str, Enum):
    APPLIED = "applied"
    ALREADY_CHECKED = "already_checked"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class CheckinResult:
    outcome: CheckinOutcome
    profile: Dict[str, str] = field(default_factory=dict)
    row_number: Optional[int] = None

    @property
    def applied(self) -> bool:
        return self.outcome is CheckinOutcome.APPLIED


NOT_FOUND = CheckinResult(CheckinOutcome.NOT_FOUND)


def column_letter(index: int) -> str:
    """
    Convert a zero-based column index to its A1 letters.

    Bijective base-26: 0 -> "A", 25 -> "Z", 26 -> "AA", 701 -> "ZZ".
    """
    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")
    return rowcol_to_a1(1, index + 1)[:-1]


def cell_address(column_index: int, row_number: int) -> str:
    """Single-cell A1 address from a zero-based column, e.g. (2, 5) -> "C5"."""
    if column_index < 0:
        raise ValueError(f"Column index must be non-negative, got {column_index}")
    return rowcol_to_a1(row_number, column_index + 1)


def check_in(
    store: TableStore,
    record: Optional[Record],
    column_map: ColumnMap,
    now: Optional[datetime] = None,
) -> CheckinResult:
    """
    Apply the not-checked -> checked transition to a located record.

    Writes the flag first, then the timestamp (if the sheet has a
    ``checked_at`` column), as two separate store calls. If the timestamp
    write fails the flag stays written; the guest is checked in without a
    timestamp and the BackendError propagates.

    Args:
        store: Table store to write to
        record: Located record, or None when the identifier was unknown
        column_map: Column map from the same fetch the record came from
        now: Check-in time; defaults to the wall clock at write time

    Returns:
        CheckinResult: NOT_FOUND, ALREADY_CHECKED (no writes) or APPLIED

    Raises:
        SchemaError: If the sheet has no ``checked`` column
        BackendError: If a cell write fails
    """
    if record is None:
        return NOT_FOUND

    if record.is_checked:
        logger.info("checkin_already_checked", identifier=record.identifier, row=record.row_number)
        return CheckinResult(CheckinOutcome.ALREADY_CHECKED, row_number=record.row_number)

    checked_idx = column_map.require(CHECKED_COLUMN, "checked column missing")
    store.write_cell(
        cell_address(checked_idx, record.row_number),
        CHECKED_FLAG_VALUE,
        InputMode.USER_ENTERED,
    )

    if column_map.has(CHECKED_AT_COLUMN):
        address = cell_address(column_map.index(CHECKED_AT_COLUMN), record.row_number)
        try:
            store.write_cell(address, iso_timestamp(now), InputMode.RAW)
        except BackendError:
            logger.warning(
                "checkin_partial_write",
                identifier=record.identifier,
                row=record.row_number,
                missing=CHECKED_AT_COLUMN,
            )
            raise

    logger.info("checkin_applied", identifier=record.identifier, row=record.row_number)
    return CheckinResult(
        CheckinOutcome.APPLIED,
        profile=record.profile(),
        row_number=record.row_number,
    )


def attempt_check_in(
    store: TableStore,
    identifier: str,
    locks: Optional[KeyedLock] = None,
) -> CheckinResult:
    """
    Check in the guest with ``identifier``.

    Reads the sheet, resolves its columns, finds the guest and applies the
    check-in. When ``locks`` is given the whole sequence runs under the lock
    for this identifier, so concurrent attempts in this process see each
    other's writes.

    Raises:
        SchemaError: If the header row lacks ``id`` (or ``checked`` when writing)
        BackendError: If the sheet cannot be read or written
    """
    identifier = identifier.strip()
    guard = locks.hold(identifier) if locks is not None else nullcontext()

    with guard:
        grid = store.read_table()
        if not grid:
            # No header row at all: nothing can match
            logger.info("checkin_not_found", identifier=identifier, reason="empty_sheet")
            return NOT_FOUND

        table = resolve(grid)
        record = locate(table.data_rows, table.column_map, identifier)
        if record is None:
            logger.info("checkin_not_found", identifier=identifier)
            return NOT_FOUND

        return check_in(store, record, table.column_map)
