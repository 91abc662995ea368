from .checkin import (
    CheckinOutcome,
    CheckinResult,
    attempt_check_in,
    cell_address,
    check_in,
    column_letter,
)
from .export import export_all, to_csv
from .locator import Record, is_checked_value, locate
from .schema import ColumnMap, ResolvedTable, resolve

__all__ = [
    # schema
    "ColumnMap",
    "ResolvedTable",
    "resolve",
    # locator
    "Record",
    "is_checked_value",
    "locate",
    # checkin
    "CheckinOutcome",
    "CheckinResult",
    "attempt_check_in",
    "cell_address",
    "check_in",
    "column_letter",
    # export
    "export_all",
    "to_csv",
]
