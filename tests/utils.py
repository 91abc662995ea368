"""Test helpers: an in-memory table store that records every call."""
import threading
from typing import Any, Callable, List, Optional, Tuple

from gspread.utils import a1_to_rowcol

from guestlist.core.exceptions import BackendError
from guestlist.sheets.base import Grid, InputMode, TableStore


def parse_a1(address: str) -> Tuple[int, int]:
    """'C2' -> (zero-based column 2, 1-based row 2)."""
    row_number, column = a1_to_rowcol(address)
    return column - 1, row_number


class FakeTableStore(TableStore):
    """
    In-memory guest table.

    Writes are applied to the grid the way Sheets would display them
    (USER_ENTERED booleans become "TRUE"/"FALSE") so later reads see them.
    """

    def __init__(
        self,
        grid: Optional[Grid] = None,
        fail_reads: bool = False,
        fail_writes_to: Tuple[str, ...] = (),
        on_read: Optional[Callable[[], None]] = None,
    ):
        self.grid: Grid = [list(row) for row in (grid or [])]
        self.writes: List[Tuple[str, Any, InputMode]] = []
        self.reads = 0
        self.fail_reads = fail_reads
        self.fail_writes_to = fail_writes_to
        self.on_read = on_read
        self._lock = threading.Lock()

    def read_table(self) -> Grid:
        if self.fail_reads:
            raise BackendError("simulated read failure")
        with self._lock:
            self.reads += 1
            snapshot = [list(row) for row in self.grid]
        if self.on_read is not None:
            self.on_read()
        return snapshot

    def write_cell(self, address: str, value: Any, input_mode: InputMode) -> None:
        if address in self.fail_writes_to:
            raise BackendError(f"simulated write failure at {address}")

        if input_mode is InputMode.USER_ENTERED and isinstance(value, bool):
            stored = "TRUE" if value else "FALSE"
        else:
            stored = str(value)

        column, row_number = parse_a1(address)
        with self._lock:
            self.writes.append((address, value, input_mode))
            while len(self.grid) < row_number:
                self.grid.append([])
            row = self.grid[row_number - 1]
            while len(row) <= column:
                row.append("")
            row[column] = stored

    def cell(self, address: str) -> str:
        column, row_number = parse_a1(address)
        row = self.grid[row_number - 1]
        return row[column] if column < len(row) else ""


GUESTS_GRID = [
    ["id", "email", "username", "teamName", "tShirt", "checked", "checked_at"],
    ["42", "a@x.com", "ana", "Rockets", "M", "", ""],
    ["7", "b@x.com", "bruno", "Comets", "L", "true", "2025-01-31T18:04:05.123Z"],
    ["13", "c@x.com", "carla", "Rockets, Inc", "S", "FALSE", ""],
]
