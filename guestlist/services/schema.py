"""Header-driven column resolution for the guest sheet."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from guestlist.core.constants import ID_COLUMN, LOGICAL_COLUMNS
from guestlist.core.exceptions import SchemaError
from guestlist.core.utils import cell_text

ABSENT = -1


def normalize_header(value: Any) -> str:
    """Trim and lowercase a header cell."""
    return cell_text(value).strip().lower()


@dataclass(frozen=True)
class ColumnMap:
    """Logical column name -> zero-based column index (ABSENT when missing)."""

    indices: Dict[str, int] = field(default_factory=dict)

    def index(self, name: str) -> int:
        return self.indices.get(name, ABSENT)

    def has(self, name: str) -> bool:
        return self.index(name) != ABSENT

    def require(self, name: str, message: str) -> int:
        """Return the index of ``name`` or raise SchemaError(message)."""
        idx = self.index(name)
        if idx == ABSENT:
            raise SchemaError(message)
        return idx

    def value(self, row: Sequence[Any], name: str) -> str:
        """
        Read the cell for ``name`` from a data row.

        Absent columns and cells past the end of a short row read as ''.
        """
        idx = self.index(name)
        if idx == ABSENT or idx >= len(row):
            return ""
        return cell_text(row[idx])


@dataclass(frozen=True)
class ResolvedTable:
    headers: List[str]
    data_rows: List[Sequence[Any]]
    column_map: ColumnMap


def build_column_map(headers: Sequence[str]) -> ColumnMap:
    """Map each known logical name to the first header position carrying it."""
    indices = {}
    for position, header in enumerate(headers):
        if header in LOGICAL_COLUMNS and header not in indices:
            indices[header] = position
    return ColumnMap(indices=indices)


def resolve(grid: Sequence[Sequence[Any]]) -> ResolvedTable:
    """
    Split a fetched grid into normalized headers, data rows and a column map.

    Args:
        grid: Rows of cell values as returned by the store; row 0 is the header

    Returns:
        ResolvedTable with lowercased headers, the rows after the header and
        the column map

    Raises:
        SchemaError: If the header row has no ``id`` column
    """
    header_row = grid[0] if grid else []
    headers = [normalize_header(h) for h in header_row]
    column_map = build_column_map(headers)

    if not column_map.has(ID_COLUMN):
        raise SchemaError("required identifier column missing")

    return ResolvedTable(
        headers=headers,
        data_rows=list(grid[1:]),
        column_map=column_map,
    )
