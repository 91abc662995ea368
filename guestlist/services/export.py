"""CSV export of the guest sheet."""
import re
from typing import Any, List, Sequence

from guestlist.core.utils import cell_text
from guestlist.services.schema import normalize_header
from guestlist.sheets.base import TableStore

_NEEDS_QUOTING = re.compile(r'[,"\r\n]')


def _quote(value: str) -> str:
    """Quote a field iff it holds a comma, quote or line break."""
    if _NEEDS_QUOTING.search(value):
        return '"' + value.replace('"', '""') + '"'
    return value


def _line(cells: Sequence[str]) -> str:
    return ",".join(_quote(cell) for cell in cells)


def to_csv(grid: Sequence[Sequence[Any]]) -> str:
    """
    Render a grid as CSV text.

    The header line uses the normalized (trimmed, lowercase) header names.
    Data rows are cut or padded to the header width. Fields containing a
    comma, quote, CR or LF are quoted with inner quotes doubled; nothing else
    is quoted, so a blank cell in a one-column sheet is an empty line. Lines
    are joined by '\\n' without a trailing newline.
    """
    if not grid:
        return ""

    headers = [normalize_header(h) for h in grid[0]]
    width = len(headers)

    lines = [_line(headers)]
    for row in grid[1:]:
        cells: List[str] = [cell_text(v) for v in row[:width]]
        cells.extend([""] * (width - len(cells)))
        lines.append(_line(cells))

    return "\n".join(lines)


def export_all(store: TableStore) -> str:
    """Fetch the current sheet and render it as CSV."""
    return to_csv(store.read_table())
