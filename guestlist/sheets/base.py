"""Table store interface."""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List

# Rows of cell values; row 0 is the header. Rows may be ragged.
Grid = List[List[Any]]


class InputMode(str, Enum):
    """How the backend should interpret a written value."""

    USER_ENTERED = "USER_ENTERED"  # parse like typed input (TRUE becomes a boolean)
    RAW = "RAW"  # store the literal string


class TableStore(ABC):
    """
    Row-oriented record table with single-cell write granularity.

    Implementations offer no atomicity across calls and no compare-and-set.
    Both methods raise BackendError on failure and never retry.
    """

    @abstractmethod
    def read_table(self) -> Grid:
        """Fetch the full current contents of the table ([] when empty)."""

    @abstractmethod
    def write_cell(self, address: str, value: Any, input_mode: InputMode) -> None:
        """Write ``value`` to one A1 cell address such as ``C2``."""
