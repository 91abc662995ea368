"""Table store: the I/O boundary between the check-in core and the sheet."""
from guestlist.sheets.base import Grid, InputMode, TableStore
from guestlist.sheets.google import GoogleSheetsStore

__all__ = ["Grid", "InputMode", "TableStore", "GoogleSheetsStore"]
