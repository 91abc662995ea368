"""Guest list check-in service backed by a Google Sheets worksheet."""
