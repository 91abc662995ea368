"""Google Sheets implementation of the table store."""
import threading
from typing import Any, Dict, Optional

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from gspread.utils import absolute_range_name

from guestlist.core.constants import SHEETS_SCOPES
from guestlist.core.exceptions import BackendError
from guestlist.core.logging_config import get_logger
from guestlist.sheets.base import Grid, InputMode, TableStore

logger = get_logger(__name__)

# Failures of the remote call itself (network, auth, quota, API errors)
BACKEND_ERRORS = (
    gspread.exceptions.GSpreadException,
    GoogleAuthError,
    requests.exceptions.RequestException,
)


class GoogleSheetsStore(TableStore):
    """
    Guest table stored in one worksheet of a Google spreadsheet.

    The gspread client and spreadsheet handle are created lazily on first use
    and reused; cell contents are never cached, every read hits the API.
    """

    def __init__(
        self,
        spreadsheet_id: Optional[str],
        sheet_name: str,
        service_account_info: Dict[str, Any],
        cell_range: str = "A:Z",
    ):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self.cell_range = cell_range
        self._service_account_info = service_account_info
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "GoogleSheetsStore":
        try:
            info = settings.get_service_account_info()
        except ValueError as exc:
            raise BackendError(str(exc)) from exc
        return cls(
            spreadsheet_id=settings.SPREADSHEET_ID,
            sheet_name=settings.SHEET_NAME,
            service_account_info=info,
            cell_range=settings.SHEET_RANGE,
        )

    def _open(self) -> gspread.Spreadsheet:
        with self._lock:
            if self._spreadsheet is not None:
                return self._spreadsheet

            if not self.spreadsheet_id:
                raise BackendError("SPREADSHEET_ID is not configured")

            logger.debug("sheets_client_init", spreadsheet_id=self.spreadsheet_id)
            try:
                creds = Credentials.from_service_account_info(
                    self._service_account_info, scopes=SHEETS_SCOPES
                )
                client = gspread.authorize(creds)
                self._spreadsheet = client.open_by_key(self.spreadsheet_id)
            except ValueError as exc:
                # google-auth rejects malformed key material with ValueError
                raise BackendError(f"Invalid service account credentials: {exc}") from exc
            except BACKEND_ERRORS as exc:
                logger.error(
                    "sheets_open_failed",
                    spreadsheet_id=self.spreadsheet_id,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise BackendError("Unable to open spreadsheet") from exc

            return self._spreadsheet

    def read_table(self) -> Grid:
        spreadsheet = self._open()
        range_name = absolute_range_name(self.sheet_name, self.cell_range)
        try:
            response = spreadsheet.values_get(range_name, params={"majorDimension": "ROWS"})
        except BACKEND_ERRORS as exc:
            logger.error("sheet_read_failed", range=range_name, error=str(exc))
            raise BackendError("Unable to read sheet") from exc

        values = response.get("values", [])
        logger.debug("sheet_read", range=range_name, rows=len(values))
        return values

    def write_cell(self, address: str, value: Any, input_mode: InputMode) -> None:
        spreadsheet = self._open()
        range_name = absolute_range_name(self.sheet_name, address)
        try:
            spreadsheet.values_update(
                range_name,
                params={"valueInputOption": input_mode.value},
                body={"values": [[value]]},
            )
        except BACKEND_ERRORS as exc:
            logger.error("sheet_write_failed", range=range_name, error=str(exc))
            raise BackendError(f"Unable to write cell {address}") from exc

        logger.debug("sheet_write", range=range_name, input_mode=input_mode.value)
