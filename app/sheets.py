import logging
import os
from typing import Dict, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app import config
from app.errors import ConfigurationError, UpstreamError
from app.grid import Grid

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
GRID_FIELDS = (
    "sheets(data(rowData(values(formattedValue,userEnteredFormat(backgroundColor)))))"
)


class SheetsClient:
    """Read-only access to the operator spreadsheet through the Sheets v4 API."""

    def __init__(self, spreadsheet_id: Optional[str] = None, service=None):
        self.spreadsheet_id = spreadsheet_id or config.SPREADSHEET_ID
        if not self.spreadsheet_id:
            raise ConfigurationError("SPREADSHEET_ID is not configured")
        self.service = service or self._authenticate()

    def _authenticate(self):
        credentials_path = os.getenv("GOOGLE_CREDENTIALS_PATH")
        if credentials_path and os.path.exists(credentials_path):
            credentials = service_account.Credentials.from_service_account_file(
                credentials_path, scopes=SCOPES
            )
            return build("sheets", "v4", credentials=credentials, cache_discovery=False)

        api_key = os.getenv("GOOGLE_API_KEY")
        if api_key:
            return build("sheets", "v4", developerKey=api_key, cache_discovery=False)

        raise ConfigurationError("GOOGLE_API_KEY or GOOGLE_CREDENTIALS_PATH is required")

    def _execute(self, request, what: str) -> Dict:
        try:
            return request.execute()
        except HttpError as e:
            logger.error("Sheets request for %s failed: %s", what, e)
            raise UpstreamError(
                f"Google Sheets API request failed ({e.resp.status}): {what}"
            ) from e
        except (httplib2.HttpLib2Error, GoogleAuthError, OSError) as e:
            logger.error("Sheets request for %s failed: %s", what, e)
            raise UpstreamError(f"Google Sheets API unreachable: {e}") from e

    def fetch_grid(self, sheet_name: str) -> Grid:
        request = self.service.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id,
            ranges=[sheet_name],
            includeGridData=True,
            fields=GRID_FIELDS,
        )
        grid = Grid.from_sheet_response(self._execute(request, sheet_name))
        logger.info("Loaded grid %s: %s rows x %s columns", sheet_name, grid.rows, grid.width)
        return grid

    def fetch_values(self, sheet_name: str) -> List[List[str]]:
        request = (
            self.service.spreadsheets()
            .values()
            .get(spreadsheetId=self.spreadsheet_id, range=sheet_name)
        )
        values = self._execute(request, sheet_name).get("values", [])
        logger.info("Loaded %s rows from %s", len(values), sheet_name)
        return values

    def check_connection(self) -> Dict:
        result = {
            "connected": True,
            "spreadsheet_accessible": False,
            "spreadsheet_title": None,
            "error": None,
        }
        try:
            spreadsheet = self._execute(
                self.service.spreadsheets().get(
                    spreadsheetId=self.spreadsheet_id, fields="properties(title)"
                ),
                "spreadsheet metadata",
            )
            result["spreadsheet_accessible"] = True
            result["spreadsheet_title"] = spreadsheet.get("properties", {}).get("title")
        except UpstreamError as e:
            result["error"] = e.message
        return result
