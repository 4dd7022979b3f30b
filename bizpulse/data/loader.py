"""
Ingestion: uploaded files and published Google Sheets -> Table.
"""
import logging
import re
import warnings
import zipfile
from io import BytesIO, StringIO
from typing import Optional, Union

import httpx
import pandas as pd

from bizpulse.config import (
    config, UPLOAD_EXTENSIONS, GOOGLE_SHEETS_EXPORT_URL, GOOGLE_SHEETS_SOURCE_NAME,
)
from bizpulse.data.schema import Table

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when an upload or remote sheet cannot be turned into a table."""
    pass


_SHEET_ID = re.compile(r"/d/([a-zA-Z0-9\-_]+)")
_SHEET_GID = re.compile(r"[?#&]gid=(\d+)")


def _as_text(data: Union[bytes, str]) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8-sig", errors="replace")
    return data


def _read_csv_text(text: str) -> pd.DataFrame:
    """
    Read CSV text with every row aligned to the header.

    Short rows are padded with "" and fields past the header width are
    dropped, so a trailing delimiter never shifts columns into the index.
    Only truly empty lines are skipped; a row of bare delimiters is kept.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", pd.errors.ParserWarning)
        return pd.read_csv(
            StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            engine="python",
        )


def parse_csv(data: Union[bytes, str], source_name: str = "") -> Table:
    """Parse CSV content; the first row must hold the headers."""
    text = _as_text(data)
    if not text.strip():
        raise IngestionError("CSV has no rows or no headers.")
    try:
        df = _read_csv_text(text)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeError) as e:
        raise IngestionError(f"Could not read CSV: {e}") from e

    if df.empty or len(df.columns) == 0:
        raise IngestionError("CSV has no rows or no headers.")
    return Table.from_frame(df, source_name=source_name)


def parse_excel(data: bytes, source_name: str = "") -> Table:
    """Parse the first sheet of an Excel workbook; headers from the first row."""
    try:
        df = pd.read_excel(BytesIO(data), sheet_name=0)
    except (ValueError, ImportError, OSError, KeyError, zipfile.BadZipFile) as e:
        raise IngestionError(f"Could not read Excel workbook: {e}") from e

    df = df.dropna(how="all")
    if df.empty or len(df.columns) == 0:
        raise IngestionError("Excel sheet is empty or has no headers.")
    return Table.from_frame(df, source_name=source_name)


def load_upload(filename: str, data: bytes) -> Table:
    """Dispatch an uploaded file to the right parser by extension."""
    ext = filename.lower().rsplit(".", 1)[-1] if "." in filename else ""
    if ext not in UPLOAD_EXTENSIONS:
        raise IngestionError("Upload .csv, .xlsx or .xls")

    if ext == "csv":
        table = parse_csv(data, source_name=filename)
    else:
        table = parse_excel(data, source_name=filename)

    logger.info("Loaded %s: %d rows, %d columns", filename, table.row_count, len(table.columns))
    return table


def sheets_csv_url(value: str) -> str:
    """
    Build a Google Sheets CSV export URL from a pasted sheet URL or bare ID.

    Returns "" when no spreadsheet ID can be found.
    """
    s = (value or "").strip()
    if not s:
        return ""

    if "export?format=csv" in s:
        return s

    match = _SHEET_ID.search(s)
    if match:
        sheet_id = match.group(1)
    elif "/" not in s:
        sheet_id = s
    else:
        return ""

    gid_match = _SHEET_GID.search(s)
    gid = gid_match.group(1) if gid_match else "0"

    return GOOGLE_SHEETS_EXPORT_URL.format(sheet_id=sheet_id, gid=gid)


def fetch_google_sheet(value: str, client: Optional[httpx.Client] = None) -> Table:
    """
    Download a published Google Sheet as CSV and parse it.

    One request, no retry. Any failure raises IngestionError.
    """
    url = sheets_csv_url(value)
    if not url:
        raise IngestionError("Paste Google Sheets URL (or Spreadsheet ID).")

    owns_client = client is None
    if owns_client:
        client = httpx.Client(
            timeout=config.sheets_timeout_seconds,
            follow_redirects=True,
        )

    try:
        logger.info("Fetching sheet export %s", url)
        response = client.get(url)
    except httpx.HTTPError as e:
        logger.warning("Sheet fetch failed for %s: %s", url, e)
        raise IngestionError(
            "Failed to fetch sheet. Make sure it is public or 'Published to web'."
        ) from e
    finally:
        if owns_client:
            client.close()

    if not response.is_success:
        logger.warning("Sheet fetch for %s returned HTTP %s", url, response.status_code)
        raise IngestionError(
            "Failed to fetch sheet. Make sure it is public or 'Published to web'."
        )

    try:
        return parse_csv(response.text, source_name=GOOGLE_SHEETS_SOURCE_NAME)
    except IngestionError as e:
        raise IngestionError("Sheet has no rows or headers.") from e
