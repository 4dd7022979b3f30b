"""
Tests for file ingestion and Google Sheets import.
"""
import pytest
import httpx
import pandas as pd
import sys
from io import BytesIO
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bizpulse.data.loader import (
    fetch_google_sheet,
    IngestionError,
    load_upload,
    parse_csv,
    parse_excel,
    sheets_csv_url,
)
from bizpulse.data.schema import Table, get_column_info
from bizpulse.metrics.kpis import compute_kpis


SHEET_ID = "1AbC-dEf_123"
CSV_TEXT = "Date,Product,Revenue,COGS\n2024-01-01,Latte,10.5,3\n2024-01-02,,8,\n"


def _excel_bytes(df: pd.DataFrame) -> bytes:
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, index=False)
    return buffer.getvalue()


def _mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestParseCsv:
    """Tests for CSV parsing."""

    def test_headers_and_rows(self):
        table = parse_csv(CSV_TEXT.encode("utf-8"), source_name="sales.csv")

        assert table.columns == ["Date", "Product", "Revenue", "COGS"]
        assert table.row_count == 2
        assert table.source_name == "sales.csv"

    def test_cells_kept_as_strings_and_blanks_empty(self):
        table = parse_csv(CSV_TEXT)

        row = table.rows[1]
        assert row["Revenue"] == "8"
        assert row["Product"] == ""
        assert row["COGS"] == ""

    def test_only_empty_lines_skipped(self):
        table = parse_csv("a,b\n1,2\n\n,\n3,4\n")

        assert table.row_count == 3
        assert table.rows[1] == {"a": "", "b": ""}

    def test_trailing_delimiter_keeps_columns_aligned(self):
        table = parse_csv("Product,Revenue,COGS\nLatte,100,30,\nMocha,50,10,\n")

        assert table.columns == ["Product", "Revenue", "COGS"]
        assert table.rows[0] == {"Product": "Latte", "Revenue": "100", "COGS": "30"}
        assert table.rows[1]["Revenue"] == "50"

        k = compute_kpis(table.frame, "Revenue", ["COGS"], "Product")
        assert k.revenue == 150
        assert k.cost == 40
        assert k.top_product == "Latte"

    def test_ragged_rows_fit_header(self):
        table = parse_csv("Product,Revenue,COGS\nLatte,100,30\nMocha,50,10,extra\nTea,20\n")

        assert table.row_count == 3
        assert table.rows[1] == {"Product": "Mocha", "Revenue": "50", "COGS": "10"}
        assert table.rows[2] == {"Product": "Tea", "Revenue": "20", "COGS": ""}

    def test_utf8_bom_stripped(self):
        table = parse_csv("\ufeffRevenue,Cost\n1,2\n".encode("utf-8"))

        assert table.columns == ["Revenue", "Cost"]

    def test_header_only_rejected(self):
        with pytest.raises(IngestionError, match="no rows or no headers"):
            parse_csv("Revenue,Cost\n")

    def test_empty_rejected(self):
        with pytest.raises(IngestionError):
            parse_csv(b"")


class TestParseExcel:
    """Tests for Excel parsing."""

    def test_first_sheet(self):
        df = pd.DataFrame({"Revenue": [10, 20], "Product": ["A", None]})

        table = parse_excel(_excel_bytes(df), source_name="sales.xlsx")

        assert table.columns == ["Revenue", "Product"]
        assert table.row_count == 2
        assert table.rows[1]["Product"] == ""

    def test_empty_sheet_rejected(self):
        data = _excel_bytes(pd.DataFrame())

        with pytest.raises(IngestionError):
            parse_excel(data)

    def test_garbage_rejected(self):
        with pytest.raises(IngestionError):
            parse_excel(b"not a workbook")


class TestLoadUpload:

    def test_dispatch_csv(self):
        table = load_upload("Sales.CSV", CSV_TEXT.encode("utf-8"))

        assert table.source_name == "Sales.CSV"
        assert table.row_count == 2

    def test_dispatch_xlsx(self):
        data = _excel_bytes(pd.DataFrame({"Revenue": [1]}))

        assert load_upload("book.xlsx", data).columns == ["Revenue"]

    def test_unsupported_extension(self):
        with pytest.raises(IngestionError, match="Upload .csv, .xlsx or .xls"):
            load_upload("notes.txt", b"hello")


class TestSheetsCsvUrl:
    """Tests for Google Sheets export URL building."""

    def test_from_edit_url_with_gid(self):
        url = sheets_csv_url(f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit#gid=42")

        assert url == (
            f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/export?format=csv&gid=42"
        )

    def test_gid_defaults_to_zero(self):
        url = sheets_csv_url(f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit")

        assert url.endswith("&gid=0")

    def test_bare_id(self):
        assert sheets_csv_url(f"  {SHEET_ID} ") == (
            f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/export?format=csv&gid=0"
        )

    def test_export_url_unchanged(self):
        url = f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/export?format=csv&gid=7"

        assert sheets_csv_url(url) == url

    def test_unrecognised_input(self):
        assert sheets_csv_url("") == ""
        assert sheets_csv_url("https://example.com/some/page") == ""


class TestFetchGoogleSheet:
    """Tests for remote sheet import with a mocked transport."""

    def test_success(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, text=CSV_TEXT)

        table = fetch_google_sheet(SHEET_ID, client=_mock_client(handler))

        assert "export?format=csv" in seen["url"]
        assert table.source_name == "google-sheets.csv"
        assert table.row_count == 2

    def test_non_ok_response(self):
        client = _mock_client(lambda request: httpx.Response(403, text="denied"))

        with pytest.raises(IngestionError, match="Published to web"):
            fetch_google_sheet(SHEET_ID, client=client)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(IngestionError, match="Failed to fetch sheet"):
            fetch_google_sheet(SHEET_ID, client=_mock_client(handler))

    def test_empty_sheet(self):
        client = _mock_client(lambda request: httpx.Response(200, text=""))

        with pytest.raises(IngestionError, match="Sheet has no rows or headers."):
            fetch_google_sheet(SHEET_ID, client=client)

    def test_missing_input(self):
        with pytest.raises(IngestionError, match="Paste Google Sheets URL"):
            fetch_google_sheet("   ")


class TestTable:
    """Tests for the table invariants."""

    def test_missing_cells_default_to_empty(self):
        table = Table.from_records([{"a": "1"}, {"b": "2"}], columns=["a", "b"])

        assert table.rows == [{"a": "1", "b": ""}, {"a": "", "b": "2"}]

    def test_duplicate_and_blank_headers_made_unique(self):
        df = pd.DataFrame([[1, 2, 3]], columns=["Cost", "Cost", " "])

        table = Table.from_frame(df)

        assert table.columns == ["Cost", "Cost_1", "column_3"]

    def test_head_and_preview(self):
        table = parse_csv(CSV_TEXT)

        assert len(table.head(1)) == 1
        assert table.preview(1, 2).shape == (1, 2)

    def test_column_info(self):
        info = get_column_info(parse_csv(CSV_TEXT))

        product = info[info["column"] == "Product"].iloc[0]
        assert product["filled"] == 1
        assert product["unique"] == 1
