"""Spreadsheet ingestor: untrusted workbook / CSV bytes → validated records.

Supports:
  - .xlsx workbooks (first sheet only), read with openpyxl in read-only,
    values-only mode: formulas are never evaluated (cached values are read),
    rich text and external links are not loaded
  - CSV text (UTF-8, BOM tolerated), the sole table of the file

The first row is the header row. Fully blank rows are skipped but every data
row keeps its visible spreadsheet row number for error messages.

Parsing is all-or-nothing: the first invalid cell aborts with a
:class:`~finarrow.domain.errors.RowError`.
"""

import csv
import io
import zipfile
from dataclasses import dataclass
from typing import Any, Iterator

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from finarrow.domain.columns import COLUMNS, ColumnSpec, Policy, is_blank, resolve_cell
from finarrow.domain.errors import (
    CorruptFileError,
    EmptyFileError,
    FieldValidationError,
    MissingDateError,
    RowError,
    TooManyRowsError,
    UnsupportedFileError,
)
from finarrow.domain.validation import (
    DEFAULT_BOUND,
    DEFAULT_DATE_MAX_LENGTH,
    validate_date,
    validate_non_negative,
    validate_number,
    validate_percentage,
)
from finarrow.logging_config import get_logger
from finarrow.schemas.financial_data import FinancialPeriodRecord

logger = get_logger(__name__)

ZIP_MAGIC = b"PK\x03\x04"
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


@dataclass(frozen=True)
class RawRow:
    """A data row keyed by header text, plus its visible row number."""

    row_number: int
    cells: dict[str, Any]


def _header_keys(header_cells: list[Any]) -> list[str]:
    """Header text per column; blank headers get ``Column_N``, duplicates ``_1``, ``_2``."""
    keys: list[str] = []
    for idx, cell in enumerate(header_cells):
        key = str(cell).strip() if not is_blank(cell) else f"Column_{idx + 1}"
        base, n = key, 0
        while key in keys:
            n += 1
            key = f"{base}_{n}"
        keys.append(key)
    return keys


def _csv_lines(reader) -> Iterator[tuple[int, list[str]]]:
    """Pair each CSV record with the physical line it starts on.

    Quoted fields may span several lines, so this is not the record index.
    """
    start = 1
    for values in reader:
        yield start, values
        start = reader.line_num + 1


def _rows_from_table(table: Iterator[tuple[int, list[Any]]], keep: int) -> tuple[list[RawRow], int]:
    """Turn numbered row value lists (header first) into keyed rows.

    Only the first *keep* data rows are materialised; the rest are counted.
    Returns ``(rows, data_row_count)``.
    """
    first = next(table, None)
    if first is None:
        return [], 0
    keys = _header_keys(list(first[1]))

    rows: list[RawRow] = []
    count = 0
    for row_number, values in table:
        if all(is_blank(v) for v in values):
            continue
        count += 1
        if count <= keep:
            rows.append(RawRow(row_number=row_number, cells=dict(zip(keys, values))))
    return rows, count


class SpreadsheetParser:
    """Parse an uploaded spreadsheet into :class:`FinancialPeriodRecord` objects."""

    def __init__(
        self,
        max_rows: int = 1000,
        numeric_bound: float = DEFAULT_BOUND,
        date_max_length: int = DEFAULT_DATE_MAX_LENGTH,
    ):
        self.max_rows = max_rows
        self.numeric_bound = numeric_bound
        self.date_max_length = date_max_length

    # ── public API ───────────────────────────────────────────────────

    def parse(self, file_bytes: bytes) -> list[FinancialPeriodRecord]:
        """Decode, validate and convert every data row of *file_bytes*.

        Raises:
            EmptyFileError: no data rows.
            TooManyRowsError: more than ``max_rows`` data rows.
            UnsupportedFileError: legacy binary .xls workbook.
            CorruptFileError: bytes cannot be decoded as a workbook or CSV.
            RowError: a cell failed validation.
        """
        rows, count = self.read_rows(file_bytes)
        if count == 0:
            raise EmptyFileError()
        if count > self.max_rows:
            raise TooManyRowsError(count, self.max_rows)

        records = [self.to_record(row) for row in rows]
        logger.debug("spreadsheet_parsed", records=len(records))
        return records

    def read_rows(self, file_bytes: bytes) -> tuple[list[RawRow], int]:
        """Sniff the format of *file_bytes*.

        Returns up to ``max_rows + 1`` data rows and the total data row count.
        """
        if not file_bytes:
            raise EmptyFileError("File appears to be empty or corrupted.")
        if file_bytes.startswith(OLE2_MAGIC):
            raise UnsupportedFileError(
                "Legacy .xls workbooks are not supported. "
                "Please save the file as .xlsx or .csv and upload it again."
            )
        if file_bytes.startswith(ZIP_MAGIC):
            return self._read_xlsx(file_bytes)
        return self._read_csv(file_bytes)

    def to_record(self, row: RawRow) -> FinancialPeriodRecord:
        """Validate one row; wrap the first cell failure in a RowError."""
        values: dict[str, Any] = {}
        for column in COLUMNS:
            try:
                values[column.field] = self._validate(column, resolve_cell(row.cells, column))
            except FieldValidationError as exc:
                raise RowError(row.row_number, exc.field, exc) from exc
        return FinancialPeriodRecord(**values)

    # ── decoding ─────────────────────────────────────────────────────

    def _read_xlsx(self, file_bytes: bytes) -> tuple[list[RawRow], int]:
        try:
            wb = openpyxl.load_workbook(
                io.BytesIO(file_bytes),
                read_only=True,
                data_only=True,
                keep_links=False,
                rich_text=False,
            )
        except (zipfile.BadZipFile, InvalidFileException, KeyError, OSError, ValueError) as exc:
            logger.warning("xlsx_decode_failed", error=str(exc))
            raise CorruptFileError() from exc

        try:
            if not wb.worksheets:
                return [], 0
            sheet = wb.worksheets[0]
            table = enumerate((list(r) for r in sheet.iter_rows(values_only=True)), start=1)
            return _rows_from_table(table, keep=self.max_rows + 1)
        except (KeyError, ValueError, SyntaxError) as exc:
            logger.warning("xlsx_decode_failed", error=str(exc))
            raise CorruptFileError() from exc
        finally:
            wb.close()

    def _read_csv(self, file_bytes: bytes) -> tuple[list[RawRow], int]:
        try:
            text = file_bytes.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            logger.warning("csv_decode_failed", error=str(exc))
            raise CorruptFileError() from exc
        if "\x00" in text:
            raise CorruptFileError()

        try:
            table = _csv_lines(csv.reader(io.StringIO(text, newline="")))
            return _rows_from_table(table, keep=self.max_rows + 1)
        except csv.Error as exc:
            logger.warning("csv_decode_failed", error=str(exc))
            raise CorruptFileError() from exc

    # ── validation ───────────────────────────────────────────────────

    def _validate(self, column: ColumnSpec, raw: Any) -> Any:
        field = column.header
        if column.policy is Policy.DATE:
            if raw is None:
                raise MissingDateError(field)
            return validate_date(raw, field, self.date_max_length)

        if raw is None:
            return 0
        if column.policy is Policy.PERCENTAGE:
            return validate_percentage(raw, field)
        if column.policy is Policy.NON_NEGATIVE:
            number = validate_non_negative(raw, field, self.numeric_bound)
        else:
            number = validate_number(raw, field, self.numeric_bound)
        return int(number) if column.integer else number
