"""Upload ingestion: pre-checks, parsing, and the session hand-off.

Pipeline for one upload:
  1. Check the file itself (size, extension)
  2. Parse and validate every row (all-or-nothing)
  3. Replace the session's stored records
"""

from pathlib import PurePath
from typing import Sequence

from finarrow.domain.errors import EmptyFileError, UnsupportedFileError
from finarrow.domain.sample_data import SAMPLE_RECORDS
from finarrow.engines.spreadsheet_parser import SpreadsheetParser
from finarrow.logging_config import get_logger
from finarrow.schemas.financial_data import FinancialPeriodRecord
from finarrow.services.session_store import SessionStore

logger = get_logger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_EXTENSIONS = (".xlsx", ".xls", ".csv")


class IngestionService:
    def __init__(
        self,
        parser: SpreadsheetParser,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        allowed_extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ):
        self.parser = parser
        self.max_upload_bytes = max_upload_bytes
        self.allowed_extensions = tuple(e.lower() for e in allowed_extensions)

    # ── pre-checks ───────────────────────────────────────────────────

    def check_file(self, filename: str, size: int) -> None:
        """Reject an upload before reading it.

        Raises:
            EmptyFileError: zero-byte upload.
            UnsupportedFileError: too large, or an extension we do not read.
        """
        if size > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes / (1024 * 1024)
            raise UnsupportedFileError(
                f"File size exceeds {limit_mb:.0f}MB limit. "
                f"Your file is {size / (1024 * 1024):.2f}MB."
            )
        if size == 0:
            raise EmptyFileError("File appears to be empty or corrupted.")

        suffix = PurePath(filename or "").suffix.lower()
        if suffix not in self.allowed_extensions:
            raise UnsupportedFileError(
                "Invalid file type. Please upload an Excel (.xlsx) or CSV file."
            )

    # ── ingestion ────────────────────────────────────────────────────

    def ingest(self, filename: str, file_bytes: bytes, store: SessionStore) -> list[FinancialPeriodRecord]:
        """Validate and parse *file_bytes*; on success replace the stored records.

        On failure the previously stored records are left untouched.
        """
        self.check_file(filename, len(file_bytes))
        records = self.parser.parse(file_bytes)
        store.save_records(records)
        logger.info(
            "upload_ingested",
            filename=filename,
            size=len(file_bytes),
            records=len(records),
        )
        return records

    def load_sample(self, store: SessionStore) -> list[FinancialPeriodRecord]:
        records = list(SAMPLE_RECORDS)
        store.save_records(records)
        logger.info("sample_data_loaded", records=len(records))
        return records
