"""Tests for IngestionService: upload pre-checks and the session hand-off."""

import pytest

from finarrow.domain.errors import EmptyFileError, RowError, UnsupportedFileError
from finarrow.domain.sample_data import SAMPLE_RECORDS
from finarrow.engines.spreadsheet_parser import SpreadsheetParser
from finarrow.services.ingestion_service import IngestionService
from tests.helpers import JAN_ROW, make_csv


@pytest.fixture()
def service() -> IngestionService:
    return IngestionService(SpreadsheetParser())


class TestCheckFile:
    def test_accepts_allowed_extensions(self, service):
        service.check_file("metrics.xlsx", 10)
        service.check_file("METRICS.CSV", 10)

    def test_rejects_oversized(self, service):
        with pytest.raises(UnsupportedFileError) as exc_info:
            service.check_file("big.xlsx", 11 * 1024 * 1024)
        assert exc_info.value.message == "File size exceeds 10MB limit. Your file is 11.00MB."

    def test_rejects_empty(self, service):
        with pytest.raises(EmptyFileError):
            service.check_file("empty.csv", 0)

    @pytest.mark.parametrize("name", ["report.pdf", "noext", "", "data.xlsx.exe"])
    def test_rejects_bad_extension(self, service, name):
        with pytest.raises(UnsupportedFileError):
            service.check_file(name, 10)


class TestIngest:
    def test_stores_records(self, service, store, scenario_xlsx, scenario_records):
        records = service.ingest("metrics.xlsx", scenario_xlsx, store)
        assert records == scenario_records
        assert store.load_records() == scenario_records

    def test_failure_keeps_previous_data(self, service, store, scenario_records):
        store.save_records(scenario_records)
        bad = make_csv([JAN_ROW, ("2024-02-01", "abc", 0, 0, 0, 0, 0, 0)])
        with pytest.raises(RowError):
            service.ingest("bad.csv", bad, store)
        assert store.load_records() == scenario_records

    def test_load_sample(self, service, store):
        records = service.load_sample(store)
        assert records == list(SAMPLE_RECORDS)
        assert store.load_records() == list(SAMPLE_RECORDS)
