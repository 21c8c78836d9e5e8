"""Tests for the compute_kpis command-line script."""

import json

from scripts.compute_kpis import main
from tests.helpers import make_csv


class TestComputeKpisCli:
    def test_json_output(self, tmp_path, scenario_xlsx, capsys):
        path = tmp_path / "metrics.xlsx"
        path.write_bytes(scenario_xlsx)
        assert main([str(path), "--json"]) == 0
        view = json.loads(capsys.readouterr().out)
        assert view["kpis"]["mrr"] == 55000
        assert view["recordCount"] == 2

    def test_summary_output(self, tmp_path, scenario_csv):
        path = tmp_path / "metrics.csv"
        path.write_bytes(scenario_csv)
        assert main([str(path)]) == 0

    def test_rejected_file(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_bytes(make_csv([("2024-01-01", "abc")], header=("Date", "Revenue")))
        assert main([str(path)]) == 1

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "nope.csv")]) == 1
