from __future__ import annotations

import json
import logging

from contract_compare import ContractItem, compare_contracts
from contract_compare.core.logging import configure_logging
from contract_compare.storage import ReportWriter


def test_report_writer_wraps_result(tmp_path) -> None:
    item = ContractItem("Hotel Miramare", "Double", "2025-06-01", "2025-06-30", 100, "EUR")
    result = compare_contracts([item], [])

    path = ReportWriter(tmp_path / "reports").write(result, filename="report.json", subdir="run-1")

    payload = json.loads(path.read_text())
    assert path.parent.name == "run-1"
    assert payload["generated_at"].endswith("Z")
    assert payload["result"]["comparison"]["only_in_a"][0]["hotel_name"] == "Hotel Miramare"
    assert payload["result"]["comparison"]["only_in_a"][0]["issue"] is None


def test_configure_logging_creates_log_file(tmp_path) -> None:
    log_dir = tmp_path / "logs"

    configure_logging("debug", log_dir)
    compare_contracts([], [])

    assert (log_dir / "comparison.log").exists()

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
