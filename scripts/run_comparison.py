"""Compare two contracts from the command line.

JSON files holding extracted rows are read directly; any other file is sent to
the extraction service first.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from contract_compare.config.settings import Settings
from contract_compare.contracts.models import ComparisonResult, ContractItem
from contract_compare.core.logging import configure_logging
from contract_compare.errors import ExtractionError
from contract_compare.services.extraction_client import ExtractionClient, parse_items
from contract_compare.storage import ReportWriter
from contract_compare.tasks import CompareTask


def _load_rows(path: Path) -> list[ContractItem]:
    return parse_items(json.loads(path.read_text()))


async def _extract_if_needed(client: ExtractionClient, path: Path) -> list[ContractItem]:
    if path.suffix.lower() == ".json":
        logging.info("Reading extracted rows from %s", path)
        return _load_rows(path)
    return await client.extract(path)


async def run(settings: Settings, path_a: Path, path_b: Path) -> ComparisonResult:
    async with ExtractionClient(**settings.client_kwargs()) as client:
        task = CompareTask(client)
        if path_a.suffix.lower() != ".json" and path_b.suffix.lower() != ".json":
            return await task.run(path_a, path_b)
        items_a, items_b = await asyncio.gather(
            _extract_if_needed(client, path_a),
            _extract_if_needed(client, path_b),
        )
        return task.run_items(items_a, items_b)


def _format_amount(value: object) -> str:
    if value is None:
        return "n/a"
    return f"{value:,}" if isinstance(value, (int, float)) else str(value)


def print_report(result: ComparisonResult) -> None:
    summary = result.summary.to_dict()
    print(
        f"Matches: {summary['count_matches']} | Only in A: {summary['count_only_in_a']} | "
        f"Only in B: {summary['count_only_in_b']} | Malformed: {summary['count_malformed']}"
    )
    print(f"Average delta: {_format_amount(summary['avg_delta'])} | Median delta: {_format_amount(summary['median_delta'])}")
    if not result.matches:
        return
    print()
    print("Hotel | Room Type | Period | Price A | Price B | Delta")
    for match in result.matches:
        row = match.to_dict()
        delta = row["price_delta"]
        if match.currency_mismatch:
            delta_text = f"currency mismatch ({match.currency or '?'} vs {match.currency_b or '?'})"
        else:
            delta_text = f"{'+' if delta > 0 else ''}{_format_amount(delta)} {match.currency}"
        print(
            f"{row['hotel_name']} | {row['room_type']} | {row['period_start']} to {row['period_end']} | "
            f"{_format_amount(row['price_a'])} | {_format_amount(row['price_b'])} | {delta_text}"
        )


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compare pricing records of two hotel contracts")
    parser.add_argument("--a", type=Path, required=True, help="Contract A (PDF/XLSX, or JSON rows)")
    parser.add_argument("--b", type=Path, required=True, help="Contract B (PDF/XLSX, or JSON rows)")
    parser.add_argument("--output", type=str, default=None, help="Write the JSON report under the output dir")
    parser.add_argument("--log-level", type=str, default=None, help="Override COMPARE_LOG_LEVEL")
    args = parser.parse_args(argv)

    settings = Settings()
    if args.log_level:
        settings.log_level = args.log_level
    settings.ensure_directories()
    configure_logging(settings.log_level, settings.log_dir)

    try:
        result = asyncio.run(run(settings, args.a, args.b))
    except ExtractionError as exc:
        logging.error("Comparison aborted: %s", exc)
        return 1

    print_report(result)
    if args.output:
        path = ReportWriter(settings.output_dir).write(result, filename=args.output)
        print(f"\nReport written to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
