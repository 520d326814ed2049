"""Comparison workflow: extract both documents, then run the engine."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from contract_compare.comparison import compare_contracts
from contract_compare.comparison.engine import ItemLike
from contract_compare.contracts.models import ComparisonResult
from contract_compare.services.extraction_client import ExtractionClient

logger = logging.getLogger(__name__)


class CompareTask:
    """Compare two contracts, extracting them first when given files."""

    def __init__(self, client: ExtractionClient) -> None:
        self._client = client

    async def run(self, path_a: Path, path_b: Path) -> ComparisonResult:
        logger.info("Extracting %s and %s", path_a.name, path_b.name)
        tasks = [
            asyncio.create_task(self._client.extract(path_a)),
            asyncio.create_task(self._client.extract(path_b)),
        ]
        try:
            items_a, items_b = await asyncio.gather(*tasks)
        except BaseException:
            # The client is closed right after a failure; stop the other upload first.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return self.run_items(items_a, items_b)

    @staticmethod
    def run_items(items_a: Iterable[ItemLike], items_b: Iterable[ItemLike]) -> ComparisonResult:
        return compare_contracts(items_a, items_b)
