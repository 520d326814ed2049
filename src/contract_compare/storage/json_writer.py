"""JSON report helpers."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from contract_compare.contracts.models import ComparisonResult


class ReportWriter:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write(
        self,
        result: ComparisonResult,
        *,
        filename: str,
        subdir: str | None = None,
    ) -> Path:
        target_dir = self.root / subdir if subdir else self.root
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        serialisable = {
            "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "result": result.to_dict(),
        }
        path.write_text(json.dumps(serialisable, indent=2))
        return path
