"""Logic for generating reports on a batch of identifier resolutions."""

import json
import time
from pathlib import Path
from typing import Any

from classloader.resolution_result import MISS, ResolutionResult


class ResolutionReport:
    """Collects and summarizes the results of resolving identifiers."""

    def __init__(self) -> None:
        self.results: list[ResolutionResult] = []
        self.start_time = time.time()

    def add_result(self, result: ResolutionResult) -> None:
        """Add a single resolution result to the report."""
        self.results.append(result)

    def generate_report(self, path: str | Path) -> None:
        """Write the summary report to a JSON file."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "total_items": len(self.results),
            },
            "results": [
                {
                    "identifier": r.identifier,
                    "path": r.path,
                    "strategy": r.strategy,
                }
                for r in self.results
            ],
            "stats": self._compute_stats(),
        }

        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")

    def _compute_stats(self) -> dict[str, Any]:
        strategy_counts: dict[str, int] = {}
        for r in self.results:
            strategy_counts[r.strategy] = strategy_counts.get(r.strategy, 0) + 1
        misses = [r.identifier for r in self.results if r.strategy == MISS]
        return {"strategy_counts": strategy_counts, "misses": misses}
