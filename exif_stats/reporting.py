import json
import logging
from pathlib import Path
from typing import Dict, Optional

from .models import FrequencySnapshot, ScanResult, TrackedField
from . import config


class ReportBuilder:
    """
    Renders settled frequency tables as JSON text.

    Fields are keyed by their human-readable label. Key order follows
    dict iteration and is not part of the contract.
    """

    def as_dict(self, snapshot: FrequencySnapshot) -> Dict[str, Dict[str, int]]:
        return {f.label: dict(snapshot.get(f, {})) for f in TrackedField}

    def render(self, snapshot: FrequencySnapshot) -> str:
        return json.dumps(self.as_dict(snapshot), ensure_ascii=False)

    def render_years(self, results: Dict[str, ScanResult]) -> str:
        """Renders {year: {label: {value: count}}} for a partitioned scan."""
        return json.dumps(
            {year: self.as_dict(result.snapshot) for year, result in results.items()},
            ensure_ascii=False,
        )

    def summary(self, result: ScanResult) -> Dict[str, object]:
        """Report plus the counters owned by the scan that produced it."""
        return {
            "report": self.render(result.snapshot),
            "files_visited": result.files_visited,
            "images_decoded": result.images_decoded,
            "duration_sec": result.duration_sec,
        }

    def save_report(self, result: ScanResult, output_dir: Path, year: Optional[str] = None) -> Path:
        """
        Writes the report to `output_dir`, one file per year bucket
        (no suffix for an unpartitioned scan).
        """
        year = year if year is not None else (result.year or "")
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        out_path = output_dir / config.REPORT_FILENAME_PATTERN.format(year=year)

        out_path.write_text(self.render(result.snapshot), encoding="utf-8")
        logging.info(f"Report written to {out_path}")
        return out_path
