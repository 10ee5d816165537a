import argparse
import json
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from exif_stats.core import ScanOrchestrator
from exif_stats.models import FrequencySnapshot
from exif_stats.reporting import ReportBuilder


def run_once(src: Path, workers: int, max_depth: int) -> Tuple[float, FrequencySnapshot]:
    """Returns (elapsed seconds, settled snapshot) for one scan."""
    orchestrator = ScanOrchestrator(max_workers=workers, max_depth=max_depth)
    t0 = time.perf_counter()
    result = orchestrator.scan(src)
    return time.perf_counter() - t0, result.snapshot


def benchmark(src: Path, workers: Iterable[int], repeats: int, max_depth: int, out_file: Path) -> Dict[str, object]:
    """
    Times each worker count and checks every run against the first one:
    counts are sums, so any worker count must produce the same tables.
    """
    worker_list = list(workers)
    builder = ReportBuilder()
    reference: Optional[FrequencySnapshot] = None
    mismatches: List[int] = []
    runs = []

    for w in worker_list:
        times: List[float] = []
        for _ in range(max(1, repeats)):
            elapsed, snapshot = run_once(src, w, max_depth)
            times.append(elapsed)
            if reference is None:
                reference = snapshot
            elif snapshot != reference and w not in mismatches:
                logging.warning(f"{w} workers produced different counts than {worker_list[0]} workers")
                mismatches.append(w)

        cold, warm = times[0], times[1:]
        warm_avg = sum(warm) / len(warm) if warm else None
        summary = f"{w} workers: {cold:.2f}s cold"
        if warm_avg is not None:
            summary += f", {warm_avg:.2f}s warm avg over {len(warm)} runs"
        print(summary)
        runs.append({"workers": w, "times": times, "cold": cold, "warm_avg": warm_avg})

    payload = {
        "timestamp": datetime.now().isoformat(),
        "src": str(src),
        "max_depth": max_depth,
        "repeats": repeats,
        "workers": worker_list,
        "results": runs,
        "consistent": not mismatches,
        "mismatched_workers": mismatches,
        "report": json.loads(builder.render(reference)) if reference is not None else None,
    }

    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"Wrote results to {out_file}")
    return payload


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Benchmark EXIF scans with different worker counts.")
    p.add_argument("src", type=Path, help="Source root to scan")
    p.add_argument("--workers", type=int, nargs="+", default=[1, 2, 4, 8], help="Worker counts to test")
    p.add_argument("--repeats", type=int, default=3, help="Runs per worker; first is treated as cold")
    p.add_argument("--max-depth", type=int, default=4, help="Maximum directory depth below src")
    p.add_argument("--output", type=Path, default=Path("bench_scan_results.json"), help="Path to write JSON results")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    payload = benchmark(args.src, args.workers, args.repeats, args.max_depth, args.output)
    return 0 if payload["consistent"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
