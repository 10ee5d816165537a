import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from . import config
from .aggregation import FrequencyAggregator
from .exceptions import ScanPathError, YearBucketError
from .metadata.extract import FieldExtractor
from .models import ScanCounters, ScanResult
from .scanning.filesystem import FileClassifier


class ScanOrchestrator:
    def __init__(self,
                 max_workers: int = config.DEFAULT_MAX_WORKERS,
                 max_depth: int = config.MAX_SCAN_DEPTH,
                 extractor: Optional[FieldExtractor] = None,
                 show_progress: bool = False):
        self.max_workers = max_workers
        self.classifier = FileClassifier(max_depth=max_depth)
        self.extractor = extractor or FieldExtractor()
        self.show_progress = show_progress

    def scan(self,
             root: Path,
             aggregator: Optional[FrequencyAggregator] = None,
             year: Optional[str] = None) -> ScanResult:
        """
        Scans root and returns once every file has been processed.

        1. Classify (bounded walk, counts every file visited)
        2. Fan out one extraction task per JPEG
        3. Join, then snapshot the settled aggregator

        Raises ScanPathError if root cannot be read at all. Any other
        exception escaping a worker aborts the scan.
        """
        root = Path(root)
        aggregator = aggregator if aggregator is not None else FrequencyAggregator()
        counters = ScanCounters()
        t0 = time.perf_counter()

        logging.info(f"Scanning {root} (max_depth={self.classifier.max_depth}, workers={self.max_workers})...")
        paths = self.classifier.candidates(root, counters)
        logging.info(f"Found {len(paths)} JPEG candidates out of {counters.files_visited} files.")

        if self.max_workers <= 1:
            self._run_sequential(paths, aggregator, counters)
        else:
            self._run_parallel(paths, aggregator, counters)

        duration = time.perf_counter() - t0
        logging.info(f"Scan of {root} complete in {duration:.2f}s. "
                     f"Decoded {counters.images_decoded}/{len(paths)} images.")

        return ScanResult(
            root=root,
            snapshot=aggregator.snapshot(),
            files_visited=counters.files_visited,
            images_decoded=counters.images_decoded,
            duration_sec=duration,
            year=year,
            candidates=len(paths),
        )

    def _progress(self, items: Iterable, total: int, desc: str) -> Iterable:
        if self.show_progress:
            return tqdm(items, total=total, desc=desc)
        return items

    def _run_sequential(self, paths: List[Path], aggregator: FrequencyAggregator, counters: ScanCounters):
        for path in self._progress(paths, len(paths), "Reading EXIF"):
            self.extractor.extract(path, aggregator, counters)

    def _run_parallel(self, paths: List[Path], aggregator: FrequencyAggregator, counters: ScanCounters):
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_path = {
                executor.submit(self.extractor.extract, path, aggregator, counters): path
                for path in paths
            }

            for future in self._progress(as_completed(future_to_path), len(future_to_path), "Reading EXIF"):
                try:
                    future.result()
                except Exception:
                    # Per-file errors never get this far; whatever did is systemic.
                    logging.error(f"Aborting scan: worker failed on {future_to_path[future]}")
                    for pending in future_to_path:
                        pending.cancel()
                    raise


class YearPartitioner:
    """
    One independent aggregator per year label.

    Years are scanned concurrently with each other; each year's scan is
    itself parallel through its own ScanOrchestrator.
    """

    def __init__(self,
                 years: Iterable[str] = config.DEFAULT_YEARS,
                 orchestrator: Optional[ScanOrchestrator] = None):
        self.orchestrator = orchestrator or ScanOrchestrator()
        self.buckets: Dict[str, FrequencyAggregator] = {}
        self._started = False
        for year in years:
            self.add_year(year)

    @property
    def years(self) -> List[str]:
        return list(self.buckets)

    def add_year(self, year: str):
        if self._started:
            raise YearBucketError(f"Cannot add year {year} after scanning has started")
        year = str(year)
        if year not in self.buckets:
            self.buckets[year] = FrequencyAggregator()

    def scan_year(self, year: str, path: Path) -> ScanResult:
        """Scans one directory into the bucket for `year`."""
        aggregator = self.buckets[str(year)]
        self._started = True
        return self.orchestrator.scan(Path(path), aggregator, year=str(year))

    def scan_all(self, root: Path) -> Dict[str, ScanResult]:
        """
        Scans root/<year> for every bucket.

        A missing year folder leaves that bucket empty instead of failing
        the other years.
        """
        root = Path(root)
        if not root.is_dir():
            raise ScanPathError(f"Scan path {root} does not exist or is not a directory.")

        self._started = True
        results: Dict[str, ScanResult] = {}
        max_workers = max(1, len(self.buckets))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_year = {
                executor.submit(self._scan_year_dir, year, root / year): year
                for year in self.buckets
            }
            for future in as_completed(future_to_year):
                year = future_to_year[future]
                results[year] = future.result()

        return {year: results[year] for year in self.buckets}

    def _scan_year_dir(self, year: str, path: Path) -> ScanResult:
        try:
            return self.scan_year(year, path)
        except ScanPathError:
            logging.warning(f"No folder for year {year} at {path}; bucket left empty.")
            return ScanResult(root=path, snapshot=self.buckets[year].snapshot(), year=year)
