import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import config
from .core import ScanOrchestrator, YearPartitioner
from .exceptions import AggregatorError, ScanPathError
from .reporting import ReportBuilder


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="EXIF Stats: count focal length / f-number / exposure time values")

    p.add_argument("src", type=Path, help="Directory to scan")

    p.add_argument("--years", nargs="+", default=None,
                   help="Partition by year: scans SRC/<year> for each label given")
    p.add_argument("--workers", type=int, default=config.DEFAULT_MAX_WORKERS,
                   help="Number of parallel workers for reading EXIF")
    p.add_argument("--max-depth", type=int, default=config.MAX_SCAN_DEPTH,
                   help="Maximum directory depth below SRC")
    p.add_argument("--save-dir", type=Path, default=None, help="Write each report as JSON into this directory")
    p.add_argument("--log-file", type=Path, default=None, help="Also log to this file")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    src_root = args.src.resolve()
    logging.info("=== EXIF Stats Started ===")
    logging.info(f"Source: {src_root}")

    orchestrator = ScanOrchestrator(
        max_workers=args.workers,
        max_depth=args.max_depth,
        show_progress=not args.no_progress,
    )
    builder = ReportBuilder()

    try:
        if args.years:
            partitioner = YearPartitioner(args.years, orchestrator=orchestrator)
            results = partitioner.scan_all(src_root)
            for year, result in results.items():
                print(f"{year}: {builder.render(result.snapshot)}")
                if args.save_dir:
                    builder.save_report(result, args.save_dir, year)
        else:
            result = orchestrator.scan(src_root)
            if not any(result.snapshot.values()):
                logging.info("No tracked fields observed.")
            print(builder.render(result.snapshot))
            print(f"files_visited={result.files_visited} images_decoded={result.images_decoded}")
            if args.save_dir:
                builder.save_report(result, args.save_dir)
    except ScanPathError as e:
        logging.error(str(e))
        return 1
    except AggregatorError:
        logging.exception("Fatal error during scan.")
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
