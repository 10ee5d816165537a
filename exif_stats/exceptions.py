"""
Custom exception hierarchy for the EXIF stats scanner.

Per-file problems (MetadataDecodeError) are contained inside a scan.
Everything else is surfaced to the caller.
"""


class ExifStatsError(Exception):
    """Base exception for all EXIF stats errors."""
    pass


class ScanPathError(ExifStatsError):
    """Raised when the requested scan root cannot be accessed at all."""
    pass


class MetadataDecodeError(ExifStatsError):
    """Raised when EXIF metadata cannot be decoded from a file."""
    pass


class AggregatorError(ExifStatsError):
    """Raised when the frequency tables can no longer be trusted; aborts the scan."""
    pass


class YearBucketError(ExifStatsError):
    """Raised when year buckets are changed after scanning has started."""
    pass
