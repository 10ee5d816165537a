import enum
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional


class TrackedField(enum.Enum):
    """
    The closed set of EXIF fields that get counted.

    Value is the EXIF tag name (without the IFD prefix).
    """
    FOCAL_LENGTH = 'FocalLength'
    F_NUMBER = 'FNumber'
    EXPOSURE_TIME = 'ExposureTime'

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_tag(cls, tag_name: str) -> Optional['TrackedField']:
        """Returns the member for an EXIF tag name, or None if it is not tracked."""
        try:
            return cls(tag_name)
        except ValueError:
            return None


_LABELS = {
    TrackedField.FOCAL_LENGTH: 'Lens focal length',
    TrackedField.F_NUMBER: 'F number',
    TrackedField.EXPOSURE_TIME: 'Exposure time',
}

# Field -> (value -> count)
FrequencySnapshot = Dict[TrackedField, Dict[str, int]]


class ScanCounters:
    """
    Per-scan counters. Each counter has its own lock so a classifier thread
    bumping files_visited never waits on workers bumping images_decoded.
    """

    def __init__(self):
        self._files_visited = 0
        self._images_decoded = 0
        self._visited_lock = threading.Lock()
        self._decoded_lock = threading.Lock()

    def file_visited(self):
        with self._visited_lock:
            self._files_visited += 1

    def image_decoded(self):
        with self._decoded_lock:
            self._images_decoded += 1

    @property
    def files_visited(self) -> int:
        with self._visited_lock:
            return self._files_visited

    @property
    def images_decoded(self) -> int:
        with self._decoded_lock:
            return self._images_decoded


@dataclass
class ScanResult:
    """
    Outcome of one scan: the settled frequency tables plus the counters
    owned by that scan.
    """
    root: Path
    snapshot: FrequencySnapshot
    files_visited: int = 0
    images_decoded: int = 0
    duration_sec: float = 0.0
    year: Optional[str] = None
    candidates: int = 0
