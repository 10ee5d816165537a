import os
import logging
from pathlib import Path
from typing import Iterator, List, Optional

from .. import config
from ..exceptions import ScanPathError
from ..models import ScanCounters


class FileClassifier:
    def __init__(self, max_depth: int = config.MAX_SCAN_DEPTH):
        self.max_depth = max_depth

    def candidates(self, root: Path, counters: Optional[ScanCounters] = None) -> List[Path]:
        """
        Returns every JPEG under root, at most `max_depth` levels deep.

        Every regular file seen bumps `counters.files_visited` once,
        whatever its extension.
        """
        root = Path(root)
        if not root.is_dir():
            raise ScanPathError(f"Scan path {root} does not exist or is not a directory.")

        found = []
        for path in self._iter_files(root):
            if counters is not None:
                counters.file_visited()
            if self.is_jpeg(path):
                found.append(path)
        return found

    @staticmethod
    def is_jpeg(path: Path) -> bool:
        return path.suffix.lower() in config.JPEG_EXTS

    def _iter_files(self, root: Path) -> Iterator[Path]:
        """Depth-first walker using os.scandir for speed."""
        if self.max_depth < 1:
            return

        # (directory, depth of the entries inside it)
        stack = [(root, 1)]
        while stack:
            current, depth = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError:
                logging.warning(f"Cannot read directory, skipping: {current}")
                continue

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            for e in entries:
                try:
                    if e.is_dir(follow_symlinks=False):
                        dirs.append(Path(e.path))
                    elif e.is_file(follow_symlinks=False):
                        yield Path(e.path)
                except OSError:
                    logging.warning(f"Cannot stat entry, skipping: {e.path}")

            if depth < self.max_depth:
                # Push dirs to stack (reversed so we process A before Z)
                for d in reversed(dirs):
                    stack.append((d, depth + 1))
