import threading
from typing import Dict

from .exceptions import AggregatorError
from .models import TrackedField, FrequencySnapshot


class FrequencyAggregator:
    """
    Per-field frequency tables shared by all workers of one scan.

    Every tracked field gets its table and its own lock at construction,
    so workers touching different fields never contend. Tables only grow.
    """

    def __init__(self):
        self._tables: Dict[TrackedField, Dict[str, int]] = {f: {} for f in TrackedField}
        self._locks: Dict[TrackedField, threading.Lock] = {f: threading.Lock() for f in TrackedField}

    def record(self, field: TrackedField, value: str):
        """Counts one occurrence of `value` for `field`."""
        try:
            table = self._tables[field]
            lock = self._locks[field]
        except KeyError:
            raise AggregatorError(f"Field {field!r} is not a tracked field") from None

        with lock:
            table[value] = table.get(value, 0) + 1

    def table(self, field: TrackedField) -> Dict[str, int]:
        """Returns a copy of one field's frequency table."""
        with self._locks[field]:
            return dict(self._tables[field])

    def snapshot(self) -> FrequencySnapshot:
        """
        Returns a copy of every table. Only meaningful once the scan that
        feeds this aggregator has joined.
        """
        if set(self._tables) != set(TrackedField):
            raise AggregatorError("Aggregator field set changed after construction")
        return {f: self.table(f) for f in TrackedField}

    def total(self, field: TrackedField) -> int:
        with self._locks[field]:
            return sum(self._tables[field].values())
