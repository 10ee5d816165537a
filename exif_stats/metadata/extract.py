import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Set, Tuple

import exifread

from .. import config
from ..aggregation import FrequencyAggregator
from ..exceptions import MetadataDecodeError
from ..models import TrackedField, ScanCounters

# (field id, display string)
DecodedField = Tuple[str, str]


class MetadataDecoder:
    """
    Thin wrapper around 'exifread'.

    Turns the tag dict exifread produces into (tag name, printable value)
    pairs, with the IFD prefix stripped from the tag name.
    """

    def decode(self, fh: BinaryIO) -> List[DecodedField]:
        try:
            # details=False skips MakerNotes and thumbnails
            tags = exifread.process_file(fh, details=False)
        except Exception as e:
            raise MetadataDecodeError(str(e)) from e

        # exifread returns an empty dict (and logs) for anything it cannot parse
        if not tags:
            raise MetadataDecodeError("No EXIF data found")

        return [(self._field_id(key), self._display(key, tag)) for key, tag in tags.items()]

    @staticmethod
    def _field_id(key: str) -> str:
        prefix, _, name = key.partition(' ')
        if name and prefix in config.IFD_PREFIXES:
            return name
        return key

    def _display(self, key: str, tag) -> str:
        """
        exifread prints rationals as reduced fractions ("14/5"). Apertures
        and focal lengths read better as decimals ("2.8", "53.5", "50");
        everything else, exposure time included, keeps exifread's form.
        """
        values = getattr(tag, 'values', None)
        if self._field_id(key) not in config.DECIMAL_TAGS or not values:
            return str(tag)

        value = values[0]
        if not hasattr(value, 'denominator'):
            return str(tag)
        if value.denominator == 0:
            return config.SENTINEL_VALUE
        return f"{value.numerator / value.denominator:g}"


class FieldExtractor:
    """
    Reads one image and feeds its tracked fields into an aggregator.

    Open and decode failures are swallowed here; a single bad file must
    never abort or skew the rest of the scan.
    """

    def __init__(self, decoder: Optional[MetadataDecoder] = None):
        self.decoder = decoder or MetadataDecoder()

    def extract(self,
                path: Path,
                aggregator: FrequencyAggregator,
                counters: Optional[ScanCounters] = None) -> bool:
        """
        Returns True when the file decoded (even if no tracked field was
        present), False when it was skipped.
        """
        try:
            with path.open('rb') as f:
                fields = self.decoder.decode(f)
        except (OSError, MetadataDecodeError) as e:
            logging.debug(f"EXIF read failed for {path}: {e}")
            return False

        seen: Set[TrackedField] = set()
        for field_id, value in fields:
            tracked = TrackedField.from_tag(field_id)
            if tracked is None:
                continue
            # "0" is the placeholder for an absent or unreadable value
            if value == config.SENTINEL_VALUE:
                continue
            # Malformed containers can repeat a tag; first one wins
            if tracked in seen:
                continue
            seen.add(tracked)
            aggregator.record(tracked, value)

        if counters is not None:
            counters.image_decoded()
        return True
