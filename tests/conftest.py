import pytest
from pathlib import Path
from PIL import Image, TiffImagePlugin

from exif_stats.exceptions import MetadataDecodeError
from exif_stats.metadata.extract import MetadataDecoder


@pytest.fixture
def fake_exif(monkeypatch):
    """
    Replaces the exifread-backed decoder with a lookup by file name.

    Register `registry["a.jpg"] = [("FNumber", "2.8")]`; any file not
    registered fails to decode, the way a corrupt JPEG would.
    """
    registry = {}

    def decode(self, fh):
        name = Path(fh.name).name
        if name not in registry:
            raise MetadataDecodeError(f"Not a JPEG: {name}")
        return list(registry[name])

    monkeypatch.setattr(MetadataDecoder, "decode", decode)
    return registry


def write_exif_jpeg(path: Path, fnumber=(5, 2), focal_length=None, exposure_time=None):
    """Writes a tiny JPEG carrying FNumber and, optionally, FocalLength and ExposureTime."""
    exif = Image.Exif()
    exif[0x829D] = TiffImagePlugin.IFDRational(*fnumber)
    if focal_length:
        exif[0x920A] = TiffImagePlugin.IFDRational(*focal_length)
    if exposure_time:
        exif[0x829A] = TiffImagePlugin.IFDRational(*exposure_time)
    with Image.new("RGB", (8, 8), color="white") as im:
        im.save(path, "JPEG", exif=exif)
    return path
