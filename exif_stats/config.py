"""
Configuration constants for the EXIF stats scanner.
"""

# --- File Type Definitions ---
# Only plain '.jpg' is scanned; the check is case-insensitive.
JPEG_EXTS = {'.jpg'}

# --- Traversal ---
# The scan root is depth 0, its direct children depth 1, and so on.
MAX_SCAN_DEPTH = 4

# --- Metadata Parsing ---
# Decoders render unreadable/absent readings as "0".
SENTINEL_VALUE = "0"

# Rational tags rendered as decimals ("2.8") rather than fractions ("14/5").
DECIMAL_TAGS = {'FNumber', 'FocalLength'}

# exifread prefixes tag names with the IFD they came from ("EXIF FNumber").
# The prefix is stripped before matching against the tracked fields.
IFD_PREFIXES = ('Image', 'EXIF', 'Thumbnail', 'Interoperability', 'GPS', 'MakerNote')

# --- Performance ---
DEFAULT_MAX_WORKERS = 8

# --- Year Partitioning ---
DEFAULT_YEARS = [str(year) for year in range(2000, 2023)]

# --- Reporting ---
REPORT_FILENAME_PATTERN = "camera_photo_analyze_report{year}.json"

# --- HTTP Service ---
API_HOST = "0.0.0.0"
API_PORT = 3000
