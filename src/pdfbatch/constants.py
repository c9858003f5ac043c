"""Centralized constants for pdfbatch.

File-name conventions shared by the job collaborators and the executors,
plus the rotation angles the transform engine accepts.
"""

# Rotation angles (degrees, counter-clockwise)
ROTATE_ANGLES = (0, 90, 180, 270)

# Job archive layout
CONFIG_GLOB = "*.config.json"
INDEX_SUFFIX = ".idx"
INDEX_SEPARATOR = "||"
PDF_SUFFIX = ".pdf"
MANIFEST_SUFFIX = ".error.json"

# Workspace layout (relative to the per-job workspace root)
OUTPUT_DIRNAME = "output"
CONFIG_DIRNAME = "config"

# Text extraction page marker
PAGE_MARKER_DELIMITER = "||"
PAGE_MARKER_WIDTH = 10

# Server config defaults
DEFAULT_SERVER_CONFIG = "serverconfig.yaml"
DEFAULT_LOG_DIR = "./log"
DEFAULT_OUT_DIR = "./output"
DEFAULT_WORK_DIR = "./work"
LOG_FILENAME = "pdfbatch.log"
