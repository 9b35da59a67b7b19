from __future__ import annotations

"""
Domain Constants.

Centralizes the stable error-code vocabulary exposed at the service boundary,
compression presets and the config schema version.
"""

import zipfile
from typing import Dict

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# BOUNDARY ERROR CODES
# -----------------------------------------------------------------------------

INVALID_ARGS = "INVALID_ARGS"
FILE_NOT_FOUND = "FILE_NOT_FOUND"
SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
ZIP_NOT_FOUND = "ZIP_NOT_FOUND"
DIRECTORY_CREATION_FAILED = "DIRECTORY_CREATION_FAILED"
COMPRESSION_FAILED = "COMPRESSION_FAILED"
COMPRESSION_ERROR = "COMPRESSION_ERROR"
EXTRACTION_FAILED = "EXTRACTION_FAILED"
SIZE_CALCULATION_ERROR = "SIZE_CALCULATION_ERROR"
COUNT_ERROR = "COUNT_ERROR"
NOT_IMPLEMENTED = "NOT_IMPLEMENTED"

# -----------------------------------------------------------------------------
# COMPRESSION PRESETS
# -----------------------------------------------------------------------------

COMPRESSION_METHODS: Dict[str, int] = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}

DEFAULT_COMPRESSION = "deflated"
MIN_COMPRESSION_LEVEL = 0
MAX_COMPRESSION_LEVEL = 9
