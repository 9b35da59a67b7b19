from __future__ import annotations

"""
Input Path Validator.

Read-only pre-flight check run before any archiving work begins.
"""

import logging
import os
from typing import Sequence

from foldervault.domain.errors import InputNotFoundError

logger = logging.getLogger(__name__)


def validate_paths(paths: Sequence[str]) -> None:
    """
    Ensure every requested input path exists.

    Args:
        paths: Ordered input paths (files or directories).

    Raises:
        InputNotFoundError: For the first missing path in input order, or
            when `paths` is empty.
    """
    if not paths:
        raise InputNotFoundError("")

    for path in paths:
        # Dangling links count as missing
        if not path or not os.path.exists(path):
            logger.error(f"Input path does not exist: {path}")
            raise InputNotFoundError(path)
