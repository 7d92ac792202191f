"""Resolve Docker-style ``*_FILE`` secrets into environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

SECRET_FILE_SUFFIX = "_FILE"


def load_secret_file_variables(prefix: str = "AXIOM_") -> List[str]:
    """
    Expose the contents of ``<KEY>_FILE`` as ``<KEY>`` for keys under ``prefix``.

    A variable that is already set is never overwritten. Unreadable files are
    logged and skipped, so settings validation reports the missing value.

    Returns:
        The names of the variables that were populated.
    """
    resolved: List[str] = []
    for key, file_path in list(os.environ.items()):
        if not key.startswith(prefix) or not key.endswith(SECRET_FILE_SUFFIX):
            continue
        target_key = key[: -len(SECRET_FILE_SUFFIX)]
        if os.environ.get(target_key) or not file_path:
            continue
        try:
            os.environ[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        resolved.append(target_key)
    return resolved
