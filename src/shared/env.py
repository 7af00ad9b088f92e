"""Environment utilities for resolving secret files.

Credentials such as the time-series API token can be mounted as Docker
secrets: setting ``SEMETRIC_TOKEN_FILE=/run/secrets/token`` exposes the
file content as ``SEMETRIC_TOKEN`` before the settings are loaded.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

FILE_SUFFIX = "_FILE"


def load_secret_file_variables() -> List[str]:
    """
    Resolve environment variables that follow Docker secret conventions.

    For every KEY_FILE entry, read the referenced file and expose its
    contents via KEY, unless KEY is already set. Errors are logged but do
    not raise exceptions.

    Returns:
        Names of the variables that were populated.
    """
    resolved: List[str] = []

    for key, file_path in list(os.environ.items()):
        if not key.endswith(FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(FILE_SUFFIX)]
        if os.environ.get(target_key):
            continue

        extra = {"key": key, "path": file_path}
        try:
            value = Path(file_path).read_text(encoding="utf-8").strip()
        except FileNotFoundError as exc:
            logger.warning(
                "env.secret_file.missing", extra={**extra, "error": str(exc)}
            )
            continue
        except UnicodeDecodeError as exc:
            logger.warning(
                "env.secret_file.decode_failed", extra={**extra, "error": str(exc)}
            )
            continue
        except OSError as exc:
            logger.warning(
                "env.secret_file.load_failed", extra={**extra, "error": str(exc)}
            )
            continue

        os.environ[target_key] = value
        resolved.append(target_key)

    return resolved


# Ensure the util can be imported without manual invocation.
load_secret_file_variables()
