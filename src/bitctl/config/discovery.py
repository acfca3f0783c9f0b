"""Config file discovery.

Walks up from the working directory looking for ``bitctl.toml``, the
way git finds ``.git/``. ``BITCTL_CONFIG`` overrides the search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "bitctl.toml"
CONFIG_ENV_VAR = "BITCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``bitctl.toml`` at or above *start* (default: cwd).

    When ``BITCTL_CONFIG`` is set, only that path is considered; None is
    returned if it does not point at a file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
