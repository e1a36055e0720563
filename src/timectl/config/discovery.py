"""Config file discovery.

Walk-up finder locates ``timectl.toml``, the way git finds ``.git/``.
The ``TIMECTL_CONFIG`` env var and the ``--config`` flag override it.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "timectl.toml"
CONFIG_ENV_VAR = "TIMECTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``timectl.toml``.

    ``TIMECTL_CONFIG`` is checked first; when it is set but points at no
    file, no config is used at all.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent
