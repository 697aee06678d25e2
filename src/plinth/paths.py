"""Common path utilities for plinth."""

from __future__ import annotations

import os
from pathlib import Path


def get_plinth_home() -> Path:
    """Return the base plinth directory, honoring PLINTH_HOME if set."""

    env_path = os.environ.get("PLINTH_HOME")
    return Path(env_path).expanduser() if env_path else Path.home() / ".plinth"


__all__ = ["get_plinth_home"]
