"""Per-user configuration and data directories."""

from __future__ import annotations

import enum
import os
from collections.abc import Mapping

from .confparse import APP_NAME


class UserDir(enum.Enum):
    CONFIG = "config"
    DATA = "data"


def create_dir(path: str) -> bool:
    """Create *path* if missing; True if it ends up being a directory."""
    if not os.path.exists(path):
        try:
            os.mkdir(path, 0o700)
        except OSError:
            pass
    return os.path.isdir(path)


def create_dirs(path: str) -> bool:
    """Create every directory leading up to the last '/' of *path*."""
    pos = path.find("/", 1)
    while pos != -1:
        if not create_dir(path[: pos + 1]):
            return False
        pos = path.find("/", pos + 1)
    return True


def get_user_dir(userdir: UserDir, environ: Mapping[str, str] | None = None) -> str:
    """The application's directory of the given kind, ending in '/', or './' on failure."""
    env = os.environ if environ is None else environ
    if userdir is UserDir.CONFIG:
        base = env.get("XDG_CONFIG_HOME", "")
    else:
        base = env.get("XDG_DATA_HOME", "")
    path = ""
    if base:
        path = base
    else:
        home = env.get("HOME", "")
        if home:
            suffix = "/.config" if userdir is UserDir.CONFIG else "/.local/share"
            path = home + suffix
    if path:
        path += f"/{APP_NAME}/"
        if create_dirs(path):
            return path
    return "./"