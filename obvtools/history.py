"""Most-recently-opened file list stored one path per line."""

from __future__ import annotations

import os

HISTORY_COUNT_MAX = 20
FILENAME_LEN_MAX = 2048

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class FileHistory:
    """The list of recently opened files, newest first."""

    def __init__(self, filename: str | os.PathLike = "") -> None:
        self.filename = filename
        self.entries: list[str] = []

    @property
    def count(self) -> int:
        return len(self.entries)

    def load(self) -> int:
        """Read the history file and return how many entries it holds."""
        if not os.fspath(self.filename):
            raise ValueError("no history file name set")
        self.entries = []
        try:
            handle = open(self.filename, "rb")
        except OSError:
            return 0
        with handle:
            while len(self.entries) < HISTORY_COUNT_MAX:
                chunk = handle.readline(FILENAME_LEN_MAX - 1)
                if not chunk:
                    break
                line = chunk.decode(_ENCODING, _ERRORS)
                for index, char in enumerate(line):
                    if char in "\r\n":
                        line = line[:index]
                        break
                self.entries.append(line)
        return len(self.entries)

    def prepend_save(self, newfile: str) -> None:
        """Put *newfile* first, drop its older copies, save and reload."""
        if not os.fspath(self.filename):
            return
        lines = [newfile] + [entry for entry in self.entries if entry != newfile]
        with open(self.filename, "wb") as handle:
            for line in lines:
                handle.write((line + "\n").encode(_ENCODING, _ERRORS))
        self.load()


def trim_filename(path: str, stops: int) -> str:
    """Return the tail of *path* covering its last *stops* components."""
    if not path:
        return path
    pos = len(path) - 1
    while stops and pos > 0:
        if path[pos] in "/\\":
            stops -= 1
        pos -= 1
    if not stops:
        pos += 2
    return path[pos:]