"""Small file and string helpers."""

from __future__ import annotations

import os
import string
from pathlib import Path

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class NotARegularFileError(OSError):
    """The path exists but is not a regular file, or does not exist."""


def file_as_buffer(filepath: str | os.PathLike) -> bytes:
    """Return the whole content of a regular file."""
    path = Path(filepath)
    if not path.is_file():
        raise NotARegularFileError(f"Error opening {path}: Not a regular file")
    return path.read_bytes()


def check_fileext(filepath: str | os.PathLike, fileext: str) -> bool:
    """Whether the extension of *filepath*, lowercased, equals *fileext*."""
    return Path(filepath).suffix.translate(_ASCII_LOWER) == fileext


def find_str_in_buf(needle: str | bytes, buf: bytes) -> bool:
    """Whether *needle* occurs in *buf*."""
    if isinstance(needle, str):
        needle = needle.encode("utf-8", "surrogateescape")
    return needle in bytes(buf)


def compare_string_insensitive(a: str, b: str) -> bool:
    """Equality of two strings, ignoring ASCII case."""
    return len(a) == len(b) and a.translate(_ASCII_LOWER) == b.translate(_ASCII_LOWER)


def lookup_file_insensitive(path: str | os.PathLike, filename: str) -> Path:
    """Find the entry of directory *path* whose name matches *filename* ignoring case."""
    directory = Path(path)
    try:
        entries = list(os.scandir(directory))
    except OSError as exc:
        raise OSError(
            exc.errno, f"Error looking up '{filename}' in '{directory}': {exc.strerror}"
        ) from exc
    for entry in entries:
        if compare_string_insensitive(entry.name, filename):
            return Path(entry.path)
    raise FileNotFoundError(f"{filename}: file not found in '{directory}'.")


def split_string(text: str, delimiter: str | None = None) -> list[str]:
    """Split on whitespace runs, or on every *delimiter* without a trailing empty field."""
    if delimiter is None:
        return text.split()
    if not text:
        return []
    parts = text.split(delimiter)
    if text.endswith(delimiter):
        parts.pop()
    return parts