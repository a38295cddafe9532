"""Documents linked to a board file (schematic PDF, measurement data) and the bridges that show them."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .confparse import Confparse

_log = logging.getLogger(__name__)


class DocumentBridge:
    """Connection to an external document viewer; this base only tracks state."""

    def __init__(self) -> None:
        self.document: LinkedFile | None = None
        self.last_search: tuple[str, bool, bool] | None = None

    def open_document(self, document: LinkedFile) -> None:
        """Show *document* in the viewer."""
        self.document = document

    def close_document(self) -> None:
        """Stop showing the current document."""
        self.document = None
        self.last_search = None

    def document_search(self, text: str, whole_words_only: bool, case_sensitive: bool) -> None:
        """Search the open document for *text*."""
        self.last_search = (text, whole_words_only, case_sensitive)

    def has_new_selection(self) -> bool:
        return False

    @property
    def selection(self) -> str:
        return ""


class LinkedFile:
    """A document whose path is stored in a board's configuration file."""

    extension = ""
    config_key = ""

    def __init__(self, bridge: DocumentBridge | None) -> None:
        self.bridge = bridge
        self.path: Path | None = None
        self.config_filepath: Path | None = None

    def _require_bridge(self, action: str) -> DocumentBridge:
        if self.bridge is None:
            raise RuntimeError(f"{type(self).__name__} could not {action}: no bridge")
        return self.bridge

    def reload(self) -> None:
        """Close the document in the viewer and open it again."""
        bridge = self._require_bridge("reload")
        bridge.close_document()
        bridge.open_document(self)

    def close(self) -> None:
        self._require_bridge("close").close_document()

    def load_from_config(self, filepath: str | os.PathLike) -> None:
        """Take the document path from the configuration file *filepath*.

        Without a configured path, the document sits beside the config file
        with its extension replaced.
        """
        config = Path(filepath)
        self.config_filepath = config
        self.path = config.with_suffix("." + self.extension)
        if not config.exists():
            return
        config_dir = config.resolve().parent
        confparse = Confparse()
        confparse.load(config)
        stored = confparse.parse_str(self.config_key, "")
        if stored:
            self.path = config_dir / stored
        self.write_to_config(config)

    def write_to_config(self, filepath: str | os.PathLike) -> None:
        """Store the document path, relative to the config file's directory."""
        if not os.fspath(filepath):
            return
        config = Path(filepath)
        confparse = Confparse()
        confparse.load(config)
        config_dir = config.resolve().parent
        if self.path is None or not os.fspath(self.path):
            return
        try:
            relative = os.path.relpath(Path(self.path).resolve(), config_dir)
        except ValueError as exc:
            _log.error("Error writing %s: %s", self.config_key, exc)
            return
        confparse.write_str(self.config_key, relative)


class PDFFile(LinkedFile):
    """The schematic PDF of a board."""

    extension = "pdf"
    config_key = "PDFFilePath"


class OBDataFile(LinkedFile):
    """The measurement data file of a board."""

    extension = "obd"
    config_key = "OBDataFilePath"