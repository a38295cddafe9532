"""Reader and writer for the ``key = value`` configuration file format.

Keys must start a line. Anything after the key made of ``=``, spaces and
tabs is skipped, and the value runs to the end of the line. Writes replace
the value in place, keeping every other byte of the file.
"""

from __future__ import annotations

import math
import os
import re
from pathlib import Path

MAX_VALUE_SIZE = 10240
_NEW_KEY_LINE_MAX = 1024
APP_NAME = "OpenBoardView"

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_UINT32_MAX = 0xFFFFFFFF

_SPACE = "[ \t\n\v\f\r]*"
_INT_RE = re.compile(_SPACE + r"([+-]?[0-9]+)")
_HEX_RE = re.compile(_SPACE + r"([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")
_FLOAT_RE = re.compile(
    _SPACE
    + r"([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_DEFAULT_LINES = [
    "#",
    f"# {APP_NAME} configuration",
    "#",
    "# Renderer options",
    "#  1 = OpenGL1",
    "#  2 = OpenGL3",
    "#  3 = OpenGLES2",
    "renderer=2",
    "",
    "windowX=1200",
    "windowY=700",
    "",
    "# Reference DPI is 100, increase if you have a higher density (ie, small 4K or 2K screen)",
    "dpi=100",
    "",
    "fontName = ",
    "fontSize = 20",
    "showInfoPanel = true",
    "infoPanelWidth = 300",
    "showPins = true",
    "showPosition = true",
    "showNetWeb = true",
    "showBackgroundImage = true",
    "pinSelectMasks = true",
    "pinSizeThresholdLow = 0",
    "pinShapeCircle = true",
    "pinShapeSquare = false",
    "",
    "slowCPU =       false",
    "showFPS =       false",
    "pinHalo =       false",
    "pinHaloDiameter = 1.1",
    "pinHaloThickness = 4",
    "",
    "fillParts =\t\ttrue",
    "showPartName =  true",
    "showPinName =  true",
    "boardFill =\t\ttrue",
    "boardFillSpacing = 3",
    "",
    "zoomFactor = 5",
    "zoomModifier = 5",
    "",
    "panFactor = 30",
    "panModifier = 5",
    "",
    "centerZoomSearchResults = true",
    "infoPanelCenterZoomNets = true",
    "infoPanelSelectPartsOnNet = true",
    "partZoomScaleOutFactor = 3.0",
    "",
    "# Flip board modes",
    "#  0: flip whole board in view port, shift-flip to flip around mouse ptr",
    "#  1: flip around mouse ptr, shift-flip to flip view port",
    "flipMode = 0",
    "",
    "showAnnotations = true",
    "annotationBoxSize = 20",
    "annotationBoxOffset = 8",
    "",
    "netWebThickness = 2",
    "",
    "pdfSoftwarePath = SumatraPDF.exe",
    "#",
    '# "XRayBlue" Theme',
    "# Colors, format is 0xRRGGBBAA",
    "#",
    "# There's two built in themes, light (default) and dark ",
    "#colorTheme = default",
    "#colorTheme = dark",
    "colorTheme = light",
    "backgroundColor\t\t= 0xffffffff",
    "boardFillColor\t= 0xddddddff",
    "partOutlineColor = 0x444444ff",
    "partHullColor\t\t\t= 0x80808080",
    "partFillColor = 0xffffff77",
    "partTextColor\t\t\t= 0x80808080",
    "partHighlightedFillColor = 0xf4f0f0ff",
    "partHighlightedColor = 0xff0000ee",
    "partHighlightedTextColor\t\t\t= 0xff3030ff",
    "partHighlightedTextBackgroundColor\t\t\t= 0xffff00ff",
    "",
    "# Pin colourings.",
    "#  default is for pins that aren't selected",
    "#  selected is for the actual clicked on pin",
    "#  highlighted is for pins usually on the same network as the selected",
    "#",
    "# There's an absense of 'fill' colours on most because the CPU hit is",
    "# moderately high to do them all ",
    "#",
    "boardOutlineColor\t\t\t= 0x444444ff",
    "pinDefaultColor\t\t\t\t= 0x22aa33ff",
    "pinDefaultTextColor\t\t\t= 0x666688ff",
    "pinTextBackgroundColor\t\t= 0xffffff80",
    "pinGroundColor\t\t\t\t= 0x2222aaff",
    "pinNotConnectedColor\t\t= 0xaaaaaaff",
    "pinTestPadColor\t\t\t\t= 0x888888ff",
    "pinTestPadFillColor\t\t\t\t= 0xbd9e2dff",
    "",
    "pinSelectedColor\t\t\t\t= 0x00000000",
    "pinSelectedFillColor\t\t\t= 0x8888ffff",
    "pinSelectedTextColor\t\t\t= 0xffffffff",
    "",
    "pinSameNetColor\t\t\t= 0x0000ffff",
    "pinSameNetFillColor\t\t= 0x9999ffff",
    "pinSameNetTextColor\t\t= 0x111111ff",
    "",
    "pinHaloColor\t\t\t= 0x22FF2288",
    "",
    "pinNetWebColor = 0xff0000aa",
    "pinNetWebOSColor = 0x0000ff33",
    "",
    "annotationPopupTextColor = 0x000000ff",
    "annotationPopupBackgroundColor = 0xeeeeeeff",
    "annotationBoxColor = 0xff0000aa",
    "annotationStalkColor = 0x000000ff",
    "",
    "selectedMaskPins\t\t= 0xffffffff",
    "selectedMaskParts\t\t= 0xffffffff",
    "selectedMaskOutline\t\t= 0xffffffff",
    "",
    "orMaskPins\t\t= 0x00000000",
    "orMaskParts\t\t= 0x00000000",
    "orMaskOutline\t= 0x00000000",
    "# EndColors",
    "",
    "# FZKey requires 44 32-bit values in order for it to work.",
    "#  If you have the key, put it in here as a single line, each value comma separated",
    "#FZKey = 0x12345678, 0x12345678",
    "FZKey =   ",
    "",
    "# END OF CONF",
]

DEFAULT_CONF = "\r\n".join(_DEFAULT_LINES) + "\r\n"


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


class Confparse:
    """A configuration file held in memory and re-read after every write."""

    def __init__(self) -> None:
        self.filepath: Path | None = None
        self.conf: str | None = None

    def load(self, filepath: str | os.PathLike, save_default: bool = False) -> None:
        """Read *filepath*; create it (empty, or with the defaults) if it is missing."""
        path = Path(filepath)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            self.conf = None
            if save_default:
                self.save_default(path)
                return
            path.write_bytes(b"")
            data = path.read_bytes()
        self.filepath = path
        self.conf = data.decode(_ENCODING, _ERRORS)

    def save_default(self, filepath: str | os.PathLike) -> None:
        """Write the default configuration to *filepath* and load it."""
        path = Path(filepath)
        path.write_bytes(DEFAULT_CONF.encode(_ENCODING, _ERRORS))
        self.load(path)

    def _locate(self, key: str) -> tuple[int, int] | None:
        """Return the start and end offsets of the value of *key*."""
        conf = self.conf
        if not conf or not key:
            return None
        limit = len(conf)
        keylen = len(key)
        start = conf.find(key)
        while start != -1:
            pos = start + keylen
            if pos < limit and not _is_alnum(conf[pos]):
                while pos < limit and conf[pos] in "= \t":
                    pos += 1
                if pos < limit and (start == 0 or conf[start - 1] in "\r\n"):
                    end = pos
                    while end < limit and conf[end] not in "\0\n\r":
                        end += 1
                    return pos, end
            start = conf.find(key, start + 1)
        return None

    def parse(self, key: str) -> str | None:
        """Return the raw value of *key*, or None if it is not set."""
        found = self._locate(key)
        if found is None:
            return None
        start, end = found
        return self.conf[start : min(end, start + MAX_VALUE_SIZE)]

    def parse_str(self, key: str, default: str | None = None) -> str | None:
        value = self.parse(key)
        return default if value is None else value

    def parse_int(self, key: str, default: int = 0) -> int:
        value = self.parse(key)
        if value is None:
            return default
        match = _INT_RE.match(value)
        if match is None:
            return 0
        number = int(match.group(1))
        if not _INT32_MIN <= number <= _INT32_MAX:
            return default
        return number

    def parse_hex(self, key: str, default: int = 0) -> int:
        value = self.parse(key)
        if value is None:
            return default
        if value.startswith("0x"):
            value = value[2:]
        match = _HEX_RE.match(value)
        if match is None:
            return 0
        number = int(match.group(2), 16)
        if number > _UINT32_MAX:
            return default
        if match.group(1) == "-":
            number = -number & _UINT32_MAX
        return number

    def parse_double(self, key: str, default: float = 0.0) -> float:
        value = self.parse(key)
        if value is None:
            return default
        match = _FLOAT_RE.match(value)
        if match is None:
            return 0.0
        text = match.group(1)
        number = float(text)
        literal_inf = "inf" in text.lower()
        if math.isinf(number) and not literal_inf:
            return default
        if number == 0.0 and any(c in "123456789" for c in text.split("e")[0].split("E")[0]):
            return default
        return number

    def parse_bool(self, key: str, default: bool = False) -> bool:
        value = self.parse(key)
        if value is None:
            return default
        return value == "true"

    def _write(self, text: str, mode: str = "wb") -> None:
        with open(self.filepath, mode) as handle:
            handle.write(text.encode(_ENCODING, _ERRORS))

    def _backup(self) -> None:
        path = self.filepath
        os.replace(path, path.with_name(path.name + "~"))

    def write_str(self, key: str, value: str | None) -> bool:
        """Set *key* to *value* in the file; False if nothing is loaded."""
        if self.conf is None or self.filepath is None or value is None or not key:
            return False
        conf = self.conf
        value = str(value)
        if key not in conf:
            self._backup()
            line = f"\r\n{key} = {value}"[: _NEW_KEY_LINE_MAX - 1]
            self._write(conf + line)
        else:
            found = self._locate(key)
            if found is not None:
                start, end = found
                self._backup()
                self._write(conf[:start] + value + conf[end:])
            else:
                line = f"{key} = {value}\r\n"[: MAX_VALUE_SIZE - 1]
                self._write(line, "ab")
        self.load(self.filepath)
        return True

    def write_bool(self, key: str, value: bool) -> bool:
        return self.write_str(key, "true" if value else "false")

    def write_int(self, key: str, value: int) -> bool:
        return self.write_str(key, str(int(value)))

    def write_hex(self, key: str, value: int) -> bool:
        return self.write_str(key, f"0x{int(value) & _UINT32_MAX:08x}")

    def write_float(self, key: str, value: float) -> bool:
        return self.write_str(key, f"{float(value):f}")