"""Measurement data (diode, voltage, resistance) for the nets and parts of a board."""

from __future__ import annotations

import os
import re
import string
import struct
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote_to_bytes

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)

_HEX_FLOAT_RE = re.compile(r"0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?")
_DEC_FLOAT_RE = re.compile(r"[0-9]+(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?")

DEFAULT_CONDITION = "Default"
UNCONNECTED_NET = "UNCONNECTED"

Row = tuple[str, str, str, str, str]


@dataclass
class ComponentDatum:
    component_name: str = ""
    valuetype: str = ""
    value: str = ""
    comment: str = ""


@dataclass
class NetworkDatum:
    network: str = ""
    condition: str = ""
    valuetype: str = ""
    value: str = ""
    comment: str = ""


def url_decode(text: str) -> str:
    """Decode %XX escapes, then turn every '+' into a space."""
    decoded = unquote_to_bytes(text.encode(_ENCODING, _ERRORS)).decode(_ENCODING, _ERRORS)
    return decoded.replace("+", " ")


def url_encode(text: str) -> str:
    """Escape every byte except ASCII letters, digits and '-._~'."""
    return quote(text.encode(_ENCODING, _ERRORS), safe="")


def _to_single(number: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", number))[0]
    except OverflowError:
        return float("inf")


def format_measurement(value: str) -> str:
    """Show a value starting with a digit with three decimals, anything else as is."""
    if not value or not "0" <= value[0] <= "9":
        return value
    match = _HEX_FLOAT_RE.match(value)
    if match is not None:
        token = match.group(0)
        if "p" not in token.lower():
            token += "p0"
        number = float.fromhex(token)
    else:
        number = float(_DEC_FLOAT_RE.match(value).group(0))
    return f"{_to_single(number):.3f}"


def _fields(text: str, delimiter: str, count: int) -> list[str]:
    parts = text.split(delimiter)[:count]
    return parts + [""] * (count - len(parts))


class OBData:
    """Measurement data loaded from a data file, queried by net and part name."""

    def __init__(self) -> None:
        self.components: list[ComponentDatum] = []
        self.networks: list[NetworkDatum] = []
        self.conditions: list[str] = []
        self.current_condition = ""
        self.datapoints = 0
        self.file_loaded = False
        self.file_open_error = False
        self.current_filename: Path | None = None
        self._last_network = ""
        self.reset_pin_values()
        self.reset_part_values()

    def load(self, filepath: str | os.PathLike) -> None:
        """Read the data file at *filepath*, adding its records to those held."""
        self.datapoints = 0
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"OBData file not found: {path}")
        self.current_filename = path
        self.file_loaded = False
        try:
            data = path.read_bytes()
        except OSError:
            self.file_open_error = True
            self.file_loaded = False
            raise

        lines = data.decode(_ENCODING, _ERRORS).split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        in_components = False
        in_networks = False
        network_count = 0
        for line in lines:
            if len(line) == 1 or line.startswith("###"):
                continue
            if "COMPONENTS_DATA_START" in line:
                in_components = True
                continue
            if "NETS_DATA_START" in line:
                in_networks = True
                continue
            if in_components:
                if "COMPONENTS_DATA_END" in line:
                    in_components = False
                    continue
                name, valuetype, value = _fields(line, " ", 3)
                self.components.append(ComponentDatum(name, valuetype, value))
            if in_networks:
                if "NETS_DATA_END" in line:
                    in_networks = False
                    continue
                head, valuetype, value, comment = _fields(line, " ", 4)
                network, condition = _fields(head, "/", 2)
                datum = NetworkDatum(network, condition, valuetype, value, comment)
                self.networks.append(datum)
                if datum.network != self._last_network:
                    if datum.condition.translate(_ASCII_UPPER) == "DEFAULT":
                        network_count += 1
                    self._last_network = datum.network

        self.file_loaded = True
        self.datapoints = network_count
        current = ""
        for datum in self.networks:
            if datum.condition != current:
                current = datum.condition
                self.conditions.append(current)
        self.current_condition = DEFAULT_CONDITION

    def get_part_value(self, partname: str) -> str:
        """The value of the last record for *partname*, after a newline; '' if none."""
        if not self.file_loaded or not self.components:
            return ""
        self.reset_part_values()
        last = None
        for part in self.components:
            if part.component_name == partname:
                self.append_part(part)
                last = part
        return "" if last is None else "\n" + last.value

    def reset_pin_values(self) -> None:
        self.diode = "-"
        self.voltage = "-"
        self.resistance = "-"
        self.alias = ""
        self.comment = ""

    def append_pin(self, pin: NetworkDatum) -> None:
        """Take one net measurement: d(iode), v(oltage), r(esistance), a(lias), t(ext)."""
        if pin.valuetype == "d":
            self.diode = pin.value
        if pin.valuetype == "v":
            self.voltage = pin.value
        if pin.valuetype == "r":
            self.resistance = pin.value
        if pin.valuetype == "a":
            self.alias = pin.value
        if pin.valuetype == "t":
            self.comment = pin.value

    def reset_part_values(self) -> None:
        self.value = ""
        self.package = ""
        self.mfg_code = ""
        self.rating = ""
        self.misc = ""
        self.status = ""

    def append_part(self, part: ComponentDatum) -> None:
        """Take one part field: v(alue), p(ackage), c(ode), r(ating), m(isc), s(tatus)."""
        if part.valuetype == "v":
            self.value = part.value
        if part.valuetype == "p":
            self.package = part.value
        if part.valuetype == "c":
            self.mfg_code = part.value
        if part.valuetype == "r":
            self.rating = part.value
        if part.valuetype == "m":
            self.misc = part.value
        if part.valuetype == "s":
            self.status = part.value

    def condition_rows(self, pins: list[NetworkDatum]) -> list[Row]:
        """One (condition, D, V, R, note) row per condition among *pins*, in first-seen order."""
        if not pins:
            return []
        order: list[str] = []
        for pin in pins:
            if pin.condition not in order:
                order.append(pin.condition)
        rows: list[Row] = []
        active = pins[0]
        self.reset_pin_values()
        for condition in order:
            for pin in pins:
                if pin.condition == condition:
                    self.append_pin(pin)
                    active = pin
            rows.append(
                (
                    url_decode(active.condition),
                    format_measurement(self.diode),
                    format_measurement(self.voltage),
                    self.resistance.translate(_ASCII_UPPER),
                    url_decode(self.comment),
                )
            )
            self.reset_pin_values()
        return rows

    def pins_for_net(self, net_name: str) -> list[NetworkDatum]:
        """Every measurement recorded for *net_name*."""
        return [datum for datum in self.networks if datum.network == net_name]

    def testpad_tooltip(self, pin_name: str, net_name: str) -> tuple[str, list[Row]]:
        """Tooltip text and table rows for a test pad on *net_name*."""
        self.reset_pin_values()
        pins = self.pins_for_net(net_name)
        for pin in pins:
            self.append_pin(pin)
        if not pins:
            return f"No OBData present for {net_name}", []
        text = (
            f"Pin name: TP_{net_name}\nTest pad: {net_name}\n"
            f"TP_{net_name} / {pin_name} {net_name}\n\nTest pad"
        )
        return text, self.condition_rows(pins)

    def pin_tooltip(self, part_name: str, pin_name: str | None, net_name: str) -> tuple[str, list[Row]]:
        """Tooltip text and table rows for a pin, filtered by the current condition."""
        pins = []
        for pin in self.pins_for_net(net_name):
            if self.current_condition != DEFAULT_CONDITION:
                if url_decode(pin.condition) == self.current_condition or pin.condition != DEFAULT_CONDITION:
                    pins.append(pin)
            else:
                pins.append(pin)
        shown_pin = pin_name if pin_name is not None else " "
        header = f"{part_name}:{shown_pin} {net_name}\n\n"
        if pins:
            return header + "Normal pin", self.condition_rows(pins)
        kind = "Not Connected\n" if net_name == UNCONNECTED_NET else "Normal pin\n"
        return f"{header}{kind}No OBData present for '{net_name}'", []

    def part_tooltip(self, part_name: str) -> str:
        """Tooltip text listing the known fields of *part_name*."""
        self.reset_part_values()
        found = False
        for part in self.components:
            if part.component_name == part_name:
                self.append_part(part)
                found = True
        if not found:
            return part_name
        text = ""
        if len(self.value) > 1:
            text += f"Value: {self.value}\n"
        if len(self.package) > 1:
            text += f"Package: {self.package}\n"
        if len(self.mfg_code) > 1:
            text += f"Mfg_Code: {self.mfg_code}\n"
        if len(self.rating) > 1:
            text += f"Rating: {self.rating}\n"
        if len(self.misc) > 1:
            text += f"Misc: {self.misc}\n"
        if len(self.status) > 2:
            text += f"Status: {self.status}\n"
        return f"{part_name}\n{text}"

    def select_condition(self, condition: str) -> None:
        """Make the (URL-encoded) *condition* the one pin tooltips show."""
        self.current_condition = url_decode(condition)