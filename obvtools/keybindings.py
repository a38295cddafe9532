"""Keyboard shortcuts: named actions bound to keys with optional modifiers."""

from __future__ import annotations

import enum
import logging
import string
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .confparse import Confparse
from .utils import split_string

_log = logging.getLogger(__name__)

BINDING_SEPARATOR = "|"
MODIFIER_SEPARATOR = "~"
CONFIG_PREFIX = "KeyBinding"

_KEY_NAMES: list[tuple[str, str]] = (
    [
        ("NONE", "None"),
        ("TAB", "Tab"),
        ("LEFT_ARROW", "LeftArrow"),
        ("RIGHT_ARROW", "RightArrow"),
        ("UP_ARROW", "UpArrow"),
        ("DOWN_ARROW", "DownArrow"),
        ("PAGE_UP", "PageUp"),
        ("PAGE_DOWN", "PageDown"),
        ("HOME", "Home"),
        ("END", "End"),
        ("INSERT", "Insert"),
        ("DELETE", "Delete"),
        ("BACKSPACE", "Backspace"),
        ("SPACE", "Space"),
        ("ENTER", "Enter"),
        ("ESCAPE", "Escape"),
        ("LEFT_CTRL", "LeftCtrl"),
        ("LEFT_SHIFT", "LeftShift"),
        ("LEFT_ALT", "LeftAlt"),
        ("LEFT_SUPER", "LeftSuper"),
        ("RIGHT_CTRL", "RightCtrl"),
        ("RIGHT_SHIFT", "RightShift"),
        ("RIGHT_ALT", "RightAlt"),
        ("RIGHT_SUPER", "RightSuper"),
        ("MENU", "Menu"),
    ]
    + [(f"DIGIT_{digit}", digit) for digit in string.digits]
    + [(letter, letter) for letter in string.ascii_uppercase]
    + [(f"F{number}", f"F{number}") for number in range(1, 13)]
    + [
        ("APOSTROPHE", "'"),
        ("COMMA", ","),
        ("MINUS", "-"),
        ("PERIOD", "."),
        ("SLASH", "/"),
        ("SEMICOLON", ";"),
        ("EQUAL", "="),
        ("LEFT_BRACKET", "["),
        ("BACKSLASH", "\\"),
        ("RIGHT_BRACKET", "]"),
        ("GRAVE_ACCENT", "`"),
        ("CAPS_LOCK", "CapsLock"),
        ("SCROLL_LOCK", "ScrollLock"),
        ("NUM_LOCK", "NumLock"),
        ("PRINT_SCREEN", "PrintScreen"),
        ("PAUSE", "Pause"),
    ]
    + [(f"KEYPAD_{digit}", f"Keypad{digit}") for digit in string.digits]
    + [
        ("KEYPAD_DECIMAL", "KeypadDecimal"),
        ("KEYPAD_DIVIDE", "KeypadDivide"),
        ("KEYPAD_MULTIPLY", "KeypadMultiply"),
        ("KEYPAD_SUBTRACT", "KeypadSubtract"),
        ("KEYPAD_ADD", "KeypadAdd"),
        ("KEYPAD_ENTER", "KeypadEnter"),
        ("KEYPAD_EQUAL", "KeypadEqual"),
        ("MOD_CTRL", "ModCtrl"),
        ("MOD_SHIFT", "ModShift"),
        ("MOD_ALT", "ModAlt"),
        ("MOD_SUPER", "ModSuper"),
    ]
)

# Each member's value is the key's display name.
Key = enum.Enum("Key", _KEY_NAMES, module=__name__)

_NAME_TO_KEY = {key.value: key for key in Key if key is not Key.NONE}

# Keys that must never be treated as ordinary keys.
MODIFIERS = (
    Key.MOD_CTRL,
    Key.MOD_SHIFT,
    Key.MOD_ALT,
    Key.MOD_SUPER,
    Key.LEFT_CTRL,
    Key.LEFT_SHIFT,
    Key.LEFT_ALT,
    Key.LEFT_SUPER,
    Key.RIGHT_CTRL,
    Key.RIGHT_SHIFT,
    Key.RIGHT_ALT,
    Key.RIGHT_SUPER,
)

# Modifiers handled as such; left and right variants count the same.
HANDLED_MODIFIERS = (Key.MOD_CTRL, Key.MOD_SHIFT, Key.MOD_ALT, Key.MOD_SUPER)

# Names that clash with the separators of the configuration format.
_SERIALIZE_NAME = {"|": "Pipe", "~": "Tilde", "=": "Equals"}
_DESERIALIZE_NAME = {alias: name for name, alias in _SERIALIZE_NAME.items()}

KeyTest = Callable[[Key], bool]


def is_modifier(key: Key) -> bool:
    return key in MODIFIERS


def pressed_modifiers(is_down: KeyTest) -> list[Key]:
    """The handled modifiers for which *is_down* holds, in a fixed order."""
    return [key for key in HANDLED_MODIFIERS if is_down(key)]


def _key_from_name(name: str) -> Key:
    name = _DESERIALIZE_NAME.get(name, name)
    key = _NAME_TO_KEY.get(name)
    if key is None:
        _log.error("Unknown key name: %s", name)
        return Key.NONE
    return key


@dataclass(frozen=True)
class KeyBinding:
    """One key, pressed while every modifier is held down."""

    key: Key = Key.NONE
    modifiers: tuple[Key, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "modifiers", tuple(self.modifiers))

    def is_pressed(self, is_down: KeyTest, was_pressed: KeyTest) -> bool:
        """Whether the modifiers are all down and the key was just pressed."""
        return (
            all(mod is not Key.NONE and is_down(mod) for mod in self.modifiers)
            and self.key is not Key.NONE
            and was_pressed(self.key)
        )

    def __str__(self) -> str:
        return "+".join([mod.value for mod in self.modifiers] + [self.key.value])


class KeyBindings:
    """Named actions and the key bindings that trigger them."""

    def __init__(self, platform: str | None = None) -> None:
        self.platform = sys.platform if platform is None else platform
        self.keybindings: dict[str, list[KeyBinding]] = {}
        self.reset()

    def is_pressed(self, name: str, is_down: KeyTest, was_pressed: KeyTest) -> bool:
        """Whether any binding of action *name* is pressed; False for unknown actions."""
        return any(kb.is_pressed(is_down, was_pressed) for kb in self.keybindings.get(name, ()))

    def reset(self) -> None:
        """Restore the default bindings."""
        command = Key.MOD_SUPER if self.platform == "darwin" else Key.MOD_CTRL
        kb = KeyBinding
        self.keybindings = {
            "Quit": [kb(Key.Q, (command,))],
            "Open": [kb(Key.O, (command,))],
            "Search": [kb(Key.F, (command,)), kb(Key.SLASH)],
            "CloseDialog": [kb(Key.ESCAPE)],
            "Validate": [kb(Key.ENTER, (Key.MOD_SHIFT,))],
            "Accept": [kb(Key.ENTER)],
            "Flip": [kb(Key.SPACE)],
            "Mirror": [kb(Key.M)],
            "RotateCW": [kb(Key.R), kb(Key.PERIOD), kb(Key.KEYPAD_DECIMAL)],
            "RotateCCW": [kb(Key.COMMA), kb(Key.KEYPAD_0)],
            # '=' must come last because of how the config values are parsed
            "ZoomIn": [kb(Key.KEYPAD_ADD), kb(Key.EQUAL)],
            "ZoomOut": [kb(Key.MINUS), kb(Key.KEYPAD_SUBTRACT)],
            "PanDown": [kb(Key.S), kb(Key.KEYPAD_2)],
            "PanUp": [kb(Key.W), kb(Key.KEYPAD_8)],
            "PanLeft": [kb(Key.A), kb(Key.KEYPAD_4)],
            "PanRight": [kb(Key.D), kb(Key.KEYPAD_6)],
            "Center": [kb(Key.X), kb(Key.KEYPAD_5)],
            "InfoPanel": [kb(Key.I)],
            "NetList": [kb(Key.L)],
            "PartList": [kb(Key.K)],
            "TogglePins": [kb(Key.P)],
            "Clear": [kb(Key.ESCAPE)],
        }

    def read_from_config(self, config: Confparse) -> None:
        """Replace bindings with those found in *config*, then write them all back."""
        for name in list(self.keybindings):
            line = config.parse_str(CONFIG_PREFIX + name, None)
            if line is None:
                continue
            bindings = []
            for spec in split_string(line, BINDING_SEPARATOR):
                key_names = split_string(spec, MODIFIER_SEPARATOR)
                if not key_names:
                    continue
                keys = [_key_from_name(key_name) for key_name in key_names]
                bindings.append(KeyBinding(keys[-1], keys[:-1]))
            self.keybindings[name] = bindings
        self.write_to_config(config)

    def write_to_config(self, config: Confparse) -> None:
        """Store every binding in *config*."""
        for name, bindings in self.keybindings.items():
            specs = []
            for binding in bindings:
                keys = list(binding.modifiers) + [binding.key]
                specs.append(
                    MODIFIER_SEPARATOR.join(_SERIALIZE_NAME.get(key.value, key.value) for key in keys)
                )
            config.write_str(CONFIG_PREFIX + name, BINDING_SEPARATOR.join(specs))

    def get_key_names(self, bindname: str) -> str:
        """Human-readable list of the bindings of *bindname*, like '<ModCtrl+Q>'."""
        return " ".join(f"<{binding}>" for binding in self.keybindings.get(bindname, ()))