"""Interactive runtime: terminal control, key decoding, and the panel loop."""

from __future__ import annotations

from .input import parse_mouse_event, read_key
from .keys import DEFAULT_KEY_MAP, KeyComboBinding, KeyComboRegistry, build_panel_registry
from .loop import PanelSession, run_panel
from .terminal import TerminalController

__all__ = [
    "DEFAULT_KEY_MAP",
    "KeyComboBinding",
    "KeyComboRegistry",
    "PanelSession",
    "TerminalController",
    "build_panel_registry",
    "parse_mouse_event",
    "read_key",
    "run_panel",
]
