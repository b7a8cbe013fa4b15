"""Key bindings of the filesystems panel."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..filesystems import Internal


@dataclass(frozen=True)
class KeyComboBinding:
    """Key tokens that all trigger one handler."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Token to handler table; later bindings win for a repeated token."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize or str
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self._handlers.update((self._normalize(combo), binding.handler) for combo in binding.combos)
        return self

    def bound_keys(self) -> Iterable[str]:
        return self._handlers.keys()

    def dispatch(self, key: str) -> bool | None:
        """Run the handler bound to ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(self._normalize(key))
        return None if handler is None else handler()


DEFAULT_KEY_MAP: tuple[tuple[tuple[str, ...], Internal], ...] = (
    (("ESC", "q"), Internal.back),
    (("DOWN", "j"), Internal.line_down),
    (("UP", "k"), Internal.line_up),
    (("PAGE_DOWN", " "), Internal.page_down),
    (("PAGE_UP",), Internal.page_up),
    (("ENTER",), Internal.open_leave),
    (("o",), Internal.open_stay),
    (("LEFT", "h"), Internal.panel_left),
    (("RIGHT", "l"), Internal.panel_right),
    (("CTRL_C",), Internal.quit),
    (("CTRL_R",), Internal.refresh),
    ((".",), Internal.toggle_hidden),
)


def build_panel_registry(run_command: Callable[[Internal], bool | None]) -> KeyComboRegistry:
    """Bind ``DEFAULT_KEY_MAP`` so each key runs its command through ``run_command``."""
    return KeyComboRegistry().register_bindings(
        *(
            KeyComboBinding(combos, lambda internal=internal: run_command(internal))
            for combos, internal in DEFAULT_KEY_MAP
        )
    )


__all__ = [
    "DEFAULT_KEY_MAP",
    "KeyComboBinding",
    "KeyComboRegistry",
    "build_panel_registry",
]
