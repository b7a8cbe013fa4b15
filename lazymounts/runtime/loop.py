"""Single-panel host: event loop around one ``FilesystemState``.

The session owns the filter prompt, decodes keys and mouse events, routes
them to the panel one at a time, and redraws after each event. It stands in
for the multi-panel host: outcomes that would open or switch panels end the
session and report the selected mount point instead.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..ansi import fit_ansi_line
from ..filesystems import (
    AppContext,
    CmdContext,
    CmdResult,
    FilesystemState,
    HandleInApp,
    Internal,
    InternalExecution,
    Keep,
    NewPanel,
    OpenState,
    PanelAreas,
    PopState,
    PopStateAndReapply,
    TriggerType,
    VerbInvocation,
)
from ..pattern import parse_pattern
from ..scroll import ScrollCommand
from ..surface import Area, TerminalSurface
from ..ui_theme import UITheme
from .input import parse_mouse_event, read_key
from .keys import KeyComboBinding, build_panel_registry
from .terminal import TerminalController

logger = logging.getLogger(__name__)

MOUSE_WHEEL_LINES = 3
PROMPT_ROWS = 1
FILTER_PREFIX = "/"
FILTER_PLACEHOLDER = "/ filter   enter: pick   q: back"


class PanelSession:
    """Drive one filesystems panel from terminal input.

    ``outcome`` is ``None`` after a plain close, or the mount point the user
    picked when the panel asked to open something.
    """

    def __init__(
        self,
        state: FilesystemState,
        theme: UITheme,
        con: AppContext,
        surface: TerminalSurface,
        *,
        get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
    ) -> None:
        self.state = state
        self.theme = theme
        self.con = con
        self.surface = surface
        self._get_terminal_size = get_terminal_size
        self.filter_text = ""
        self.filter_editing = False
        self.running = True
        self.outcome: Path | None = None
        self.context = CmdContext(areas=PanelAreas(0, 1), generic_handler=self._generic_command)
        self.registry = build_panel_registry(self.run_command).register_bindings(
            KeyComboBinding(("HOME",), lambda: self.state.try_scroll(ScrollCommand.to(0))),
            KeyComboBinding(("END",), lambda: self.state.try_scroll(ScrollCommand.to(self.state.count()))),
        )

    def panel_area(self) -> Area:
        size = self._get_terminal_size((80, 24))
        return Area(0, 0, max(1, size.columns), max(1, size.lines - PROMPT_ROWS))

    def render(self) -> None:
        area = self.panel_area()
        self.surface.clear()
        self.state.render(self.surface, area, self.theme, self.con)
        self.surface.write(0, area.height, self._prompt_row(area.width))
        self.surface.flush()

    def _prompt_row(self, width: int) -> str:
        theme = self.theme
        if self.filter_editing or self.filter_text:
            cursor = "_" if self.filter_editing else ""
            text = theme.styled(theme.filter_query, f"{FILTER_PREFIX}{self.filter_text}{cursor}")
            status = f"  {self.state.count()} of {len(self.state.mounts)}"
            text += theme.styled(theme.filter_hint, status)
        else:
            text = theme.styled(theme.filter_hint, FILTER_PLACEHOLDER)
        return fit_ansi_line(text, width)

    def edit_filter(self, text: str) -> None:
        self.filter_text = text
        self.state.on_pattern_edit(parse_pattern(text))

    def run_command(self, internal: Internal, invocation: VerbInvocation | None = None) -> bool:
        result = self.state.on_command(
            InternalExecution(internal),
            invocation,
            TriggerType.input,
            self.context,
            None,
        )
        logger.debug("command %s -> %s", internal.value, result)
        if self.state.filtered is None and self.filter_text:
            # ``back`` dropped the overlay: the prompt follows.
            self.filter_text = ""
            self.filter_editing = False
        self.apply_result(result)
        return True

    def apply_result(self, result: CmdResult) -> None:
        if isinstance(result, Keep):
            return
        if isinstance(result, PopState):
            self.running = False
        elif isinstance(result, (PopStateAndReapply, OpenState, NewPanel)):
            self.outcome = self.state.selected_path()
            self.running = False
        elif isinstance(result, HandleInApp) and result.internal is Internal.quit:
            self.running = False

    def _generic_command(
        self,
        state: FilesystemState,
        internal_exec: InternalExecution,
        _invocation: VerbInvocation | None,
        _trigger: TriggerType,
        _screen: Any,
    ) -> CmdResult:
        if internal_exec.internal is Internal.toggle_hidden:
            return state.with_new_options(
                lambda options: dataclasses.replace(options, show_hidden=not options.show_hidden)
            )
        if internal_exec.internal is Internal.refresh:
            state.refresh()
            return Keep()
        return HandleInApp(internal_exec.internal)

    def handle_mouse(self, key: str) -> bool:
        event = parse_mouse_event(key)
        if event is None:
            return key == "MOUSE"
        kind, col, row = event
        if kind == "MOUSE_LEFT_DOWN":
            self.state.on_click(col - 1, row - 1)
        elif kind == "MOUSE_WHEEL_UP":
            self.state.try_scroll(ScrollCommand.lines(-MOUSE_WHEEL_LINES))
        elif kind == "MOUSE_WHEEL_DOWN":
            self.state.try_scroll(ScrollCommand.lines(MOUSE_WHEEL_LINES))
        return True

    def handle_filter_key(self, key: str) -> bool:
        """Handle one key while the filter prompt is being edited."""
        if key == "ENTER":
            self.filter_editing = False
            return True
        if key == "BACKSPACE":
            if self.filter_text:
                self.edit_filter(self.filter_text[:-1])
            return True
        if key == "CTRL_U":
            if self.filter_text:
                self.edit_filter("")
            return True
        if key == "ESC":
            if self.state.filtered is not None:
                return self.run_command(Internal.back)
            self.filter_text = ""
            self.filter_editing = False
            return True
        if len(key) == 1 and key.isprintable():
            self.edit_filter(self.filter_text + key)
            return True
        return False

    def handle_key(self, key: str) -> None:
        if self.handle_mouse(key):
            return
        if self.filter_editing and self.handle_filter_key(key):
            return
        if key == FILTER_PREFIX and not self.filter_editing:
            self.filter_editing = True
            return
        self.registry.dispatch(key)

    def run(self, stdin_fd: int, read: Callable[[int], str] = read_key) -> Path | None:
        """Process events until the panel closes; caller owns terminal raw mode."""
        while self.running:
            self.render()
            key = read(stdin_fd)
            if not key:
                break
            self.handle_key(key)
        return self.outcome


def run_panel(
    state: FilesystemState,
    theme: UITheme,
    con: AppContext,
    initial_filter: str = "",
    tty_path: str = "/dev/tty",
) -> Path | None:
    """Run an interactive session on the controlling terminal.

    Drawing and input go through ``tty_path`` so stdout stays free for the
    picked path.
    """
    tty_fd = os.open(tty_path, os.O_RDWR)
    try:
        terminal = TerminalController(tty_fd, tty_fd)
        session = PanelSession(state, theme, con, TerminalSurface(tty_fd))
        if initial_filter:
            session.edit_filter(initial_filter)
        with terminal.raw_mode():
            return session.run(tty_fd)
    finally:
        os.close(tty_fd)


__all__ = ["PanelSession", "run_panel"]
