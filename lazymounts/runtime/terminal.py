"""Raw-mode and alternate-screen control for the panel session."""

from __future__ import annotations

import contextlib
import os
import termios
import tty

# Alternate screen, hidden cursor, click and SGR extended mouse reports.
ENTER_PANEL_MODE = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"
LEAVE_PANEL_MODE = b"\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Switch one tty into panel mode and back.

    The tty attributes are captured on construction, so the session can
    always restore the shell's terminal, even after a failed draw.
    """

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_attrs = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_PANEL_MODE)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, LEAVE_PANEL_MODE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_attrs)

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the enclosed block in panel mode, restoring the tty on exit."""
        self.enable_tui_mode()
        try:
            yield self
        finally:
            self.disable_tui_mode()


__all__ = ["ENTER_PANEL_MODE", "LEAVE_PANEL_MODE", "TerminalController"]
