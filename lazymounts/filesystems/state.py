"""Filesystems panel state: mount list, selection, scroll, and filter overlay.

``FilesystemState`` is one navigable view owned by a host. The host feeds it
pattern edits, commands and clicks one at a time, then asks it to render.
All navigation and filtering is synchronous and infallible once the state
exists; only construction and drawing can fail.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..mounts import Mount, MountLoader
from ..pattern import Pattern
from ..scroll import ScrollCommand
from ..surface import Area, Surface
from ..ui_theme import UITheme
from .commands import (
    BrowserParams,
    CmdContext,
    CmdResult,
    HandleInApp,
    Internal,
    InternalExecution,
    Keep,
    NewPanel,
    OpenState,
    PopState,
    PopStateAndReapply,
    TriggerType,
    VerbInvocation,
)
from .filtering import FilteredContent, build_filtered_content
from .rendering import HEADER_ROWS, FilesystemRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayOptions:
    """Tree display options passed through to browsing views opened from here."""

    show_hidden: bool = False
    show_sizes: bool = False
    show_root_fs: bool = False


@dataclass(frozen=True)
class AppContext:
    show_selection_mark: bool = False
    disks_only: bool = False


@dataclass(frozen=True)
class Selection:
    path: Path
    kind: str = "directory"
    is_executable: bool = False
    line: int = 0


class FilesystemState:
    """A panel listing mounted filesystems."""

    def __init__(
        self,
        mounts: tuple[Mount, ...],
        options: DisplayOptions | None = None,
        selection_idx: int = 0,
    ) -> None:
        if not mounts:
            raise ValueError("FilesystemState needs at least one mount")
        self.mounts = tuple(mounts)
        self.selection_idx = max(0, min(selection_idx, len(self.mounts) - 1))
        self.scroll = 0
        self.page_height = 0
        self.options = options if options is not None else DisplayOptions()
        self.filtered: FilteredContent | None = None

    @classmethod
    def new(
        cls,
        path: Path,
        options: DisplayOptions,
        con: AppContext,
        loader: MountLoader,
    ) -> FilesystemState:
        """Build the panel, selecting the mount holding ``path``.

        Raises ``MountListError`` when no listable mount exists, and
        ``OSError`` when ``path`` cannot be stat'ed.
        """
        mounts = loader.load_candidates(disks_only=con.disks_only)
        device_id = os.stat(path).st_dev
        selection_idx = next(
            (idx for idx, mount in enumerate(mounts) if mount.dev == device_id),
            0,
        )
        logger.debug("filesystems panel for %s selects %s", path, mounts[selection_idx].mount_point)
        return cls(mounts, options, selection_idx)

    def count(self) -> int:
        """Number of addressable rows in the active view."""
        if self.filtered is not None:
            return len(self.filtered.mounts)
        return len(self.mounts)

    def try_scroll(self, cmd: ScrollCommand) -> bool:
        """Apply ``cmd``; return whether the first visible row changed."""
        old_scroll = self.scroll
        self.scroll = cmd.apply(self.scroll, self.count(), self.page_height)
        return self.scroll != old_scroll

    def selected_mount(self) -> Mount:
        if self.filtered is not None:
            mount = self.filtered.selected_mount()
            if mount is not None:
                return mount
        return self.mounts[self.selection_idx]

    def selected_path(self) -> Path:
        return self.selected_mount().mount_point

    def display_options(self) -> DisplayOptions:
        return self.options

    def with_new_options(self, change_options: Callable[[DisplayOptions], DisplayOptions]) -> CmdResult:
        self.options = change_options(self.options)
        return Keep()

    def current_selection(self) -> Selection:
        return Selection(path=self.selected_path())

    def refresh(self) -> None:
        """Nothing to do: the mount snapshot is loaded once per panel."""
        return None

    def on_pattern_edit(self, pattern: Pattern | None) -> CmdResult:
        """Rebuild the filter overlay for ``pattern``, or drop it for ``None``."""
        if pattern is None:
            self.filtered = None
        else:
            self.filtered = build_filtered_content(self.mounts, self.selection_idx, pattern)
            logger.debug("filter kept %d of %d mounts", len(self.filtered.mounts), len(self.mounts))
        return Keep()

    def render(
        self,
        surface: Surface,
        area: Area,
        theme: UITheme,
        con: AppContext | None = None,
    ) -> None:
        """Draw the table into ``area``.

        Scroll bookkeeping is settled before the first write, so a failing
        surface leaves the state consistent.
        """
        con = con if con is not None else AppContext()
        self.page_height = max(0, area.height - HEADER_ROWS)
        self.try_scroll(ScrollCommand.lines(0))
        if self.filtered is not None:
            mounts, selection_idx = self.filtered.mounts, self.filtered.selection_idx
            pattern = self.filtered.pattern
        else:
            mounts, selection_idx, pattern = self.mounts, self.selection_idx, None
        FilesystemRenderer(
            mounts=mounts,
            selection_idx=selection_idx,
            scroll=self.scroll,
            pattern=pattern,
            theme=theme,
            show_selection_mark=con.show_selection_mark,
        ).draw(surface, area)

    def on_command(
        self,
        internal_exec: InternalExecution,
        invocation: VerbInvocation | None = None,
        trigger: TriggerType = TriggerType.input,
        context: CmdContext | None = None,
        screen: Any = None,
    ) -> CmdResult:
        """Apply one command and tell the host what to do next."""
        context = context if context is not None else CmdContext()
        internal = internal_exec.internal
        if internal is Internal.back:
            return self._back()
        if internal is Internal.line_down:
            self._move_selection(1)
            return Keep()
        if internal is Internal.line_up:
            self._move_selection(-1)
            return Keep()
        if internal is Internal.open_stay:
            in_new_panel = invocation.bang if invocation is not None else internal_exec.bang
            options = dataclasses.replace(self.options, show_root_fs=True)
            return OpenState(BrowserParams(self.selected_path(), options, screen), in_new_panel)
        if internal is Internal.panel_left:
            if context.areas.is_first():
                return NewPanel(self.selected_path(), self.options, "left")
            return HandleInApp(Internal.panel_left)
        if internal is Internal.panel_right:
            if context.areas.is_last():
                return NewPanel(self.selected_path(), self.options, "right")
            return HandleInApp(Internal.panel_right)
        if internal is Internal.page_down:
            self.try_scroll(ScrollCommand.pages(1))
            return Keep()
        if internal is Internal.page_up:
            self.try_scroll(ScrollCommand.pages(-1))
            return Keep()
        if internal is Internal.open_leave:
            return PopStateAndReapply()
        return context.generic_handler(self, internal_exec, invocation, trigger, screen)

    def on_click(self, x: int, y: int) -> CmdResult:
        """Select the clicked row of the master list.

        Only clicks on the data rows drawn by the last render count. The row
        is resolved against the master list even while a filter is active.
        """
        if HEADER_ROWS <= y < HEADER_ROWS + self.page_height:
            row = y - HEADER_ROWS + self.scroll
            if row < len(self.mounts):
                self.selection_idx = row
        return Keep()

    def _back(self) -> CmdResult:
        if self.filtered is None:
            return PopState()
        filtered, self.filtered = self.filtered, None
        selected = filtered.selected_mount()
        if selected is not None:
            self.selection_idx = next(
                idx for idx, mount in enumerate(self.mounts) if mount.id == selected.id
            )
        return Keep()

    def _move_selection(self, delta: int) -> None:
        if self.filtered is not None:
            target = self.filtered.selection_idx + delta
            if 0 <= target < len(self.filtered.mounts):
                self.filtered.selection_idx = target
            return
        target = self.selection_idx + delta
        if 0 <= target < len(self.mounts):
            self.selection_idx = target


__all__ = [
    "AppContext",
    "DisplayOptions",
    "FilesystemState",
    "Selection",
]
