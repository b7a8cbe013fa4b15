"""Filesystems panel: a filterable, scrollable table of mounts.

- ``state``: selection/scroll model, filter overlay lifecycle, command routing
- ``filtering``: overlay construction and selection carry-over
- ``layout``: width-budgeted column planning
- ``rendering``: table rows, match highlighting, usage bars, scrollbar
- ``commands``: command and host-result types
"""

from __future__ import annotations

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
    PanelAreas,
    PopState,
    PopStateAndReapply,
    TriggerType,
    VerbInvocation,
)
from .filtering import FilteredContent, build_filtered_content, mount_matches
from .layout import ColumnLayout, ContentWidths, plan_columns
from .rendering import HEADER_ROWS, FilesystemRenderer, fit_4, progress_bar
from .state import AppContext, DisplayOptions, FilesystemState, Selection

__all__ = [
    "AppContext",
    "BrowserParams",
    "CmdContext",
    "CmdResult",
    "ColumnLayout",
    "ContentWidths",
    "DisplayOptions",
    "FilesystemRenderer",
    "FilesystemState",
    "FilteredContent",
    "HEADER_ROWS",
    "HandleInApp",
    "Internal",
    "InternalExecution",
    "Keep",
    "NewPanel",
    "OpenState",
    "PanelAreas",
    "PopState",
    "PopStateAndReapply",
    "Selection",
    "TriggerType",
    "VerbInvocation",
    "build_filtered_content",
    "fit_4",
    "mount_matches",
    "plan_columns",
    "progress_bar",
]
