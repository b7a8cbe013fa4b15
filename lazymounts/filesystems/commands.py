"""Command and result types exchanged between the panel and its host.

``Internal`` is the closed set of commands the panel knows about; the host
maps keys and verbs onto it. Handlers answer with one of the small result
dataclasses below, which tell the host what to do next.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from .state import DisplayOptions, FilesystemState


class Internal(Enum):
    back = "back"
    line_down = "line_down"
    line_up = "line_up"
    open_stay = "open_stay"
    open_leave = "open_leave"
    panel_left = "panel_left"
    panel_right = "panel_right"
    page_down = "page_down"
    page_up = "page_up"
    quit = "quit"
    refresh = "refresh"
    toggle_hidden = "toggle_hidden"


class TriggerType(Enum):
    """Whether a command came straight from user input or from another verb."""

    input = "input"
    other = "other"


@dataclass(frozen=True)
class InternalExecution:
    internal: Internal
    bang: bool = False


@dataclass(frozen=True)
class VerbInvocation:
    """What the user typed to trigger a verb, reduced to the bits used here."""

    name: str
    args: str | None = None
    bang: bool = False


@dataclass(frozen=True)
class BrowserParams:
    """Construction parameters for a child browsing view."""

    root: Path
    options: DisplayOptions
    screen: Any = None


@dataclass(frozen=True)
class Keep:
    """Stay on this panel."""


@dataclass(frozen=True)
class PopState:
    """Close this panel."""


@dataclass(frozen=True)
class PopStateAndReapply:
    """Close this panel, then rerun the triggering command on the new top panel."""


@dataclass(frozen=True)
class OpenState:
    params: BrowserParams
    in_new_panel: bool = False


@dataclass(frozen=True)
class NewPanel:
    path: Path
    options: DisplayOptions
    direction: str  # "left" or "right"


@dataclass(frozen=True)
class HandleInApp:
    internal: Internal


CmdResult = Union[Keep, PopState, PopStateAndReapply, OpenState, NewPanel, HandleInApp]


@dataclass(frozen=True)
class PanelAreas:
    """Where this panel sits among the host's side-by-side panels."""

    index: int = 0
    count: int = 1

    def is_first(self) -> bool:
        return self.index == 0

    def is_last(self) -> bool:
        return self.index >= self.count - 1


GenericHandler = Callable[
    ["FilesystemState", InternalExecution, "VerbInvocation | None", TriggerType, Any],
    CmdResult,
]


def delegate_to_app(
    _state: FilesystemState,
    internal_exec: InternalExecution,
    _invocation: VerbInvocation | None,
    _trigger: TriggerType,
    _screen: Any,
) -> CmdResult:
    """Default generic handler: leave the command to the host application."""
    return HandleInApp(internal_exec.internal)


@dataclass(frozen=True)
class CmdContext:
    areas: PanelAreas = field(default_factory=PanelAreas)
    generic_handler: GenericHandler = delegate_to_app


__all__ = [
    "Internal",
    "TriggerType",
    "InternalExecution",
    "VerbInvocation",
    "BrowserParams",
    "Keep",
    "PopState",
    "PopStateAndReapply",
    "OpenState",
    "NewPanel",
    "HandleInApp",
    "CmdResult",
    "PanelAreas",
    "CmdContext",
    "delegate_to_app",
]
