"""Command-line front door for lazymounts.

Parses CLI options, loads the mount list, and builds the filesystems panel.
Then either renders it once (``--render``) or runs the interactive session
and prints the picked mount point.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from . import config
from .errors import LazyMountsError
from .filesystems import AppContext, DisplayOptions, FilesystemState
from .mounts import MountLoader
from .pattern import parse_pattern
from .runtime import run_panel
from .surface import Area, BufferSurface
from .ui_theme import UITheme, available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _configure_logging(log_file: str | None) -> None:
    """Log to ``log_file`` at DEBUG; stay silent otherwise (the terminal is ours)."""
    if log_file is None:
        logging.getLogger("lazymounts").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def render_filesystems_view(
    state: FilesystemState,
    theme: UITheme,
    con: AppContext,
    max_cols: int,
    rows: int | None = None,
) -> str:
    """Render the panel once and return its rows joined by newlines."""
    height = rows if rows is not None else state.count() + 2
    surface = BufferSurface()
    state.render(surface, Area(0, 0, max_cols, height), theme, con)
    out: list[str] = []
    for line in surface.styled_lines():
        out.append(line)
        if "\033" in line and theme.reset:
            out.append(theme.reset)
        out.append("\n")
    return "".join(out)


def main(default_path: Path | None = None, loader: MountLoader | None = None) -> None:
    """Parse CLI arguments and open the filesystems panel.

    ``default_path`` and ``loader`` are primarily for tests; by default the
    current directory's filesystem is preselected and psutil lists mounts.
    """
    parser = argparse.ArgumentParser(
        description="Browse mounted filesystems in a filterable terminal table."
    )
    parser.add_argument("path", nargs="?", default=None, help="Preselect the filesystem holding PATH.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for next runs.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--disks-only", action="store_true", default=None, help="List only mounts backed by a disk.")
    parser.add_argument(
        "--selection-mark", action="store_true", default=None, help="Mark the selected row with an arrow."
    )
    parser.add_argument("--render", action="store_true", help="Print the table once and exit.")
    parser.add_argument("--filter", default=None, help="Initial filter (fuzzy, or /regex/).")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    parser.add_argument("--rows", type=_positive_int, default=None, help="Row count for --render output.")
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    args = parser.parse_args()

    _configure_logging(args.log_file)

    prefs = config.load_preferences()
    if args.theme is not None:
        config.save_theme_name(args.theme)
    theme = resolve_theme(args.theme or prefs.theme, no_color=args.no_color)
    con = AppContext(
        show_selection_mark=prefs.show_selection_mark if args.selection_mark is None else args.selection_mark,
        disks_only=prefs.disks_only if args.disks_only is None else args.disks_only,
    )

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    try:
        state = FilesystemState.new(path, DisplayOptions(), con, loader or MountLoader())
    except (LazyMountsError, OSError) as exc:
        logger.debug("cannot open filesystems panel", exc_info=True)
        raise SystemExit(str(exc)) from exc

    if args.render:
        if args.filter:
            state.on_pattern_edit(parse_pattern(args.filter))
        max_cols = args.max_cols if args.max_cols is not None else shutil.get_terminal_size((80, 24)).columns
        sys.stdout.write(render_filesystems_view(state, theme, con, max_cols, args.rows))
        return

    picked = run_panel(state, theme, con, initial_filter=args.filter or "")
    if picked is not None:
        sys.stdout.write(f"{picked}\n")


if __name__ == "__main__":
    main()
