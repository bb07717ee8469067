"""
Command-line interface for the roadmap toolkit.

Usage:
    roadmap-toolkit status
    roadmap-toolkit add-task PHASE_ID STEP_ID "Write docs"
    roadmap-toolkit set-status PHASE_ID STEP_ID TASK_ID completed
    roadmap-toolkit export-pdf -o roadmap.pdf
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from roadmap_toolkit import __version__
from roadmap_toolkit.core.models import Status, status_label
from roadmap_toolkit.core.schemas import ValidationError
from roadmap_toolkit.export import ExportError, default_export_filename, export_pdf, export_png
from roadmap_toolkit.progress import RoadmapSummary
from roadmap_toolkit.settings import THEMES, SettingsStore
from roadmap_toolkit.store import AppContext, JsonFileRepository
from roadmap_toolkit.store import editing
from roadmap_toolkit.utils import configure_logging, default_data_path, default_settings_path

logger = logging.getLogger(__name__)

Handler = Callable[[argparse.Namespace, AppContext, SettingsStore], int]


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def format_summary(summary: RoadmapSummary, title: str = "") -> str:
    """Plain-text rendering of the roadmap aggregates."""
    lines: list[str] = []
    if title:
        lines.append(title)
        lines.append("")

    if not summary.phases:
        lines.append("No phases.")
        return "\n".join(lines)

    for ps in summary.phases:
        marker = "*" if ps.phase.id == summary.active_phase_id else " "
        agg = ps.aggregate
        lines.append(
            f"{marker} [{ps.phase.id}] {ps.phase.title}  "
            f"{status_label(agg.status)}  {agg.pct}%"
        )

    active = summary.active
    if active is None:
        return "\n".join(lines)

    lines.append("")
    lines.append(
        f"{active.phase.title}: {len(active.steps)} steps • {active.aggregate.pct}% complete"
    )
    if not active.steps:
        lines.append("  No steps yet.")
    for ss in active.steps:
        lines.append(
            f"  [{ss.step.id}] {ss.step.title}  "
            f"{status_label(ss.aggregate.status)}  {ss.aggregate.pct}%"
        )
        for task in ss.step.tasks:
            known = task.known_status
            label = status_label(known) if known is not None else f"? {task.status}"
            lines.append(f"      [{task.id}] {task.title}  {label}")
    return "\n".join(lines)


def _print_status(ctx: AppContext) -> None:
    print(format_summary(ctx.summary(), ctx.current.meta.title))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_status(args, ctx: AppContext, settings: SettingsStore) -> int:
    _print_status(ctx)
    return 0


def _edit_command(build: Callable[[argparse.Namespace, AppContext], tuple]) -> Handler:
    """Command that applies one edit operation, then prints the status."""

    def handler(args, ctx: AppContext, settings: SettingsStore) -> int:
        edit, *edit_args = build(args, ctx)
        ctx.apply(edit, *edit_args)
        _print_status(ctx)
        return 0

    return handler


cmd_add_phase = _edit_command(lambda a, c: (editing.add_phase, a.title, c.ids))
cmd_rename_phase = _edit_command(lambda a, c: (editing.rename_phase, a.phase_id, a.title))
cmd_delete_phase = _edit_command(lambda a, c: (editing.delete_phase, a.phase_id))
cmd_select_phase = _edit_command(lambda a, c: (editing.select_phase, a.phase_id))
cmd_add_step = _edit_command(lambda a, c: (editing.add_step, a.phase_id, a.title, c.ids))
cmd_rename_step = _edit_command(
    lambda a, c: (editing.rename_step, a.phase_id, a.step_id, a.title)
)
cmd_delete_step = _edit_command(lambda a, c: (editing.delete_step, a.phase_id, a.step_id))
cmd_add_task = _edit_command(
    lambda a, c: (editing.add_task, a.phase_id, a.step_id, a.title, c.ids, c.clock)
)
cmd_rename_task = _edit_command(
    lambda a, c: (editing.rename_task, a.phase_id, a.step_id, a.task_id, a.title, c.clock)
)
cmd_delete_task = _edit_command(
    lambda a, c: (editing.delete_task, a.phase_id, a.step_id, a.task_id)
)
cmd_set_status = _edit_command(
    lambda a, c: (editing.set_task_status, a.phase_id, a.step_id, a.task_id, a.status, c.clock)
)


def cmd_export_pdf(args, ctx: AppContext, settings: SettingsStore) -> int:
    output = Path(args.output) if args.output else Path(default_export_filename("pdf"))
    result = export_pdf(ctx.current, output, settings.settings.export_config())
    print(f"Wrote {result.page_count} page(s) to {result.path}")
    return 0


def cmd_export_png(args, ctx: AppContext, settings: SettingsStore) -> int:
    output = Path(args.output) if args.output else Path(default_export_filename("png"))
    result = export_png(ctx.current, output, settings.settings.export_config())
    print(f"Wrote {result.source.width_px}x{result.source.height_px} image to {result.path}")
    return 0


def cmd_export_json(args, ctx: AppContext, settings: SettingsStore) -> int:
    output = Path(args.output) if args.output else Path(default_export_filename("json"))
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(ctx.export_document(), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    print(f"Wrote {output}")
    return 0


def cmd_import_json(args, ctx: AppContext, settings: SettingsStore) -> int:
    path = Path(args.path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path.name}: {e}") from e
    roadmap = ctx.import_document(data, strict=args.strict)
    print(f"Imported {len(roadmap.phases)} phase(s) from {path}")
    return 0


def cmd_reset(args, ctx: AppContext, settings: SettingsStore) -> int:
    if not args.yes:
        print("Refusing to reset without --yes (this deletes all phases, steps and tasks).",
              file=sys.stderr)
        return 1
    ctx.reset()
    _print_status(ctx)
    return 0


def cmd_theme(args, ctx: AppContext, settings: SettingsStore) -> int:
    if args.name is None:
        for name in sorted(THEMES):
            marker = "*" if name == settings.get_theme() else " "
            print(f"{marker} {name}")
        return 0
    settings.set_theme(args.name)
    print(f"Theme set to {args.name}")
    return 0


def cmd_edit_mode(args, ctx: AppContext, settings: SettingsStore) -> int:
    if args.state is not None:
        settings.set_edit_mode(args.state == "on")
    print(f"Edit mode: {'on' if settings.get_edit_mode() else 'off'}")
    return 0


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-toolkit",
        description="Track phase / step / task progress and export the roadmap view.",
    )
    parser.add_argument("--data", help="Roadmap JSON file (default: user data directory)")
    parser.add_argument("--settings", help="Settings JSON file (default: user data directory)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    def add(name: str, handler: Handler, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.set_defaults(handler=handler)
        return p

    add("status", cmd_status, "Show phase and step progress")

    # Phases
    p = add("add-phase", cmd_add_phase, "Add a phase and select it")
    p.add_argument("title")
    p = add("rename-phase", cmd_rename_phase, "Rename a phase")
    p.add_argument("phase_id")
    p.add_argument("title")
    p = add("delete-phase", cmd_delete_phase, "Delete a phase")
    p.add_argument("phase_id")
    p = add("select-phase", cmd_select_phase, "Select the active phase")
    p.add_argument("phase_id")

    # Steps
    p = add("add-step", cmd_add_step, "Add a step to a phase")
    p.add_argument("phase_id")
    p.add_argument("title")
    p = add("rename-step", cmd_rename_step, "Rename a step")
    p.add_argument("phase_id")
    p.add_argument("step_id")
    p.add_argument("title")
    p = add("delete-step", cmd_delete_step, "Delete a step")
    p.add_argument("phase_id")
    p.add_argument("step_id")

    # Tasks
    p = add("add-task", cmd_add_task, "Add a task to a step")
    p.add_argument("phase_id")
    p.add_argument("step_id")
    p.add_argument("title")
    p = add("rename-task", cmd_rename_task, "Rename a task")
    p.add_argument("phase_id")
    p.add_argument("step_id")
    p.add_argument("task_id")
    p.add_argument("title")
    p = add("delete-task", cmd_delete_task, "Delete a task")
    p.add_argument("phase_id")
    p.add_argument("step_id")
    p.add_argument("task_id")
    p = add("set-status", cmd_set_status, "Set a task's status")
    p.add_argument("phase_id")
    p.add_argument("step_id")
    p.add_argument("task_id")
    p.add_argument("status", choices=[s.value for s in Status])

    # Import / export
    for kind, handler in (("pdf", cmd_export_pdf), ("png", cmd_export_png), ("json", cmd_export_json)):
        p = add(f"export-{kind}", handler, f"Export the roadmap as {kind.upper()}")
        p.add_argument("-o", "--output", help="Output path (default: dated file name)")
    p = add("import-json", cmd_import_json, "Replace the roadmap with a JSON document")
    p.add_argument("path")
    p.add_argument("--strict", action="store_true", help="Validate against the full JSON Schema")

    p = add("reset", cmd_reset, "Delete all data and restore the default phases")
    p.add_argument("--yes", action="store_true", help="Confirm the reset")

    # Preferences
    p = add("theme", cmd_theme, "Show or set the export theme")
    p.add_argument("name", nargs="?", choices=sorted(THEMES))
    p = add("edit-mode", cmd_edit_mode, "Show or set edit mode")
    p.add_argument("state", nargs="?", choices=["on", "off"])

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    data_path = Path(args.data) if args.data else default_data_path()
    settings_path = Path(args.settings) if args.settings else default_settings_path()

    settings = SettingsStore(settings_path)
    if settings.load_error:
        print(f"Warning: {settings.load_error}; using default settings", file=sys.stderr)

    ctx = AppContext(JsonFileRepository(data_path))

    try:
        ctx.load()
        return args.handler(args, ctx, settings)
    except KeyError as e:
        # KeyError wraps its message in quotes
        print(f"Error: {e.args[0] if e.args else e}", file=sys.stderr)
    except (ValueError, ValidationError, ExportError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
