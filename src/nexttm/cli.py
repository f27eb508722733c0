"""
Command Line Interface for nexttm.
"""

import json
import logging
import sys
from collections import Counter
from pathlib import Path

import click

from .version import VERSION
from .data import DataCore
from .logs import get_logger, setup_logging
from .models import DEFAULT_TAG, TaskStatus, UnitKind
from .picker import build_sequence, parse_skip, select_next
from .recovery import NextTMError

log = get_logger("cli")


def _fail(error: NextTMError):
    log.debug(f"{error.code}: {error} context={error.context}")
    click.echo(f"❌ {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=VERSION, prog_name="ntm")
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging on stderr')
def main(verbose):
    """
    nexttm - pick the next actionable task or subtask.

    Several agents can work in parallel by each asking for a different
    --skip offset into the same ordered list of eligible work.
    """
    if verbose:
        setup_logging(logging.DEBUG)


@main.command()
@click.option('--tag', default=None, help='Tag to create and make active (default: master)')
def init(tag):
    """Initialize a new nexttm project in the current directory."""
    data = DataCore()
    if data.is_initialized():
        click.echo(f"❌ Project already initialized ({data.project_dir} exists)")
        return

    click.echo(f"🚀 Initializing nexttm project in {Path.cwd()}")
    try:
        created = data.init_project(tag or DEFAULT_TAG)
    except NextTMError as e:
        _fail(e)

    for path in created:
        click.echo(f"📋 Created {path}")
    click.echo("✅ Project initialized successfully!")
    click.echo("💡 Add tasks to the tasks file, then run 'ntm next'")


def _render_unit(unit, outcome, tasks_path):
    label = "Subtask" if unit.kind is UnitKind.SUBTASK else "Task"
    click.echo(f"📋 Next {label}: #{unit.address} - {unit.title}")
    click.echo(f"   Status: {unit.status.value}")
    click.echo(f"   Priority: {unit.priority.value}")
    click.echo(f"   Dependencies: {', '.join(unit.dependencies) if unit.dependencies else 'None'}")
    if unit.kind is UnitKind.SUBTASK:
        click.echo(f"   Parent: #{unit.parent_id}")
    if unit.description:
        click.echo("")
        click.echo(f"   {unit.description}")
    if unit.details:
        click.echo("")
        click.echo("📝 Details:")
        click.echo(f"   {unit.details}")
    if unit.kind is UnitKind.TASK and unit.subtasks:
        click.echo("")
        click.echo("🧩 Subtasks:")
        for subtask in unit.subtasks:
            click.echo(f"   {subtask.address} [{subtask.status.value}] {subtask.title}")

    click.echo("")
    click.echo("💡 Suggested Actions:")
    click.echo(f"   • Set #{unit.address} to in-progress in {tasks_path} before starting")
    click.echo(f"   • Another agent can take the following unit with 'ntm next --skip={outcome.skip_value + 1}'")


def _render_not_found(outcome, tag):
    if not outcome.has_any_tasks:
        click.echo(f"📭 No tasks found in tag '{tag}'")
    elif outcome.available_task_count == 0:
        click.echo("✅ No eligible tasks. All tasks are completed, blocked by dependencies, or in progress.")
    else:
        count = outcome.available_task_count
        noun = "task" if count == 1 else "tasks"
        click.echo(f"⚠️  No eligible task at skip index {outcome.skip_value}.")
        click.echo(f"   Only {count} {noun} available.")
        click.echo(f"💡 Tip: Use 'ntm next --skip={count - 1}' to get the last available task.")


@main.command('next')
@click.option('--skip', 'skip', default=None, metavar='N', help='Number of eligible units to skip (default: 0)')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text', help='Output format')
@click.option('--silent', is_flag=True, help='Suppress all output on success')
@click.option('--tag', default=None, help='Tag to select from (default: active tag)')
@click.option('--file', 'tasks_file', type=click.Path(path_type=Path), default=None, help='Tasks file to read')
def next_unit(skip, output_format, silent, tag, tasks_file):
    """Show the next eligible task or subtask."""
    data = DataCore()
    try:
        # Validate before touching the tasks file
        skip_value = parse_skip(skip)
        tag = data.resolve_tag(tag)
        tasks_path = data.tasks_path(tasks_file)
        snapshot = data.load_snapshot(tag, tasks_path)
        outcome = select_next(snapshot, skip_value)
    except NextTMError as e:
        _fail(e)

    if silent:
        return

    if output_format == 'json':
        payload = outcome.to_payload(tag, DataCore.storage_type)
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    elif outcome.found:
        _render_unit(outcome.task, outcome, tasks_path)
    else:
        _render_not_found(outcome, tag)


@main.command()
@click.option('--tag', default=None, help='Tag to report on (default: active tag)')
@click.option('--file', 'tasks_file', type=click.Path(path_type=Path), default=None, help='Tasks file to read')
def status(tag, tasks_file):
    """Show task counts for a tag and how many units are ready."""
    data = DataCore()
    try:
        tag = data.resolve_tag(tag)
        tasks_path = data.tasks_path(tasks_file)
        snapshot = data.load_snapshot(tag, tasks_path)
    except NextTMError as e:
        _fail(e)

    counts = Counter(task.status for task in snapshot.tasks)
    subtask_count = sum(len(task.subtasks) for task in snapshot.tasks)

    click.echo("🔧 nexttm")
    click.echo(f"📦 Version: {VERSION}")
    click.echo(f"📍 Tasks file: {tasks_path}")
    click.echo(f"🏷️  Tag: {tag}")
    click.echo("")
    click.echo(f"📋 Tasks: {len(snapshot.tasks)} ({subtask_count} subtasks)")
    for task_status in TaskStatus:
        if counts[task_status]:
            click.echo(f"   {task_status.value}: {counts[task_status]}")
    click.echo(f"🚦 Ready to start: {len(build_sequence(snapshot))}")


if __name__ == "__main__":
    main()
