"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Optional

import click

from statewire import FieldDescriptor, ModelEvents, __version__, get_field_path
from statewire.exceptions import StatewireError

from .scoreboard import build_scoreboard, play_rounds

logger = logging.getLogger(__name__)


def setup_logging(verbose: int, log_file: Optional[Path]) -> None:
    """
    Configure logging for the CLI.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG); any
            verbosity also logs to stderr
        log_file: Optional file that also receives the log, rotated at 10MB
    """
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if verbose:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)

    if log_file:
        # Keeps last 5 files, max 10MB each
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_file}")


@click.group()
@click.version_option(version=__version__, prog_name="statewire")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Also write the log to this file'
)
def cli(verbose: int, log_file: Optional[Path]):
    """
    Statewire - reactive model schemas with change events.

    Developer tools for inspecting the events a model emits.
    """
    setup_logging(verbose, log_file)


@cli.command()
@click.option(
    '--rounds', '-r',
    type=click.IntRange(min=0),
    default=10,
    show_default=True,
    help='Number of scoreboard rounds to play'
)
@click.option(
    '--snapshot/--no-snapshot',
    default=False,
    help='Replay the final state after the last round'
)
def trace(rounds: int, snapshot: bool):
    """
    Print the events of a scoreboard model, one per line.

    Each round adds 33 % i to player1.score, then player1.score % 5 to
    player2.score, then commits.
    """
    def on_value(field: FieldDescriptor, value: Any) -> None:
        click.echo(f"{ModelEvents.VALUE.value} {get_field_path(field)}={value!r}")

    def on_commit(revision: int) -> None:
        click.echo(f"{ModelEvents.COMMIT.value} #{revision}")

    def on_snapshot_value(field: FieldDescriptor, value: Any) -> None:
        click.echo(f"{ModelEvents.SNAPSHOT_VALUE.value} {get_field_path(field)}={value!r}")

    def on_snapshot_commit(revision: int) -> None:
        click.echo(f"{ModelEvents.SNAPSHOT_COMMIT.value} #{revision}")

    try:
        model = build_scoreboard().create()
        model.on(ModelEvents.VALUE, on_value)
        model.on(ModelEvents.COMMIT, on_commit)
        model.on(ModelEvents.SNAPSHOT_VALUE, on_snapshot_value)
        model.on(ModelEvents.SNAPSHOT_COMMIT, on_snapshot_commit)

        play_rounds(model, rounds)
        if snapshot:
            model.snapshot()
    except StatewireError as e:
        logger.error(f"{e} (subject: {e.subject!r})", exc_info=True)
        raise click.ClickException(e.describe()) from e


if __name__ == '__main__':
    cli()
