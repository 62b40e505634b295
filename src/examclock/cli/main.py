"""CLI entry point for exam-clock.

Uses Click to expose the ``examclock`` command group.  ``run`` drives an
``ExamClock`` on an asyncio loop and echoes its state once a second.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

import click

import examclock
from examclock.core.clock import ClockStatus, ExamClock
from examclock.core.scheduler import next_half_hour
from examclock.display import format_hmmss, format_wall_time, status_messages

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

REFRESH_SECONDS = 1.0


def _render(clock: ExamClock, status: ClockStatus) -> None:
    """Echo one frame: the countdown and its advisory lines."""
    click.echo(f"Time Remaining: {format_hmmss(status.remaining_seconds)}")
    for line in status_messages(status, clock.config):
        click.echo(f"  {line}")


async def _drive(clock: ExamClock, extra_time: bool, auto_start: bool) -> None:
    """Run *clock* until it hard-stops, rendering every second."""
    try:
        clock.set_extra_time_enabled(extra_time)
        if auto_start:
            clock.arm_auto_start()
        else:
            clock.start()

        status = clock.status()
        while not status.hard_stopped:
            _render(clock, status)
            await asyncio.sleep(REFRESH_SECONDS)
            status = clock.status()
        _render(clock, status)
    finally:
        clock.close()


@click.group()
@click.version_option(version=examclock.__version__, prog_name="examclock")
def cli() -> None:
    """exam-clock: a proctored-exam countdown."""


@cli.command()
@click.option("--extra-time", is_flag=True, help="Allow counting into extra time.")
@click.option(
    "--auto-start", is_flag=True, help="Wait for the next :00 or :30 before starting."
)
@click.option("-v", "--verbose", is_flag=True, help="Log state changes to stderr.")
def run(extra_time: bool, auto_start: bool, verbose: bool) -> None:
    """Run the exam countdown in the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    clock = ExamClock()
    try:
        asyncio.run(_drive(clock, extra_time, auto_start))
    except KeyboardInterrupt:
        click.echo("Stopped.", err=True)


@cli.command("next-start")
def next_start() -> None:
    """Show when an armed auto-start would fire."""
    target = next_half_hour(datetime.now())
    click.echo(f"Next auto-start: {format_wall_time(target)}")
