from __future__ import annotations

import logging
from typing import List

import typer
from pydantic import ValidationError
from typer.core import TyperCommand

from sqsdemo.bus.sqs import SQSBus, SQSConfig
from sqsdemo.utils import cmdline
from sqsdemo.utils.config import Settings
from sqsdemo.walkthrough import (
    MAX_RECEIVE_COUNT,
    RECEIVE_MESSAGE_WAIT_TIME,
    WalkthroughParams,
    run_walkthrough,
    show_queues,
)

app = typer.Typer(add_completion=False)

# one entry per recognised option
MAX_ARGS = 4

HELP_TEXT = (
    "\nUsage: sqs-demo -q <queue-name> [-d <dead-letter-queue>]"
    " [-m <max-receive-count>] [-w <wait-time>]"
    "\n  -q, --queue-name: The name of the queue you want to create."
    "\n  -d, --dead-letter-queue: The URL of an existing queue to be used as the dead-letter queue."
    "\n      If this argument isn't supplied, a new dead-letter queue will be created."
    "\n  -m, --max-receive-count: The value for maxReceiveCount in the RedrivePolicy of the queue."
    f"\n      Default is {MAX_RECEIVE_COUNT}."
    "\n  -w, --wait-time: The value for ReceiveMessageWaitTimeSeconds of the queue for long polling."
    f"\n      Default is {RECEIVE_MESSAGE_WAIT_TIME}."
)

SEE_HELP = "Run the command with no arguments to see help."


def print_help() -> None:
    typer.echo(HELP_TEXT)


def build_bus(s: Settings) -> SQSBus:
    return SQSBus(
        SQSConfig(
            region=s.AWS_REGION,
            endpoint_url=s.AWS_ENDPOINT_URL,
            access_key_id=s.AWS_ACCESS_KEY_ID,
            secret_access_key=s.AWS_SECRET_ACCESS_KEY,
        )
    )


def _require_int(value: str, option: str) -> None:
    try:
        int(value)
    except ValueError:
        cmdline.error_exit(f"\n{option} must be a whole number, got {value!r}.\n{SEE_HELP}")


class RawArgsCommand(TyperCommand):
    """Keeps the untouched token list, including "--", in ``ctx.meta["raw_args"]``."""

    def parse_args(self, ctx, args: List[str]) -> List[str]:
        ctx.meta["raw_args"] = list(args)
        return super().parse_args(ctx, args)


@app.command(
    cls=RawArgsCommand,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True, "help_option_names": []},
)
def main(ctx: typer.Context):
    """Create an SQS queue and dead-letter queue, then send, receive and delete two sample messages.

    Options are read from the raw command line:
    -q/--queue-name, -d/--dead-letter-queue, -m/--max-receive-count, -w/--wait-time.
    """
    try:
        s = Settings()
    except ValidationError as e:
        cmdline.error_exit(f"\nInvalid configuration:\n{e}")
    logging.basicConfig(level=s.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        parsed = cmdline.parse(ctx.meta["raw_args"])
    except cmdline.DuplicateOptionError as e:
        cmdline.error_exit(f"\n{e}.\n{SEE_HELP}")

    if len(parsed) > MAX_ARGS:
        print_help()
        return

    bus = build_bus(s)

    # With no arguments, just show help and offer to list the existing queues
    if not parsed:
        print_help()
        typer.echo("\nNo arguments specified.")
        if typer.confirm("Do you want to see a list of the existing queues?", default=True):
            show_queues(bus)
        return

    queue_name = cmdline.get_parameter(parsed, None, "-q", "--queue-name")
    dead_letter_queue_url = cmdline.get_parameter(parsed, None, "-d", "--dead-letter-queue")
    max_receive_count = cmdline.get_parameter(parsed, MAX_RECEIVE_COUNT, "-m", "--max-receive-count")
    wait_time = cmdline.get_parameter(parsed, RECEIVE_MESSAGE_WAIT_TIME, "-w", "--wait-time")

    if not queue_name:
        cmdline.error_exit(f"\nYou must supply a queue name.\n{SEE_HELP}")
    _require_int(max_receive_count, "The max receive count")
    _require_int(wait_time, "The wait time")

    run_walkthrough(
        bus,
        WalkthroughParams(
            queue_name=queue_name,
            dead_letter_queue_url=dead_letter_queue_url,
            max_receive_count=max_receive_count,
            wait_time=wait_time,
        ),
    )


if __name__ == "__main__":
    app()
