"""Modular input script invoked by the host scheduler."""

from __future__ import annotations

import logging
import sys
from typing import Sequence

import click

from .errors import ConfigurationError, FitnessInputError
from .ingestion import stream_events
from .models import validate_parameters
from .platform import read_input_config, read_validation_item, render_error, render_scheme
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Send log records to stderr; stdout carries event data only."""

    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


@click.command(name="fitness-input")
@click.option("--scheme", is_flag=True, help="Print the input scheme and exit.")
@click.option(
    "--validate-arguments",
    "validate_arguments",
    is_flag=True,
    help="Validate the stanza parameters read from stdin.",
)
@click.pass_context
def cli(ctx: click.Context, scheme: bool, validate_arguments: bool) -> None:
    settings = get_settings()
    configure_logging(settings)
    stdin = click.get_text_stream("stdin")
    stdout = click.get_text_stream("stdout")

    if scheme:
        click.echo(render_scheme())
        return

    if validate_arguments:
        try:
            validate_parameters(read_validation_item(stdin).params)
        except ConfigurationError as exc:
            click.echo(render_error(str(exc)))
            ctx.exit(1)
        return

    try:
        config = read_input_config(stdin)
        stream_events(config, stdout, settings=settings)
    except FitnessInputError as exc:
        logger.error("Fitness input run failed: %s", exc)
        ctx.exit(1)


def main(argv: Sequence[str] | None = None) -> int:
    """Invoke the click command and propagate its exit code."""
    args = list(argv) if argv is not None else None

    try:
        result = cli.main(args=args, prog_name="fitness-input", standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
