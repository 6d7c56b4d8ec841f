"""ajax-response developer CLI.

Usage:
    ajax-response codes                    # Show the command code table
    ajax-response codes --format json      # Same, as JSON
    ajax-response render verbs.json        # Replay verbs and print the envelope
    ajax-response render - < verbs.json    # Read the verb document from stdin

A verb document looks like:

    {
        "return_value": 42,
        "commands": [
            {"verb": "assign", "args": ["status", "innerHTML", "Saved"]},
            {"verb": "redirect", "args": ["/done?a=1"], "kwargs": {"delay": 2}}
        ]
    }
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click

from .config import settings
from .errors import ResponseError
from .protocol import CommandCode, ResponseQueue, encode_response
from .protocol.verbs import ResponseVerbs

logger = logging.getLogger(__name__)

# Output format options
FORMAT_TABLE = "table"
FORMAT_JSON = "json"

VERBS = frozenset(
    name
    for name, value in vars(ResponseVerbs).items()
    if callable(value) and not name.startswith("_") and name != "add_command"
) | {"clear_commands", "set_return_value"}


def replay(document: dict[str, Any]) -> ResponseQueue:
    """Apply the verbs of a verb document to a fresh queue."""
    response = ResponseQueue()

    for index, entry in enumerate(document.get("commands", [])):
        verb = entry.get("verb")
        if verb not in VERBS:
            raise click.UsageError(f"Unknown verb at commands[{index}]: {verb!r}")
        logger.debug(f"Replaying {verb}")
        try:
            getattr(response, verb)(*entry.get("args", []), **entry.get("kwargs", {}))
        except TypeError as e:
            raise click.UsageError(f"Bad arguments for {verb} at commands[{index}]: {e}") from e

    if "return_value" in document:
        response.set_return_value(document["return_value"])
    return response


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    show_default=True,
    help="Logging level for diagnostics on stderr",
)
def main(log_level: str) -> None:
    """Build and inspect response command envelopes."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


@main.command("codes")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([FORMAT_TABLE, FORMAT_JSON]),
    default=FORMAT_TABLE,
    help="Output format",
)
def codes(output_format: str) -> None:
    """Show the command code table."""
    if output_format == FORMAT_JSON:
        click.echo(json.dumps({code.name: code.value for code in CommandCode}, indent=2))
        return

    click.echo(f"{'NAME':<24} CODE")
    click.echo("-" * 30)
    for code in CommandCode:
        click.echo(f"{code.name:<24} {code.value}")


@main.command("render")
@click.argument("source", type=click.File("r"))
@click.option("--indent", type=int, default=None, help="Pretty-print with this indent")
def render(source: Any, indent: int | None) -> None:
    """Replay a verb document and print the encoded envelope."""
    try:
        document = json.load(source)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid verb document: {e}") from e

    if not isinstance(document, dict):
        raise click.ClickException("Verb document must be a JSON object")

    try:
        encoded = encode_response(replay(document))
    except ResponseError as e:
        raise click.ClickException(str(e)) from e

    if indent is None:
        click.echo(encoded.decode("utf-8"))
    else:
        click.echo(json.dumps(json.loads(encoded), indent=indent, ensure_ascii=False))


if __name__ == "__main__":
    main()
