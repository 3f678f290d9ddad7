"""
learnosity_sdk/cli/init.py

learnosity-sdk init: print signed initialisation data for a service.

Usage:
    learnosity-sdk init <service> --security JSON --secret S
    learnosity-sdk init <service> --request @request.json      Read JSON from a file
    learnosity-sdk init data --action get                      Data API action
    learnosity-sdk init items --config credentials.yaml        Credentials from YAML
    learnosity-sdk init items --verbose                        Debug logging on stderr

Credentials missing from the command line are taken from --config and
then from LEARNOSITY_CONSUMER_KEY / LEARNOSITY_CONSUMER_SECRET /
LEARNOSITY_DOMAIN.

Exit codes:
    0  Envelope printed to stdout
    2  Error  (invalid input, missing credentials, unreadable file)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from learnosity_sdk.config import load_credentials
from learnosity_sdk.core.exceptions import LearnosityError, MalformedInputError
from learnosity_sdk.core.services import Service
from learnosity_sdk.core.wire import as_object
from learnosity_sdk.request.init import Init

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _read_json_arg(value: Optional[str]) -> Optional[str]:
    """'@path' reads the file; anything else is taken as JSON text."""
    if value is None or not value.startswith("@"):
        return value
    path = Path(value[1:])
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MalformedInputError(f"Cannot read {path}: {exc}") from exc


@click.command(name="init")
@click.argument(
    "service",
    type=click.Choice([s.value for s in Service], case_sensitive=False),
)
@click.option(
    "--security",
    default="{}",
    show_default=True,
    metavar="JSON|@FILE",
    help="Security packet: consumer_key, domain, timestamp, user_id.",
)
@click.option(
    "--request",
    "request_packet",
    default=None,
    metavar="JSON|@FILE",
    help="Request packet. Sent exactly as given.",
)
@click.option("--action", default="", help="Action, e.g. get or post (Data API).")
@click.option(
    "--secret",
    default=None,
    help="Consumer secret. Prefer --config or LEARNOSITY_CONSUMER_SECRET.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    metavar="PATH",
    help="YAML file with consumer_key, consumer_secret and domain.",
)
@click.option("--verbose", is_flag=True, default=False, help="Debug logging on stderr.")
def init_command(
    service:        str,
    security:       str,
    request_packet: Optional[str],
    action:         str,
    secret:         Optional[str],
    config_path:    Optional[str],
    verbose:        bool,
) -> None:
    """
    Print the signed JSON envelope for SERVICE.

    \b
    Examples:
      learnosity-sdk init items --security '{"consumer_key":"k","domain":"localhost","user_id":"u1"}' --secret s
      learnosity-sdk init data --config creds.yaml --request '{"limit":10}' --action get
      learnosity-sdk init events --config creds.yaml --request @events.json
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, stream=sys.stderr)

    try:
        creds = load_credentials(config_path)

        security_packet, _ = as_object(_read_json_arg(security), "security packet")
        if creds.consumer_key and "consumer_key" not in security_packet:
            security_packet["consumer_key"] = creds.consumer_key
        if creds.domain and "domain" not in security_packet:
            security_packet["domain"] = creds.domain

        init = Init(
            service,
            security_packet,
            secret if secret is not None else creds.consumer_secret,
            _read_json_arg(request_packet),
            action=action,
        )
    except LearnosityError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    click.echo(init.generate())
