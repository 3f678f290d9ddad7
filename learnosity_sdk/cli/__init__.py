"""
learnosity_sdk/cli/__init__.py

Learnosity SDK CLI: root Click command group.

Registered in pyproject.toml as:

    [project.scripts]
    learnosity-sdk = "learnosity_sdk.cli:cli"
"""

import click

from learnosity_sdk.cli.init import init_command


@click.group()
@click.version_option(package_name="learnosity-sdk")
def cli() -> None:
    """
    Learnosity SDK: signed API initialisation data.

    \b
    Commands:
      init    Print the signed JSON envelope for a service.

    \b
    Quick start:
      learnosity-sdk init items --security '{"consumer_key":"k","domain":"localhost"}' --secret s
      learnosity-sdk init data --request @request.json --action get
      learnosity-sdk init questions --config credentials.yaml --security '{"user_id":"u1"}'
    """
    pass


cli.add_command(init_command)
