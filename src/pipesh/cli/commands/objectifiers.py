"""Objectifiers command - list registered objectifier names."""

import click

from ...context import pass_session


@click.command()
@pass_session
def objectifiers(session):
    """List the objectifiers available to --objectify."""
    for name in session.objectifier_names():
        click.echo(name)
