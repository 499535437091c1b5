"""CLI error handling helpers."""

import click

from farmledger.domain.errors import DomainError, NotFoundError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, NotFoundError):
        click.echo(f"Not found: {error}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def format_mad(amount) -> str:
    """Format an amount as MAD with thousands separators."""
    return f"{amount:,.2f} MAD"
