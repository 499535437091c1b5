"""Farm management commands."""

import click
from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain.farm import FarmService


@click.group()
def farm_group():
    """Manage farms."""
    pass


@farm_group.command("create")
@click.argument("name", metavar="FARM_NAME")
@click.option("--tenant", default="default", show_default=True, help="Owning tenant ID")
@click.pass_context
def create_farm(ctx, name: str, tenant: str):
    """Create a new farm.

    Examples:
        farmledger farm create "Domaine Atlas"
        farmledger farm create "Ferme Souss" --tenant coop-agadir
    """
    service = FarmService(ctx.obj["db"])

    try:
        farm_id = service.create_farm(name=name, tenant_id=tenant)
        click.echo(f"Created farm '{name}' (ID: {farm_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@farm_group.command("list")
@click.option("--tenant", help="Only list farms of this tenant")
@click.pass_context
def list_farms(ctx, tenant: str | None):
    """List farms."""
    service = FarmService(ctx.obj["db"])

    farms = service.list_farms(tenant_id=tenant)
    if not farms:
        click.echo("No farms found.")
        return

    click.echo("\nFarms:")
    click.echo("-" * 60)
    for f in farms:
        click.echo(f"ID: {f.id:3d} | {f.name:30s} | Tenant: {f.tenant_id}")


def register_commands(cli):
    """Register farm commands with main CLI."""
    cli.add_command(farm_group, name="farm")
