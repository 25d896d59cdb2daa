"""CLI commands for delivery settings."""

from __future__ import annotations

import click

from storefront.domain.model.settings import DeliverySettings
from storefront.infrastructure.bootstrap import settings_repository


@click.command("show")
def settings_show() -> None:
    """Show the delivery settings in effect."""
    settings = settings_repository().get()
    if settings is None:
        click.echo("Delivery settings not configured; delivery is free.")
        return

    click.echo(f"Per-km rate:          {settings.per_km_rate}")
    click.echo(f"Free distance limit:  {settings.free_distance_limit} km")
    click.echo(f"Max delivery distance:{settings.max_delivery_distance:>4} km")
    click.echo(f"Free above:           {settings.free_delivery_threshold}")
    for slab in sorted(settings.slabs, key=lambda s: s.min_distance):
        upper = f"{slab.max_distance}" if slab.max_distance is not None else "-"
        click.echo(f"  slab {slab.min_distance:>4} - {upper:>4} km: {slab.charge}")


@click.command("init")
@click.option("--force", is_flag=True, default=False, help="Overwrite existing settings.")
def settings_init(force: bool) -> None:
    """Write the default delivery settings."""
    repo = settings_repository()
    if repo.get() is not None and not force:
        raise click.ClickException("Settings already exist; use --force to overwrite.")
    repo.save(DeliverySettings.default())
    click.echo("Default delivery settings written.")
