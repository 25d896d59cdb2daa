"""CLI commands for stock levels."""

from __future__ import annotations

import click

from storefront.application.set_inventory import SetInventoryHandler
from storefront.application.show_inventory import ShowInventoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


@click.command("set")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--variant", "variant_id", default=None, help="Variant ID (omit for base stock).")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
def inventory_set(product_id: str, variant_id: str | None, quantity: int) -> None:
    """Set the stock level of a product or variant."""
    handler = SetInventoryHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, quantity=quantity, variant_id=variant_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    target = f"{product_id}/{variant_id}" if variant_id else product_id
    click.echo(f"Stock for '{target}' set to {quantity}")


@click.command("show")
def inventory_show() -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(product_repo=product_repository())
    lines = handler.handle()

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Product':<30} {'Price':>10} {'Stock':>10}")
    click.echo("-" * 63)
    for line in lines:
        ident = line.variant_id or line.product_id
        stock = "untracked" if line.stock is None else str(line.stock)
        name = line.name if line.active else f"{line.name} [inactive]"
        click.echo(f"{ident:<10} {name:<30} {line.price:>10} {stock:>10}")
