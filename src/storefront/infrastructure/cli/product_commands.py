"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler, VariantSpec
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


def _parse_variant(raw: str) -> VariantSpec:
    """Parse 'Label:Price' or 'Label:Price:Stock'."""
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) not in (2, 3) or not parts[0]:
        raise click.BadParameter(
            f"Invalid variant '{raw}'. Expected 'Label:Price' or 'Label:Price:Stock'."
        )
    stock = None
    if len(parts) == 3 and parts[2]:
        try:
            stock = int(parts[2])
        except ValueError:
            raise click.BadParameter(f"Invalid stock '{parts[2]}' for variant '{parts[0]}'.")
    return VariantSpec(label=parts[0], price=parts[1], stock=stock)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 45.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Base stock.")
@click.option("--variant", "variants", multiple=True, help="Variant as 'Label:Price[:Stock]'.")
def product_add(name: str, price: str, stock: int, variants: tuple[str, ...]) -> None:
    """Add a new product to the catalogue."""
    specs = [_parse_variant(v) for v in variants]
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(name=name, price=price, stock=stock, variants=specs)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")
    for variant in product.variants:
        click.echo(f"  variant {variant.id}: {variant.label} at {variant.price}")


@click.command("list")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include inactive products.")
def product_list(show_all: bool) -> None:
    """List the products customers can see."""
    products = [p for p in product_repository().list_all() if show_all or p.is_active]

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10} {'Variants':>9}")
    click.echo("-" * 52)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<24} {str(p.price):>10} {len(p.variants):>9}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--variant", "variant_id", default=None, help="Variant ID (omit for the base product).")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--active/--inactive", default=None, help="Make the product or variant (un)available.")
def product_update(product_id: str, variant_id: str | None, price: str | None,
                   active: bool | None) -> None:
    """Update a product's or variant's price and availability."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id, new_price=price, variant_id=variant_id, active=active)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    target = f"{product.name} / {variant_id}" if variant_id else product.name
    click.echo(f"Product #{product.id} ({target}) updated.")
