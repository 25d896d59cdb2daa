"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import CartDTO
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart import (
    AddToCartHandler,
    ClearCartHandler,
    RemoveFromCartHandler,
    SetCartQuantityHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_repository, product_repository


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo("Cart is empty.")
        return
    click.echo(f"  {'Product':<28} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*55}")
    for line in dto.items:
        name = f"{line.product_name} ({line.variant_label})" if line.variant_label else line.product_name
        click.echo(f"  {name:<28} {line.quantity:>5} {line.unit_price:>10} {line.subtotal:>10}")
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Cart Total':<35} {dto.total:>20}")


@click.command("show")
@click.option("--user", "user_id", required=True, help="User ID.")
def cart_show(user_id: str) -> None:
    """Show a user's cart."""
    handler = ShowCartHandler(cart_repo=cart_repository())

    try:
        dto = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_cart(dto)


@click.command("add")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
@click.option("--variant", "variant_id", default=None, help="Variant ID.")
def cart_add(user_id: str, product_id: str, quantity: int, variant_id: str | None) -> None:
    """Add an item to the cart (checks current stock, holds nothing)."""
    handler = AddToCartHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        dto = handler.handle(user_id, product_id, quantity, variant_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo("Item added to cart.")
    _display_cart(dto)


@click.command("update")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
@click.option("--variant", "variant_id", default=None, help="Variant ID.")
def cart_update(user_id: str, product_id: str, quantity: int, variant_id: str | None) -> None:
    """Set the quantity of a cart line."""
    handler = SetCartQuantityHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        dto = handler.handle(user_id, product_id, quantity, variant_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_cart(dto)


@click.command("remove")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--variant", "variant_id", default=None, help="Variant ID.")
def cart_remove(user_id: str, product_id: str, variant_id: str | None) -> None:
    """Remove a line from the cart."""
    handler = RemoveFromCartHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        dto = handler.handle(user_id, product_id, variant_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_cart(dto)


@click.command("clear")
@click.option("--user", "user_id", required=True, help="User ID.")
def cart_clear(user_id: str) -> None:
    """Empty the cart."""
    handler = ClearCartHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo("Cart cleared.")
