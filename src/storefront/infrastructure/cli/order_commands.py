"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.create_payment_intent import CreatePaymentIntentHandler
from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.application.hide_order import ClearOrderHistoryHandler, HideOrderHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.verify_payment import VerifyPaymentHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import ShippingAddress
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import (
    cart_repository,
    config,
    notification_dispatcher,
    order_repository,
    payment_gateway,
    product_repository,
    settings_repository,
    signature_verifier,
)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2/2-1:5' (product[/variant]:qty) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId[/VariantId]:Quantity'."
            )
        ref, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{ref}'."
            )
        product_id, _, variant_id = ref.strip().partition("/")
        specs.append(
            OrderItemSpec(product_id=product_id, quantity=qty, variant_id=variant_id or None)
        )
    return specs


def _items_from_cart(user_id: str) -> list[OrderItemSpec]:
    cart = cart_repository().get_for_user(user_id)
    if cart is None or cart.is_empty:
        raise click.ClickException("Cart is empty; pass --items or add to the cart first.")
    return [
        OrderItemSpec(product_id=line.product_id, quantity=line.quantity, variant_id=line.variant_id)
        for line in cart.items
    ]


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id} {dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Method:   {dto.payment_method}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<28} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        name = f"{item.product_name} ({item.variant_label})" if item.variant_label else item.product_name
        click.echo(f"  {name:<28} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}")
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Items':<35} {dto.items_total:>20}")
    click.echo(f"  {'Delivery':<35} {dto.delivery_charge:>20}")
    click.echo(f"  {'Order Total':<35} {dto.total:>20}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--items", default=None, help="Items as 'ProductId[/VariantId]:Qty,...' (default: the cart).")
@click.option("--payment", "payment_method", type=click.Choice(["cod", "gateway"]), required=True)
@click.option("--name", required=True, help="Recipient name.")
@click.option("--street", required=True, help="Street address.")
@click.option("--city", default="", help="City.")
@click.option("--state", default="", help="State.")
@click.option("--zip", "zip_code", default="", help="ZIP / PIN code.")
@click.option("--country", default="", help="Country.")
@click.option("--phone", default="", help="Contact phone.")
@click.option("--distance", default="0", show_default=True, help="Delivery distance in km.")
@click.option("--delivery-charge", "manual_charge", default=None,
              help="Delivery charge to use when no slab applies.")
@click.option("--notes", default="", help="Delivery notes.")
def order_create(user_id: str, items: str | None, payment_method: str, name: str, street: str,
                 city: str, state: str, zip_code: str, country: str, phone: str,
                 distance: str, manual_charge: str | None, notes: str) -> None:
    """Place a new order (reserves stock)."""
    specs = _parse_items(items) if items else _items_from_cart(user_id)
    address = ShippingAddress(
        name=name, street=street, city=city, state=state,
        zip_code=zip_code, country=country, phone=phone,
    )

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        settings_repo=settings_repository(),
        cart_repo=cart_repository(),
        notifier=notification_dispatcher(),
    )

    try:
        charge = Money.of(manual_charge) if manual_charge else None
        dto = handler.handle(
            user_id=user_id,
            item_specs=specs,
            payment_method=payment_method,
            shipping_address=address,
            distance=distance,
            manual_delivery_charge=charge,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo("Order placed successfully.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--user", "user_id", default=None, help="Restrict to this user's orders.")
def order_show(order_id: int, user_id: str | None) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, user_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", required=True, help="User ID.")
def order_list(user_id: str) -> None:
    """List a user's orders, newest first."""
    orders = ListOrdersHandler(order_repo=order_repository()).handle(user_id)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<26} {'Status':<16} {'Payment':<8} {'Total':>12}")
    click.echo("-" * 72)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.order_number:<26} {dto.status:<16} {dto.payment_status:<8} {dto.total:>12}"
        )


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--user", "user_id", required=True, help="User ID.")
def order_cancel(order_id: int, user_id: str) -> None:
    """Cancel an unpaid order (returns its stock)."""
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        notifier=notification_dispatcher(),
    )

    try:
        handler.handle(order_id, user_id=user_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Order #{order_id} cancelled.")


@click.command("set-status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--status", required=True, help="New status (canonical or legacy name).")
def order_set_status(order_id: int, status: str) -> None:
    """Administrative status change."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        notifier=notification_dispatcher(),
    )

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("pay")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--user", "user_id", required=True, help="User ID.")
def order_pay(order_id: int, user_id: str) -> None:
    """Open a gateway payment for an order."""
    try:
        handler = CreatePaymentIntentHandler(
            order_repo=order_repository(),
            product_repo=product_repository(),
            gateway=payment_gateway(),
            currency=config().currency,
            key_id=config().gateway_key_id,
        )
        intent = handler.handle(user_id, order_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Gateway order: {intent.gateway_order_id}")
    click.echo(f"Amount:        {intent.amount} ({intent.currency} minor units)")


@click.command("verify")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--gateway-order-id", required=True, help="Gateway order id.")
@click.option("--payment-id", required=True, help="Gateway payment id.")
@click.option("--signature", required=True, help="Gateway signature.")
def order_verify(order_id: int, user_id: str, gateway_order_id: str,
                 payment_id: str, signature: str) -> None:
    """Verify a gateway payment and mark the order PAID."""
    try:
        handler = VerifyPaymentHandler(
            order_repo=order_repository(),
            verifier=signature_verifier(),
            cart_repo=cart_repository(),
            notifier=notification_dispatcher(),
        )
        dto = handler.handle(user_id, order_id, gateway_order_id, payment_id, signature)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo(f"Payment verified; order #{dto.id} is {dto.status}.")


@click.command("hide")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--user", "user_id", required=True, help="User ID.")
def order_hide(order_id: int, user_id: str) -> None:
    """Remove an order from the user's history."""
    try:
        changed = HideOrderHandler(order_repo=order_repository()).handle(user_id, order_id)
    except DomainException as exc:
        raise click.ClickException(f"[{exc.code}] {exc}")

    click.echo("Order removed from history." if changed else "Order already hidden.")


@click.command("clear-history")
@click.option("--user", "user_id", required=True, help="User ID.")
def order_clear_history(user_id: str) -> None:
    """Hide every order in the user's history."""
    count = ClearOrderHistoryHandler(order_repo=order_repository()).handle(user_id)
    click.echo(f"{count} order(s) removed from history.")
