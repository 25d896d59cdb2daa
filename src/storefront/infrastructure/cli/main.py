import click

from storefront.infrastructure.bootstrap import config
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.inventory_commands import inventory_set, inventory_show
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_clear_history,
    order_create,
    order_hide,
    order_list,
    order_pay,
    order_set_status,
    order_show,
    order_verify,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from storefront.infrastructure.cli.settings_commands import settings_init, settings_show
from storefront.infrastructure.log_config import configure_logging


@click.group()
def cli() -> None:
    """Storefront — grocery orders, carts and stock"""
    cfg = config()
    configure_logging(cfg.log_level, cfg.log_json)


@cli.group()
def cart() -> None:
    """Manage carts."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Manage stock levels."""


@cli.group()
def settings() -> None:
    """Manage delivery settings."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_clear_history)
order.add_command(order_create)
order.add_command(order_hide)
order.add_command(order_list)
order.add_command(order_pay)
order.add_command(order_set_status)
order.add_command(order_show)
order.add_command(order_verify)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
settings.add_command(settings_init)
settings.add_command(settings_show)
