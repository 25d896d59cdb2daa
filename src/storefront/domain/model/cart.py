"""Cart aggregate — a user's mutable shopping intent.

Cart lines do not hold stock; they only record what the user would like
to buy and at which price the item was added.  The cart total is always
recomputed from its lines, never stored as a running counter.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.inventory import StockSource
from storefront.domain.model.value_objects import Money


@dataclass
class CartLine:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Money  # captured when the line was first added
    variant_id: str | None = None
    variant_label: str = ""

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity

    def matches(self, product_id: str, variant_id: str | None) -> bool:
        return self.product_id == product_id and self.variant_id == (variant_id or None)


@dataclass
class Cart:
    """Aggregate root for a user's cart.

    ``version`` is bumped by the repository on every successful save and
    is used to detect concurrent writers.
    """

    user_id: str
    items: list[CartLine] = field(default_factory=list)
    version: int = 0

    @property
    def total_amount(self) -> Money:
        return Money.total(line.subtotal for line in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find_line(self, product_id: str, variant_id: str | None = None) -> CartLine | None:
        for line in self.items:
            if line.matches(product_id, variant_id):
                return line
        return None

    def add(self, source: StockSource, quantity: int) -> CartLine:
        """Add ``quantity`` of a product/variant, merging with an existing line.

        The merged quantity is checked against current stock; nothing is
        changed if the check fails.
        """
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        line = self.find_line(source.product.id, source.variant_id)
        new_quantity = quantity + (line.quantity if line else 0)
        source.ensure_available(new_quantity)

        if line is not None:
            line.quantity = new_quantity
            return line

        line = CartLine(
            product_id=source.product.id,
            product_name=source.product.name,
            quantity=quantity,
            unit_price=source.unit_price,
            variant_id=source.variant_id,
            variant_label=source.label,
        )
        self.items.append(line)
        return line

    def set_quantity(self, source: StockSource | None, product_id: str,
                     variant_id: str | None, quantity: int) -> None:
        """Set a line's quantity; zero removes the line.

        ``source`` may be None only when ``quantity`` is zero, since a
        removal needs no stock check.
        """
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative")

        line = self.find_line(product_id, variant_id)
        if line is None:
            raise EntityNotFoundError("Item not found in cart")

        if quantity == 0:
            self.items.remove(line)
            return

        if source is None:
            raise ValidationError("A stock source is required to change quantity")
        source.ensure_available(quantity)
        line.quantity = quantity

    def remove(self, product_id: str, variant_id: str | None = None) -> None:
        self.items = [line for line in self.items if not line.matches(product_id, variant_id)]

    def clear(self) -> None:
        self.items = []
