"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock moves, products are added and removed from the
catalogue.  A product optionally carries variants (pack sizes), each
with its own price and, optionally, its own stock counter.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.inventory import StockSource
from storefront.domain.model.value_objects import Money


@dataclass
class Variant:
    """A sellable pack size of a product.

    ``stock`` of ``None`` means the variant is not stock-tracked and is
    treated as unlimited.
    """

    id: str
    label: str
    price: Money
    stock: int | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.stock is not None and self.stock < 0:
            raise ValidationError(f"Stock for variant '{self.label}' cannot be negative")


@dataclass
class Product:
    """A product in the catalogue.

    This is an aggregate root — it is the entry point for any
    operation involving a product, including its variants' stock.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    variants: list[Variant] = field(default_factory=list)
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(f"Stock for '{self.name}' cannot be negative")

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def find_variant(self, variant_id: str | None) -> Variant | None:
        """Return the *active* variant with this id, or None.

        Unknown and inactive variants both resolve to None so callers
        fall back to the base product.
        """
        if variant_id is None or not str(variant_id).strip():
            return None
        for variant in self.variants:
            if variant.id == str(variant_id).strip() and variant.is_active:
                return variant
        return None

    def variant_by_id(self, variant_id: str | None) -> Variant | None:
        """Like ``find_variant`` but ignores the active flag."""
        if variant_id is None:
            return None
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None

    def stock_source(self, variant_id: str | None = None) -> StockSource:
        """Counter a *new* line for this product/variant would draw from."""
        return StockSource(product=self, variant=self.find_variant(variant_id))

    def line_source(self, variant_id: str | None) -> StockSource:
        """Counter an *existing* order line drew from.

        The variant is matched even if it has since been deactivated, so
        holds are always returned to the counter they were taken from.
        """
        return StockSource(product=self, variant=self.variant_by_id(variant_id))

    def set_stock(self, quantity: int, variant_id: str | None = None) -> None:
        """Overwrite a stock counter (administrative adjustment)."""
        if quantity < 0:
            raise ValidationError("Stock cannot be negative")
        if variant_id is None:
            self.stock = quantity
            return
        for variant in self.variants:
            if variant.id == variant_id:
                variant.stock = quantity
                return
        raise EntityNotFoundError(
            f"Variant '{variant_id}' not found on product '{self.name}'"
        )
