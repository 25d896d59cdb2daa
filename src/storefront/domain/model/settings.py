"""Delivery settings consumed by the delivery pricing service."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class DeliverySlab:
    """Flat charge for deliveries at or beyond ``min_distance`` km."""

    min_distance: Decimal
    charge: Money
    max_distance: Decimal | None = None  # informational; 999 is used for "above"

    def __post_init__(self) -> None:
        if self.min_distance < 0:
            raise ValidationError("Slab minimum distance cannot be negative")


@dataclass(frozen=True)
class DeliverySettings:
    per_km_rate: Money = field(default_factory=Money.zero)
    free_distance_limit: Decimal = Decimal("5")
    max_delivery_distance: Decimal = Decimal("20")
    free_delivery_threshold: Money = field(default_factory=lambda: Money.of("500"))
    slabs: tuple[DeliverySlab, ...] = ()

    @staticmethod
    def default() -> DeliverySettings:
        """Settings a fresh store starts with."""
        return DeliverySettings(
            slabs=(
                DeliverySlab(Decimal("0"), Money.of("30"), Decimal("3")),
                DeliverySlab(Decimal("3"), Money.of("50"), Decimal("6")),
                DeliverySlab(Decimal("6"), Money.of("80"), Decimal("10")),
                DeliverySlab(Decimal("10"), Money.of("120"), Decimal("999")),
            ),
        )
