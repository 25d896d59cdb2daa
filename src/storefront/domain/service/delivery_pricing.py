"""Domain service: delivery surcharge calculation.

A pure function of the order subtotal, the delivery distance and the
store's delivery settings.  It never touches a repository.
"""

from __future__ import annotations

from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.settings import DeliverySettings
from storefront.domain.model.value_objects import Money


def delivery_charge(
    subtotal: Money,
    distance: Decimal,
    settings: DeliverySettings | None,
    manual_charge: Money | None = None,
) -> Money:
    """Return the delivery surcharge for an order.

    Rules, first match wins:
      1. no settings configured            -> free
      2. subtotal reaches the threshold    -> free
      3. distance within the free radius   -> free
      4. the slab with the largest ``min_distance`` <= distance
      5. the caller-supplied manual charge, if any
      6. ``distance * per_km_rate``
    """
    distance = Decimal(str(distance))
    if distance < 0:
        raise ValidationError("Delivery distance cannot be negative")

    if settings is None:
        return Money.zero()

    if subtotal >= settings.free_delivery_threshold:
        return Money.zero()

    if distance <= settings.free_distance_limit:
        return Money.zero()

    qualifying = [
        slab
        for slab in sorted(settings.slabs, key=lambda s: s.min_distance)
        if slab.min_distance <= distance
    ]
    if qualifying:
        return qualifying[-1].charge

    if manual_charge is not None:
        return manual_charge

    return settings.per_km_rate.scale(distance)


def ensure_deliverable(distance: Decimal, settings: DeliverySettings | None) -> None:
    """Reject addresses outside the store's delivery radius."""
    if settings is None:
        return
    if Decimal(str(distance)) > settings.max_delivery_distance:
        raise ValidationError(
            f"Delivery distance {distance} km exceeds the maximum of "
            f"{settings.max_delivery_distance} km"
        )
