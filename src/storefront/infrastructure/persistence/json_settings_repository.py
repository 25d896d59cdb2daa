"""JSON-file-backed implementation of SettingsRepository.

The file holds a list with at most one settings record; an empty list
means the store was never configured and delivery is free.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.settings import DeliverySettings, DeliverySlab
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.infrastructure.persistence.json_store import JsonFile


class JsonSettingsRepository(SettingsRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get(self) -> DeliverySettings | None:
        records = self._file.load()
        if not records:
            return None
        return self._to_domain(records[0])

    def save(self, settings: DeliverySettings) -> None:
        with self._file.lock:
            self._file.persist([self._to_raw(settings)])

    @staticmethod
    def _to_raw(settings: DeliverySettings) -> dict:
        return {
            "per_km_rate": str(settings.per_km_rate.amount),
            "free_distance_limit": str(settings.free_distance_limit),
            "max_delivery_distance": str(settings.max_delivery_distance),
            "free_delivery_threshold": str(settings.free_delivery_threshold.amount),
            "slabs": [
                {
                    "min_distance": str(slab.min_distance),
                    "max_distance": None if slab.max_distance is None else str(slab.max_distance),
                    "charge": str(slab.charge.amount),
                }
                for slab in settings.slabs
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> DeliverySettings:
        return DeliverySettings(
            per_km_rate=Money.of(raw.get("per_km_rate", "0")),
            free_distance_limit=Decimal(str(raw.get("free_distance_limit", "5"))),
            max_delivery_distance=Decimal(str(raw.get("max_delivery_distance", "20"))),
            free_delivery_threshold=Money.of(raw.get("free_delivery_threshold", "500")),
            slabs=tuple(
                DeliverySlab(
                    min_distance=Decimal(str(s["min_distance"])),
                    charge=Money.of(s["charge"]),
                    max_distance=None if s.get("max_distance") is None else Decimal(str(s["max_distance"])),
                )
                for s in raw.get("slabs", [])
            ),
        )
