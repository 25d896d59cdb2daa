"""Abstract repository for store delivery settings."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.settings import DeliverySettings


class SettingsRepository(ABC):

    @abstractmethod
    def get(self) -> DeliverySettings | None:
        """Return the configured settings, or None if never configured."""

    @abstractmethod
    def save(self, settings: DeliverySettings) -> None:
        """Replace the stored settings."""
