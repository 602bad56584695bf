"""Abstract repository for the catalog.

The order core only needs ``get_by_id`` (the Catalog Lookup); the rest
exists so the catalog can be seeded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from quitq.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
