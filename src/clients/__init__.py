"""Promotion catalog clients package."""

from src.clients.promotion_catalog_client import (
    InMemoryPromotionCatalog,
    PromotionCatalogAuthenticationError,
    PromotionCatalogClient,
    PromotionCatalogError,
    PromotionCatalogServerError,
)

__all__ = [
    "InMemoryPromotionCatalog",
    "PromotionCatalogClient",
    "PromotionCatalogError",
    "PromotionCatalogAuthenticationError",
    "PromotionCatalogServerError",
]
