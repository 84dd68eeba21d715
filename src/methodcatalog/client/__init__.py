"""Remote endpoint client - async per-entity operations over httpx."""

from methodcatalog.client.endpoint import CatalogClient, EntityEndpoint
from methodcatalog.client.http import ApiClient

__all__ = ["ApiClient", "CatalogClient", "EntityEndpoint"]
