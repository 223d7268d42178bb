from __future__ import annotations

from typing import Dict, List, Type

from portfolio_admin.core.exceptions import UnknownCollectionError
from .base_collection import BaseCollection


class CollectionRegistry:
    """
    Registry for collection classes so the app can build admin tables dynamically

    Purpose:
    - Decouples the Dash layer from hardcoded collections by exposing {@link create(collection_id)}
    - Drives navigation (collection dropdown) from the registered collections rather than hardcoded lists

    Design Notes:
    - Stores the subclasses of {@link BaseCollection}, not instances
    - Enforces invariants:
        * only {@link BaseCollection} subclasses can be registered
        * each collection 'id' is unique across the registry
    """

    def __init__(self):
        self._collections: Dict[str, Type[BaseCollection]] = {}

    def register(self, collection_cls: Type[BaseCollection]) -> None:
        """
        Register a {@link BaseCollection} with the registry

        :param collection_cls: the subclass of {@link BaseCollection}

        Raises:
            TypeError: if collection_cls is not a subclass of {@link BaseCollection}
            ValueError: if a collection with same 'id' already exists
        """
        if not isinstance(collection_cls, type) or not issubclass(collection_cls, BaseCollection):
            raise TypeError(f"Collection '{collection_cls!r}' must be a subclass of BaseCollection")

        if collection_cls.id in self._collections:
            raise ValueError(f"Collection '{collection_cls.id}' already registered")

        self._collections[collection_cls.id] = collection_cls

    def create(self, collection_id: str) -> BaseCollection:
        """
        Instantiate the collection registered under collection_id

        Raises:
            UnknownCollectionError: if no collection with the given id exists in the registry
        """
        try:
            cls = self._collections[collection_id]
        except KeyError:
            raise UnknownCollectionError(f"Collection '{collection_id}' not found")
        return cls()

    def __contains__(self, collection_id: object) -> bool:
        return collection_id in self._collections

    def all_classes(self) -> List[Type[BaseCollection]]:
        """
        Used at UI layer to build navigation elements. Keeps UI fully driven by the registry.
        """
        return list(self._collections.values())
