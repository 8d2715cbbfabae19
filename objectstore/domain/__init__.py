"""Domain layer: base exception shared by all layers."""

from objectstore.domain.exceptions import ObjectStoreException

__all__ = ["ObjectStoreException"]
