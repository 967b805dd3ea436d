"""Warehouse schemas for request validation."""
from typing import Any

from pydantic import BaseModel


class WarehousePayload(BaseModel):
    """Body for creating or replacing a warehouse.

    Values are checked by the entity service, which answers 400 with the
    list of required fields.
    """
    nom: Any = None
    prix: Any = None
    quantite_stock: Any = None
