"""Product schemas for request validation."""
from typing import Any

from pydantic import BaseModel


class ProductPayload(BaseModel):
    """Body for creating or replacing a product."""
    nom: Any = None
    prix: Any = None
    quantite_stock: Any = None
