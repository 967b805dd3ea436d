"""Supplier schemas for request/response validation."""
from typing import Any, Dict, List

from pydantic import BaseModel


class SupplierPayload(BaseModel):
    """Body for creating or replacing a supplier."""
    nom: Any = None
    ville: Any = None
    contact: Any = None


class SupplierRelation(BaseModel):
    """One edge touching a supplier."""
    fournisseur: Dict[str, Any]
    relation: str
    connecte_a: Dict[str, Any]


class SupplierRelations(BaseModel):
    relations: List[SupplierRelation]


class SupplierDeleted(BaseModel):
    message: str
    fournisseur_supprime: str
