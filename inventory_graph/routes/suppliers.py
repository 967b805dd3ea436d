"""Supplier routes."""
from fastapi import Depends

from inventory_graph.models import FOURNISSEUR
from inventory_graph.routes.entities import crud_router, service_dependency
from inventory_graph.schemas.supplier import SupplierDeleted, SupplierPayload, SupplierRelations
from inventory_graph.services.entity_service import EntityService

router = crud_router(FOURNISSEUR, prefix="/fournisseurs", tag="Fournisseurs", payload_model=SupplierPayload)
get_supplier_service = service_dependency(FOURNISSEUR)


@router.delete("/{identity}", response_model=SupplierDeleted)
async def delete_supplier(
    identity: str,
    service: EntityService = Depends(get_supplier_service),
):
    """Delete a supplier together with all of its relationships."""
    return await service.delete(identity)


@router.get("/{identity}/relations", response_model=SupplierRelations)
async def list_supplier_relations(
    identity: str,
    service: EntityService = Depends(get_supplier_service),
):
    """
    List every relationship of a supplier, whatever its direction or type.

    A supplier with N relationships yields N entries.
    """
    return await service.relations(identity)
