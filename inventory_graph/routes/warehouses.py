"""Warehouse routes."""
from inventory_graph.models import ENTREPOT
from inventory_graph.routes.entities import crud_router
from inventory_graph.schemas.warehouse import WarehousePayload

router = crud_router(ENTREPOT, prefix="/entrepot", tag="Entrepots", payload_model=WarehousePayload)
