"""Product routes."""
from inventory_graph.models import PRODUIT
from inventory_graph.routes.entities import crud_router
from inventory_graph.schemas.product import ProductPayload

router = crud_router(PRODUIT, prefix="/produits", tag="Produits", payload_model=ProductPayload)
