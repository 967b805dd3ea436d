"""Graph routes."""
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from inventory_graph.exceptions import INTERNAL_ERROR_MESSAGE, StoreFault
from inventory_graph.schemas.graph import GraphEdge
from inventory_graph.services.graph_repository import GraphRepository, get_repository

router = APIRouter(prefix="/graph", tags=["Graph"])


@router.get("", response_model=List[GraphEdge])
async def get_graph(repository: GraphRepository = Depends(get_repository)):
    """
    Every (n)-[r]->(m) triple in the store, whatever the labels.

    Full scan without filtering, meant for visualisation and debugging.
    Edges are reported once, in their stored direction.
    """
    try:
        return await repository.find_edges()
    except StoreFault:
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
