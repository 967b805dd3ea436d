"""Entity routes - shared CRUD routes for every node label."""
from typing import Callable, Optional, Type

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from inventory_graph.exceptions import INTERNAL_ERROR_MESSAGE, StoreFault
from inventory_graph.models import EntityType
from inventory_graph.services.entity_service import EntityService
from inventory_graph.services.graph_repository import GraphRepository, get_repository


def service_dependency(entity_type: EntityType) -> Callable[..., EntityService]:
    """FastAPI dependency building the service for ``entity_type`` per request."""

    def get_service(repository: GraphRepository = Depends(get_repository)) -> EntityService:
        return EntityService(entity_type, repository)

    return get_service


def body_data(payload: Optional[BaseModel]) -> dict:
    """Field values of the request body; a missing body has none."""
    return payload.model_dump() if payload is not None else {}


def crud_router(
    entity_type: EntityType,
    prefix: str,
    tag: str,
    payload_model: Type[BaseModel],
) -> APIRouter:
    """
    Build a router with list, get, create and full-replace update routes.

    Paths are registered without a trailing slash, so ``prefix`` itself is
    the collection URL.
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    get_service = service_dependency(entity_type)

    @router.get("", summary=f"List all {entity_type.label} nodes")
    async def list_entities(service: EntityService = Depends(get_service)):
        # List routes answer store faults in plain text
        try:
            return await service.list_all()
        except StoreFault:
            return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @router.get("/{identity}", summary=f"Get a {entity_type.label} node by name")
    async def get_entity(identity: str, service: EntityService = Depends(get_service)):
        return await service.get(identity)

    @router.post("", status_code=status.HTTP_201_CREATED, summary=f"Create a {entity_type.label} node")
    async def create_entity(
        payload: Optional[payload_model] = Body(None),
        service: EntityService = Depends(get_service),
    ):
        return await service.create(body_data(payload))

    @router.put("/{identity}", summary=f"Replace every field of a {entity_type.label} node")
    async def update_entity(
        identity: str,
        payload: Optional[payload_model] = Body(None),
        service: EntityService = Depends(get_service),
    ):
        return await service.update(identity, body_data(payload))

    return router
