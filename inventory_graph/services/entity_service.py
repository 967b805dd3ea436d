"""Generic CRUD over one node label.

Update follows a fixed order where each step's error wins over the later
ones: required fields (400), identity exists (404), new identity free (409),
write.
"""
import math
import re
from typing import Any, Dict, List, Optional

from inventory_graph.exceptions import (
    ConflictError,
    NotFoundError,
    StoreFault,
    UniquenessViolation,
    ValidationError,
)
from inventory_graph.logging_config import get_logger
from inventory_graph.models import EntityType
from inventory_graph.services.graph_repository import GraphRepository

logger = get_logger(__name__)

LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")

# Range of a Neo4j INTEGER property
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def is_blank(value: Any) -> bool:
    """Falsy the way JSON clients expect: null, false, "", 0 and NaN."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or math.isnan(value)
    return False


def parse_int(value: Any) -> Optional[int]:
    """
    Coerce a body value to an integer, or None when it has no integer reading.

    Integers pass through, finite floats truncate toward zero and strings are
    read from their leading digits ("12abc" -> 12, " -3" -> -3).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = LEADING_INTEGER.match(value)
        if match:
            return int(match.group(1))
    return None


class EntityService:
    """CRUD operations for one EntityType, backed by a GraphRepository."""

    def __init__(self, entity_type: EntityType, repository: GraphRepository):
        self.entity_type = entity_type
        self.repository = repository

    def validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Check required fields and return the properties to store."""
        entity_type = self.entity_type
        for field in entity_type.required_fields:
            value = data.get(field)
            if field in entity_type.presence_only_fields:
                missing = value is None
            else:
                missing = is_blank(value)
            if missing:
                raise ValidationError(entity_type.required_message)

        properties = {field: data[field] for field in entity_type.required_fields}
        for field in entity_type.numeric_fields:
            number = parse_int(properties[field])
            if number is None or not INT64_MIN <= number <= INT64_MAX:
                raise ValidationError(entity_type.numeric_message)
            properties[field] = number
        return properties

    async def list_all(self) -> List[Dict[str, Any]]:
        nodes = await self.repository.find_all(self.entity_type)
        return [{self.entity_type.key: properties} for properties in nodes]

    async def get(self, identity: str) -> Dict[str, Any]:
        properties = await self._require(identity)
        return {self.entity_type.key: properties}

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        entity_type = self.entity_type
        properties = self.validate(data)

        if await self.repository.find_by_key(entity_type, properties[entity_type.key_field]) is not None:
            raise ConflictError(entity_type.exists_message)

        try:
            created = await self.repository.create(entity_type, properties)
        except UniquenessViolation as exc:
            raise ConflictError(entity_type.exists_message) from exc

        logger.info("Node created", label=entity_type.label, identity=created.get(entity_type.key_field))
        return {"message": entity_type.created_message, entity_type.response_key: created}

    async def update(self, identity: str, data: Dict[str, Any]) -> Dict[str, Any]:
        entity_type = self.entity_type
        properties = self.validate(data)
        await self._require(identity)

        new_identity = properties[entity_type.key_field]
        if await self.repository.exists_other(entity_type, new_identity, identity):
            raise ConflictError(entity_type.other_exists_message)

        try:
            updated = await self.repository.update(entity_type, identity, properties)
        except UniquenessViolation as exc:
            raise ConflictError(entity_type.other_exists_message) from exc
        if updated is None:
            # Deleted between the existence check and the write
            raise NotFoundError(entity_type.not_found_message)

        logger.info("Node updated", label=entity_type.label, identity=identity, new_identity=new_identity)
        return {"message": entity_type.updated_message, entity_type.response_key: updated}

    async def delete(self, identity: str) -> Dict[str, Any]:
        """Detach-delete the node; store faults echo their message in ``details``."""
        entity_type = self.entity_type
        try:
            await self._require(identity)
            deleted = await self.repository.detach_delete(entity_type, identity)
        except StoreFault as exc:
            cause = exc.__cause__ or exc
            raise StoreFault(details=getattr(cause, "message", None) or str(cause)) from exc

        if not deleted:
            raise StoreFault("Erreur lors de la suppression")

        logger.info("Node deleted", label=entity_type.label, identity=identity)
        return {
            "message": entity_type.deleted_message,
            f"{entity_type.key}_supprime": identity,
        }

    async def relations(self, identity: str) -> Dict[str, Any]:
        """Every edge touching the node, one entry per edge."""
        entity_type = self.entity_type
        await self._require(identity)
        triples = await self.repository.find_relations(entity_type, identity)
        return {
            "relations": [
                {
                    entity_type.key: triple["node"],
                    "relation": triple["type"],
                    "connecte_a": triple["neighbour"],
                }
                for triple in triples
            ]
        }

    async def _require(self, identity: str) -> Dict[str, Any]:
        properties = await self.repository.find_by_key(self.entity_type, identity)
        if properties is None:
            raise NotFoundError(self.entity_type.not_found_message)
        return properties
