"""Graph repository - every Cypher query the API runs.

Labels and property names cannot be query parameters in Cypher, so they are
interpolated from the EntityType definitions, never from request input.
Request values always travel as parameters.
"""
from typing import Any, Dict, List, Optional

from fastapi import Depends
from neo4j.spatial import Point
from neo4j.time import Date, DateTime, Duration, Time

from inventory_graph.database import GraphSession, get_session
from inventory_graph.models import EntityType


def property_value(value: Any) -> Any:
    """JSON-ready form of a stored property: temporals as ISO 8601, points as maps."""
    if isinstance(value, (Date, DateTime, Duration, Time)):
        return value.iso_format()
    if isinstance(value, Point):
        return {"srid": value.srid, "coordinates": list(value)}
    if isinstance(value, list):
        return [property_value(item) for item in value]
    return value


def node_properties(node) -> Dict[str, Any]:
    """Property map of a node or relationship."""
    return {key: property_value(value) for key, value in dict(node).items()}


class GraphRepository:
    """Queries over labelled nodes, identified by their key property."""

    def __init__(self, session: GraphSession):
        self.session = session

    async def find_all(self, entity_type: EntityType) -> List[Dict[str, Any]]:
        records = await self.session.run(f"MATCH (n:{entity_type.label}) RETURN n")
        return [node_properties(record["n"]) for record in records]

    async def find_by_key(self, entity_type: EntityType, value: Any) -> Optional[Dict[str, Any]]:
        records = await self.session.run(
            f"MATCH (n:{entity_type.label}) WHERE n.{entity_type.key_field} = $id RETURN n",
            id=value,
        )
        if not records:
            return None
        return node_properties(records[0]["n"])

    async def exists_other(self, entity_type: EntityType, new_value: Any, current_value: Any) -> bool:
        """Whether a node other than ``current_value`` already holds ``new_value``."""
        key = entity_type.key_field
        records = await self.session.run(
            f"MATCH (n:{entity_type.label}) WHERE n.{key} = ${key} AND n.{key} <> $id RETURN n",
            id=current_value,
            **{key: new_value},
        )
        return len(records) > 0

    async def create(self, entity_type: EntityType, properties: Dict[str, Any]) -> Dict[str, Any]:
        assignments = ", ".join(f"{field}: ${field}" for field in properties)
        records = await self.session.run(
            f"CREATE (n:{entity_type.label} {{{assignments}}}) RETURN n",
            **properties,
        )
        return node_properties(records[0]["n"])

    async def update(
        self, entity_type: EntityType, current_value: Any, properties: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Overwrite every given property of the node matched by ``current_value``."""
        assignments = ", ".join(f"n.{field} = ${field}" for field in properties)
        records = await self.session.run(
            f"MATCH (n:{entity_type.label}) WHERE n.{entity_type.key_field} = $id "
            f"SET {assignments} RETURN n",
            id=current_value,
            **properties,
        )
        if not records:
            return None
        return node_properties(records[0]["n"])

    async def detach_delete(self, entity_type: EntityType, value: Any) -> bool:
        """Delete the node and all of its relationships in one query."""
        records = await self.session.run(
            f"MATCH (n:{entity_type.label}) WHERE n.{entity_type.key_field} = $id "
            f"DETACH DELETE n RETURN 1 AS deleted",
            id=value,
        )
        return len(records) > 0

    async def find_relations(self, entity_type: EntityType, value: Any) -> List[Dict[str, Any]]:
        """One (node, relationship type, neighbour) triple per incident edge, any direction."""
        records = await self.session.run(
            f"MATCH (n:{entity_type.label})-[r]-(m) WHERE n.{entity_type.key_field} = $id "
            f"RETURN n, r, m",
            id=value,
        )
        return [
            {
                "node": node_properties(record["n"]),
                "type": record["r"].type,
                "neighbour": node_properties(record["m"]),
            }
            for record in records
        ]

    async def find_edges(self) -> List[Dict[str, Any]]:
        """Every directed (n)-[r]->(m) triple in the store."""
        records = await self.session.run("MATCH (n)-[r]->(m) RETURN n, r, m")
        return [
            {
                "n": node_properties(record["n"]),
                "m": node_properties(record["m"]),
                "r": record["r"].type,
            }
            for record in records
        ]


def get_repository(session: GraphSession = Depends(get_session)) -> GraphRepository:
    """Repository bound to the request's session."""
    return GraphRepository(session)
