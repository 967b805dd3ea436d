"""Neo4j driver lifecycle and per-request query sessions."""
from typing import AsyncIterator, Iterable, List, Optional

from fastapi import Depends, Request
from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession, Query, Record
from neo4j.exceptions import ConstraintError, DriverError, Neo4jError

from inventory_graph.config import settings
from inventory_graph.exceptions import StoreFault, UniquenessViolation
from inventory_graph.logging_config import get_logger

logger = get_logger(__name__)


def create_driver() -> AsyncDriver:
    """Create the process-wide driver from settings."""
    return AsyncGraphDatabase.driver(
        settings.NEO4J_URI,
        auth=(settings.NEO4J_USER, settings.NEO4J_PASSWORD),
    )


class GraphSession:
    """
    Query executor bound to one driver session.

    Each call to ``run`` is an independent auto-commit query. Driver and
    server errors are logged and re-raised as ``StoreFault``.
    """

    def __init__(self, session: AsyncSession, timeout: Optional[float] = None):
        self._session = session
        self._timeout = timeout

    async def run(self, query: str, **parameters) -> List[Record]:
        """Run a parameterized query and return all of its records."""
        try:
            result = await self._session.run(Query(query, timeout=self._timeout), parameters)
            return [record async for record in result]
        except ConstraintError as exc:
            logger.warning("Constraint violation", query=query, error=str(exc))
            raise UniquenessViolation() from exc
        except (Neo4jError, DriverError) as exc:
            logger.error("Error running query against Neo4j", query=query, error=str(exc))
            raise StoreFault() from exc


def get_driver(request: Request) -> AsyncDriver:
    """Return the driver opened by the application lifespan."""
    return request.app.state.driver


async def get_session(driver: AsyncDriver = Depends(get_driver)) -> AsyncIterator[GraphSession]:
    """Open a session for the duration of one request, always closing it."""
    session = driver.session(database=settings.NEO4J_DATABASE)
    try:
        yield GraphSession(session, timeout=settings.NEO4J_QUERY_TIMEOUT)
    finally:
        await session.close()


def constraint_name(label: str, key: str) -> str:
    return f"{label.lower()}_{key}_unique"


async def ensure_constraints(driver: AsyncDriver, entity_types: Iterable) -> None:
    """
    Create one uniqueness constraint per entity label on its identity key.

    A constraint that cannot be created (for instance because duplicates
    already exist) is logged and skipped; the application-level checks still
    apply.
    """
    async with driver.session(database=settings.NEO4J_DATABASE) as session:
        for entity_type in entity_types:
            name = constraint_name(entity_type.label, entity_type.key_field)
            query = (
                f"CREATE CONSTRAINT {name} IF NOT EXISTS "
                f"FOR (n:{entity_type.label}) REQUIRE n.{entity_type.key_field} IS UNIQUE"
            )
            try:
                result = await session.run(query)
                await result.consume()
                logger.info("Uniqueness constraint ready", constraint=name)
            except Neo4jError as exc:
                logger.warning("Uniqueness constraint failed", constraint=name, error=str(exc))
