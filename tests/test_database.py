"""Tests for the query executor and its per-request session scope."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from neo4j.exceptions import ClientError, ConstraintError, ServiceUnavailable

from inventory_graph.database import GraphSession, constraint_name, ensure_constraints, get_session
from inventory_graph.exceptions import StoreFault, UniquenessViolation
from inventory_graph.models import ENTITY_TYPES


class FakeResult:
    def __init__(self, records):
        self._records = list(records)

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for record in self._records:
            yield record

    async def consume(self):
        return None


def driver_session(run_side_effect=None, records=()):
    session = MagicMock()
    session.run = AsyncMock(side_effect=run_side_effect, return_value=FakeResult(records))
    session.close = AsyncMock()
    return session


@pytest.mark.asyncio
async def test_run_returns_all_records():
    session = driver_session(records=[{"n": {"nom": "Vis"}}, {"n": {"nom": "Clou"}}])

    records = await GraphSession(session, timeout=5.0).run("MATCH (n:Produit) RETURN n", id="x")

    assert records == [{"n": {"nom": "Vis"}}, {"n": {"nom": "Clou"}}]
    query, parameters = session.run.await_args.args
    assert query.text == "MATCH (n:Produit) RETURN n"
    assert query.timeout == 5.0
    assert parameters == {"id": "x"}


@pytest.mark.asyncio
async def test_constraint_error_becomes_uniqueness_violation():
    session = driver_session(run_side_effect=ConstraintError("already exists"))

    with pytest.raises(UniquenessViolation) as excinfo:
        await GraphSession(session).run("CREATE (n:Produit {nom: $nom}) RETURN n", nom="Vis")

    assert isinstance(excinfo.value.__cause__, ConstraintError)


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [ClientError("syntax"), ServiceUnavailable("down")])
async def test_driver_errors_become_store_faults(error):
    session = driver_session(run_side_effect=error)

    with pytest.raises(StoreFault) as excinfo:
        await GraphSession(session).run("MATCH (n) RETURN n")

    assert excinfo.value.status_code == 500
    assert excinfo.value.to_dict() == {"error": "Internal Server Error"}
    assert excinfo.value.__cause__ is error


@pytest.mark.asyncio
async def test_session_closed_after_request():
    session = driver_session()
    driver = MagicMock()
    driver.session.return_value = session

    scope = get_session(driver)
    graph_session = await scope.__anext__()
    assert isinstance(graph_session, GraphSession)
    await scope.aclose()

    session.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_session_closed_when_request_fails():
    session = driver_session()
    driver = MagicMock()
    driver.session.return_value = session

    scope = get_session(driver)
    await scope.__anext__()
    with pytest.raises(StoreFault):
        await scope.athrow(StoreFault())

    session.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_ensure_constraints_one_per_label():
    session = driver_session()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    driver = MagicMock()
    driver.session.return_value = session

    await ensure_constraints(driver, ENTITY_TYPES)

    queries = [call.args[0] for call in session.run.await_args_list]
    assert queries == [
        "CREATE CONSTRAINT entrepot_nom_unique IF NOT EXISTS FOR (n:Entrepot) REQUIRE n.nom IS UNIQUE",
        "CREATE CONSTRAINT fournisseur_nom_unique IF NOT EXISTS FOR (n:Fournisseur) REQUIRE n.nom IS UNIQUE",
        "CREATE CONSTRAINT produit_nom_unique IF NOT EXISTS FOR (n:Produit) REQUIRE n.nom IS UNIQUE",
    ]


@pytest.mark.asyncio
async def test_ensure_constraints_continues_after_failure():
    session = driver_session(run_side_effect=[ClientError("duplicates"), FakeResult([]), FakeResult([])])
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    driver = MagicMock()
    driver.session.return_value = session

    await ensure_constraints(driver, ENTITY_TYPES)

    assert session.run.await_count == 3


def test_constraint_name():
    assert constraint_name("Fournisseur", "nom") == "fournisseur_nom_unique"
