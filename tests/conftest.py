"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from inventory_graph.exceptions import StoreFault  # noqa: E402
from inventory_graph.services.graph_repository import node_properties  # noqa: E402


class InMemoryGraph:
    """Repository double keeping nodes and edges in lists.

    Mirrors the Cypher semantics of GraphRepository closely enough for route
    tests: matches on the key property, SET on every match, detach delete.
    Returned maps go through node_properties like real records.
    """

    def __init__(self):
        self.nodes = {}
        self.edges = []
        self.fault = None

    # Fixture helpers

    def add_node(self, label, **properties):
        node = dict(properties)
        self.nodes.setdefault(label, []).append(node)
        return node

    def add_edge(self, start, rel_type, end):
        self.edges.append((start, rel_type, end))

    def named(self, label, value, key="nom"):
        return [node for node in self.nodes.get(label, []) if node.get(key) == value]

    def _check_fault(self):
        if self.fault:
            raise StoreFault() from RuntimeError(self.fault)

    # GraphRepository interface

    async def find_all(self, entity_type):
        self._check_fault()
        return [node_properties(node) for node in self.nodes.get(entity_type.label, [])]

    async def find_by_key(self, entity_type, value):
        self._check_fault()
        matches = self.named(entity_type.label, value, entity_type.key_field)
        return node_properties(matches[0]) if matches else None

    async def exists_other(self, entity_type, new_value, current_value):
        self._check_fault()
        return any(
            node[entity_type.key_field] != current_value
            for node in self.named(entity_type.label, new_value, entity_type.key_field)
        )

    async def create(self, entity_type, properties):
        self._check_fault()
        return node_properties(self.add_node(entity_type.label, **properties))

    async def update(self, entity_type, current_value, properties):
        self._check_fault()
        matches = self.named(entity_type.label, current_value, entity_type.key_field)
        for node in matches:
            node.update(properties)
        return node_properties(matches[0]) if matches else None

    async def detach_delete(self, entity_type, value):
        self._check_fault()
        doomed = self.named(entity_type.label, value, entity_type.key_field)
        self.edges = [
            (start, rel_type, end)
            for start, rel_type, end in self.edges
            if not any(start is node or end is node for node in doomed)
        ]
        self.nodes[entity_type.label] = [
            node for node in self.nodes.get(entity_type.label, [])
            if not any(node is gone for gone in doomed)
        ]
        return len(doomed) > 0

    async def find_relations(self, entity_type, value):
        self._check_fault()
        triples = []
        for node in self.named(entity_type.label, value, entity_type.key_field):
            for start, rel_type, end in self.edges:
                if start is node:
                    triples.append({"node": node_properties(node), "type": rel_type, "neighbour": node_properties(end)})
                elif end is node:
                    triples.append({"node": node_properties(node), "type": rel_type, "neighbour": node_properties(start)})
        return triples

    async def find_edges(self):
        self._check_fault()
        return [
            {"n": node_properties(start), "m": node_properties(end), "r": rel_type}
            for start, rel_type, end in self.edges
        ]


@pytest.fixture
def graph() -> InMemoryGraph:
    return InMemoryGraph()


@pytest.fixture
def client(graph) -> TestClient:
    """TestClient whose routes run against the in-memory graph.

    The lifespan is not entered, so no Neo4j driver is opened.
    """
    from inventory_graph.main import app
    from inventory_graph.services.graph_repository import get_repository

    app.dependency_overrides[get_repository] = lambda: graph
    yield TestClient(app)
    app.dependency_overrides.clear()
