"""Inventory graph API: warehouses, products and suppliers stored in Neo4j."""
