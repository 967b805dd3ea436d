"""Supplier node type."""
from inventory_graph.models.entity_type import EntityType

FOURNISSEUR = EntityType(
    label="Fournisseur",
    key="fournisseur",
    name="Fournisseur",
    required_fields=("nom", "ville", "contact"),
)
