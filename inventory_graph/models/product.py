"""Product node type."""
from inventory_graph.models.entity_type import EntityType

PRODUIT = EntityType(
    label="Produit",
    key="produit",
    name="Produit",
    required_fields=("nom", "prix", "quantite_stock"),
    numeric_fields=("prix", "quantite_stock"),
    presence_only_fields=("quantite_stock",),
)
