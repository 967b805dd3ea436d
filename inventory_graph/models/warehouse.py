"""Warehouse node type."""
from inventory_graph.models.entity_type import EntityType

# Warehouses carry the same numeric fields as products and answer writes
# under the "produit" key, which existing clients read.
ENTREPOT = EntityType(
    label="Entrepot",
    key="entrepot",
    write_key="produit",
    name="Entrepôt",
    required_fields=("nom", "prix", "quantite_stock"),
    numeric_fields=("prix", "quantite_stock"),
    presence_only_fields=("quantite_stock",),
)
