# Models package
from inventory_graph.models.entity_type import EntityType
from inventory_graph.models.warehouse import ENTREPOT
from inventory_graph.models.supplier import FOURNISSEUR
from inventory_graph.models.product import PRODUIT

ENTITY_TYPES = (ENTREPOT, FOURNISSEUR, PRODUIT)
