"""EntityType - describes one node label exposed through the CRUD routes."""
from dataclasses import dataclass
from typing import Optional, Tuple


def join_fields(fields) -> str:
    """French enumeration: ``nom, prix et quantite_stock``."""
    fields = list(fields)
    if len(fields) == 1:
        return fields[0]
    return f"{', '.join(fields[:-1])} et {fields[-1]}"


@dataclass(frozen=True)
class EntityType:
    """
    Node label configuration shared by the generic entity service.

    Each type defines:
    - the graph label and the property used as identity key
    - the key wrapping node properties in read responses (and, when it
      differs, in create/update responses)
    - which body fields are required, which must be present but may be
      falsy, and which are coerced to integers
    - the display name used in the localized messages
    """

    label: str
    key: str
    name: str
    required_fields: Tuple[str, ...]
    numeric_fields: Tuple[str, ...] = ()
    # Required fields checked for presence only, so 0 is accepted
    presence_only_fields: Tuple[str, ...] = ()
    key_field: str = "nom"
    write_key: Optional[str] = None

    @property
    def response_key(self) -> str:
        return self.write_key or self.key

    @property
    def noun(self) -> str:
        return self.name.lower()

    # Messages

    @property
    def not_found_message(self) -> str:
        return f"{self.name} non trouvé"

    @property
    def exists_message(self) -> str:
        return f"Un {self.noun} avec ce nom existe déjà"

    @property
    def other_exists_message(self) -> str:
        return f"Un autre {self.noun} avec ce nom existe déjà"

    @property
    def required_message(self) -> str:
        return f"Les champs {join_fields(self.required_fields)} sont requis"

    @property
    def numeric_message(self) -> str:
        return f"Les champs {join_fields(self.numeric_fields)} doivent être des nombres entiers"

    @property
    def created_message(self) -> str:
        return f"{self.name} créé avec succès"

    @property
    def updated_message(self) -> str:
        return f"{self.name} mis à jour avec succès"

    @property
    def deleted_message(self) -> str:
        return f"{self.name} supprimé avec succès"
