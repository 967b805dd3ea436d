"""Graph schemas."""
from typing import Any, Dict

from pydantic import BaseModel


class GraphEdge(BaseModel):
    """A directed edge with the properties of both ends."""
    n: Dict[str, Any]
    m: Dict[str, Any]
    r: str
