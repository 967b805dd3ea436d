"""Run the API server with ``python -m inventory_graph``."""
from inventory_graph.main import run

run()
