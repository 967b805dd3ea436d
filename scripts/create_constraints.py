"""Script to create the uniqueness constraints on node names."""
import asyncio
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from inventory_graph.config import settings
from inventory_graph.database import create_driver, ensure_constraints
from inventory_graph.logging_config import setup_logging
from inventory_graph.models import ENTITY_TYPES


async def create_constraints():
    """Create one uniqueness constraint per label if not exists."""
    driver = create_driver()
    try:
        await driver.verify_connectivity()
        await ensure_constraints(driver, ENTITY_TYPES)
        print(f"Constraints checked on {settings.NEO4J_URI}:")
        for entity_type in ENTITY_TYPES:
            print(f"  {entity_type.label}.{entity_type.key_field} IS UNIQUE")
    finally:
        await driver.close()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(create_constraints())
