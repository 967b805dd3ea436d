"""FastAPI application entry point."""
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from neo4j import AsyncDriver
from neo4j.exceptions import DriverError, Neo4jError

from inventory_graph.config import settings
from inventory_graph.database import create_driver, ensure_constraints, get_driver
from inventory_graph.exceptions import register_exception_handlers
from inventory_graph.logging_config import get_logger, setup_logging
from inventory_graph.models import ENTITY_TYPES
from inventory_graph.routes import graph, products, suppliers, warehouses

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the Neo4j driver for the life of the process."""
    logger.info("Starting", app_name=settings.APP_NAME, neo4j_uri=settings.NEO4J_URI)
    app.state.driver = create_driver()
    if settings.NEO4J_ENSURE_CONSTRAINTS:
        try:
            await ensure_constraints(app.state.driver, ENTITY_TYPES)
        except DriverError as exc:
            logger.warning("Neo4j unreachable, uniqueness constraints not checked", error=str(exc))
    try:
        yield
    finally:
        logger.info("Shutting down gracefully")
        await app.state.driver.close()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="CRUD API over the warehouses, products and suppliers of a Neo4j graph",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(warehouses.router)
app.include_router(suppliers.router)
app.include_router(products.router)
app.include_router(graph.router)


@app.get("/")
async def root():
    """Welcome message."""
    return {"message": "Welcome to the Neo4j API server"}


@app.get("/health")
async def health_check(driver: AsyncDriver = Depends(get_driver)):
    """Health check endpoint, including Neo4j connectivity."""
    try:
        await driver.verify_connectivity()
    except (Neo4jError, DriverError) as exc:
        logger.warning("Health check failed", error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "neo4j_connected": False},
        )
    return {"status": "healthy", "neo4j_connected": True}


def run():
    """Serve the application with uvicorn."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
