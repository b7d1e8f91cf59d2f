"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.api import product_router, register_exception_handlers, upload_router
from catalog.clients import close_cosmos_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_cosmos_client()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Product Catalog API",
        description="CRUD API for catalog products with image uploads",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for the browser client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production: specify the client origin
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(product_router)
    app.include_router(upload_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
