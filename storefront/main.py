"""
Storefront Application

Product catalog, admin product management and order placement API.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .database import DocumentStore, MemoryDocumentStore, PersistenceError, ProductDatabase, close_store, get_store
from .models.common import HealthResponse
from .routes import admin_products_router, orders_router, products_router

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront starting up...")
    logger.info(f"Database: {'mongodb' if settings.uses_mongo else 'in-memory'}")
    store = get_store()
    if settings.seed_catalog and isinstance(store, MemoryDocumentStore):
        ProductDatabase(store).seed()
    yield
    logger.info("Storefront shutting down...")
    close_store()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Storefront catalog and checkout API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": message}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request validation failures as {"error": message, "details": [...]}"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=422,
        content={
            "error": f"{location}: {message}" if location else message,
            "details": jsonable_encoder(errors),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Keep the {"error": message} shape for failures no route handled"""
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include API routers
app.include_router(products_router)
app.include_router(admin_products_router)
app.include_router(orders_router)


@app.get("/")
async def home():
    """API index"""
    return {
        "message": "Storefront API",
        "docs": "/docs",
        "endpoints": {
            "products": "/api/products",
            "admin_products": "/api/admin/products",
            "place_order": "/api/orders/place",
            "orders": "/api/orders",
        },
    }


@app.get("/health", response_model=HealthResponse)
def health_check(store: DocumentStore = Depends(get_store)):
    """Health check endpoint"""
    try:
        store.list_collection_names()
        database = "connected"
    except PersistenceError as e:
        logger.warning(f"Health check could not reach the database: {e}")
        database = "unavailable"
    return HealthResponse(status="healthy", service="storefront", database=database)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
