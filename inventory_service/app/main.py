import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import engine, Base
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from shared.models import users
from .core.exception_handlers import setup_ledger_exception_handlers
from .models import inventory, products, sales
from .router import (
    csv_import_router,
    etsy_router,
    inventory_router,
    products_router,
    sales_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables
    Base.metadata.create_all(bind=engine)
    logger.info("Inventory service started")
    yield


app = FastAPI(title="Inventory Service API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)

# Register exception handlers
setup_exception_handlers(app)
setup_ledger_exception_handlers(app)


# Include routers
app.include_router(products_router.router)
app.include_router(inventory_router.router)
app.include_router(sales_router.router)
app.include_router(csv_import_router.router)
app.include_router(etsy_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
