import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import inventory_engine, Base
from shared.helpers.exception_handler import setup_exception_handlers
from .models import companies, inventory, orders, products, suppliers, warehouses
from .router import alerts_router, products_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

# Create all tables
Base.metadata.create_all(bind=inventory_engine)

app = FastAPI(title="StockFlow Inventory Service API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(alerts_router.router)
app.include_router(products_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
