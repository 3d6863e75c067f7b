# booking_app/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import config
from .db import create_db_and_tables
from .errors import register_exception_handlers
from .routers.appointments_routes import router as appointments_router
from .routers.auth_routes import router as auth_router
from .routers.business_routes import router as business_router
from .routers.users_routes import router as users_router

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    create_db_and_tables()
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Business Booking API", version="1.0.0", lifespan=lifespan)
register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(business_router)
app.include_router(appointments_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
