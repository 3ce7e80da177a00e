from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from employee_api.api.error_handlers import register_error_handlers
from employee_api.api.v1.router import api_router
from employee_api.core.config import settings
from employee_api.services.employee_client import employee_client
from employee_api.services.employee_service import employee_service

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    await employee_client.initialize(settings)
    await employee_service.initialize(settings)
    yield
    await employee_client.close()


app = FastAPI(
    title="Employee API",
    description="REST facade over the upstream employee-management API",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

register_error_handlers(app)
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Employee API"}
