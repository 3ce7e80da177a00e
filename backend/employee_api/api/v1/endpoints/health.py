from __future__ import annotations

from fastapi import APIRouter, Depends

from employee_api.core.config import settings
from employee_api.core.dependencies import get_employee_client
from employee_api.services.employee_client import EmployeeClient

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(
    client: EmployeeClient = Depends(get_employee_client),  # noqa: B008
):
    services: dict[str, str] = {}

    if client.initialized:
        ok = await client.check_connection()
        services["employee_api"] = "ok" if ok else "error"
    else:
        services["employee_api"] = "not_configured"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
