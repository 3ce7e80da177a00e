from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from employee_api.core.config import Settings
from employee_api.core.errors import RateLimitedError, UpstreamError
from employee_api.models.employee import (
    CreateEmployeeRequest,
    DeleteEmployeeRequest,
    Employee,
    UpstreamEnvelope,
)

logger = logging.getLogger(__name__)


class EmployeeClient(Protocol):
    initialized: bool

    async def list_all(self) -> UpstreamEnvelope[list[Employee]]: ...

    async def create(self, request: CreateEmployeeRequest) -> UpstreamEnvelope[Employee]: ...

    async def delete_by_name(self, name: str) -> UpstreamEnvelope[bool]: ...

    async def check_connection(self) -> bool: ...


class EmployeeApiClient:
    """aiohttp client for the upstream employee API.

    One HTTP call per operation, no retries. Every transport problem is
    raised as ``UpstreamError``; 429 as ``RateLimitedError``.
    """

    def __init__(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.timeout_seconds = 0.0

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.EMPLOYEE_API_BASE_URL:
            logger.warning("Employee API base URL missing; EmployeeApiClient not initialized")
            return

        self.base_url = settings.EMPLOYEE_API_BASE_URL.rstrip("/")
        self.timeout_seconds = settings.EMPLOYEE_API_TIMEOUT_SECONDS
        self.initialized = True
        logger.info("EmployeeApiClient initialized (base_url=%s)", self.base_url)

    async def close(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.timeout_seconds = 0.0

    async def list_all(self) -> UpstreamEnvelope[list[Employee]]:
        body = await self._send("GET")
        return self._parse(UpstreamEnvelope[list[Employee]], body)

    async def create(self, request: CreateEmployeeRequest) -> UpstreamEnvelope[Employee]:
        body = await self._send("POST", request.model_dump())
        return self._parse(UpstreamEnvelope[Employee], body)

    async def delete_by_name(self, name: str) -> UpstreamEnvelope[bool]:
        body = await self._send("DELETE", DeleteEmployeeRequest(name=name).model_dump())
        return self._parse(UpstreamEnvelope[bool], body)

    async def check_connection(self) -> bool:
        if not self.initialized:
            return False

        try:
            timeout = aiohttp.ClientTimeout(total=5)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request("GET", self.base_url) as response:
                    return response.status < 500
        except (aiohttp.ClientError, asyncio.TimeoutError):
            logger.exception("Employee API connection check failed")
            return False

    async def _send(self, method: str, payload: dict[str, Any] | None = None) -> Any:
        if not self.initialized:
            raise RuntimeError("EmployeeApiClient not initialized")

        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, self.base_url, json=payload) as response:
                    if response.status == 429:
                        raise RateLimitedError()
                    if not 200 <= response.status < 300:
                        raise UpstreamError(
                            f"{method} {self.base_url} returned {response.status}",
                            status_code=response.status,
                        )
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as err:
                        raise UpstreamError(
                            f"{method} {self.base_url} returned a non-JSON body",
                            status_code=response.status,
                        ) from err
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise UpstreamError(f"{method} {self.base_url} failed: {err!r}") from err

    @staticmethod
    def _parse(envelope_type: type[UpstreamEnvelope[Any]], body: Any) -> Any:
        try:
            return envelope_type.model_validate(body)
        except ValidationError as err:
            raise UpstreamError("Upstream response does not match the expected envelope") from err


employee_client = EmployeeApiClient()
