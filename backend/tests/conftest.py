from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from employee_api.core.dependencies import get_employee_client, get_employee_service
from employee_api.core.retry import RetryPolicy
from employee_api.main import app
from employee_api.models.employee import CreateEmployeeRequest, Employee, UpstreamEnvelope
from employee_api.services.employee_service import EmployeeService

SAMPLE_UPSTREAM_EMPLOYEES: list[dict[str, Any]] = [
    {
        "id": "4a3a170b-22cd-4ac2-aad1-9bb5b34a1507",
        "employee_name": "Jane Doe",
        "employee_salary": 120000,
        "employee_age": 41,
        "employee_title": "Engineering Manager",
        "employee_email": "jane@company.com",
    },
    {
        "id": "5255f1a5-f9f7-4be5-829a-134bde088d17",
        "employee_name": "John Doe",
        "employee_salary": 85000,
        "employee_age": 28,
        "employee_title": "Developer",
        "employee_email": "john@company.com",
    },
    {
        "id": "c3f0ab12-1b7e-4e8e-8a51-2e7d0f4d9a10",
        "employee_name": "Alice Johnson",
        "employee_salary": 150000,
        "employee_age": 52,
        "employee_title": "Architect",
        "employee_email": "alice@company.com",
    },
]


class FakeEmployeeClient:
    """In-memory stand-in for the upstream API.

    ``failures`` maps an operation name to errors raised, front to back, by
    its next calls instead of answering them.
    """

    def __init__(self, employees: list[dict[str, Any]] | None = None) -> None:
        self.initialized = True
        self.employees = [Employee(**e) for e in (employees if employees is not None else SAMPLE_UPSTREAM_EMPLOYEES)]
        self.failures: dict[str, list[Exception]] = {}
        self.list_calls = 0
        self.created: list[CreateEmployeeRequest] = []
        self.deleted_names: list[str] = []
        self.connection_ok = True
        self.list_data_missing = False
        self.create_data_missing = False
        self.delete_result: bool | None = True

    def _maybe_fail(self, operation: str) -> None:
        pending = self.failures.get(operation)
        if pending:
            raise pending.pop(0)

    async def list_all(self) -> UpstreamEnvelope[list[Employee]]:
        self.list_calls += 1
        self._maybe_fail("list_all")
        if self.list_data_missing:
            return UpstreamEnvelope(status="Failed")
        return UpstreamEnvelope(data=list(self.employees), status="Successfully processed request.")

    async def create(self, request: CreateEmployeeRequest) -> UpstreamEnvelope[Employee]:
        self._maybe_fail("create")
        if self.create_data_missing:
            return UpstreamEnvelope(status="Failed")
        self.created.append(request)
        employee = Employee(
            id=f"generated-{len(self.created)}",
            employee_name=request.name,
            employee_salary=request.salary,
            employee_age=request.age,
            employee_title=request.title,
            employee_email=f"{request.name.split()[0].lower()}@company.com",
        )
        return UpstreamEnvelope(data=employee, status="Successfully processed request.")

    async def delete_by_name(self, name: str) -> UpstreamEnvelope[bool]:
        self._maybe_fail("delete_by_name")
        self.deleted_names.append(name)
        return UpstreamEnvelope(data=self.delete_result, status="Successfully processed request.")

    async def check_connection(self) -> bool:
        return self.connection_ok


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def sample_employees() -> list[dict[str, Any]]:
    return [dict(e) for e in SAMPLE_UPSTREAM_EMPLOYEES]


@pytest.fixture
def make_fake_client() -> Callable[..., FakeEmployeeClient]:
    return FakeEmployeeClient


@pytest.fixture
def fake_client() -> FakeEmployeeClient:
    return FakeEmployeeClient()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_service(recording_sleep: RecordingSleep) -> Callable[..., EmployeeService]:
    def _make(client: Any, policy: RetryPolicy | None = None) -> EmployeeService:
        return EmployeeService(client, retry_policy=policy or RetryPolicy(), sleep=recording_sleep)

    return _make


@pytest.fixture
def service(fake_client: FakeEmployeeClient, make_service) -> EmployeeService:
    return make_service(fake_client)


@pytest.fixture
def client(service: EmployeeService, fake_client: FakeEmployeeClient):
    app.dependency_overrides[get_employee_service] = lambda: service
    app.dependency_overrides[get_employee_client] = lambda: fake_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def lenient_client(service: EmployeeService, fake_client: FakeEmployeeClient):
    app.dependency_overrides[get_employee_service] = lambda: service
    app.dependency_overrides[get_employee_client] = lambda: fake_client
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(service: EmployeeService):
    app.dependency_overrides[get_employee_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
