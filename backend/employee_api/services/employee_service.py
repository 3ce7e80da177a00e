"""Employee business logic on top of the upstream employee API (stateless)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from employee_api.core.config import Settings
from employee_api.core.errors import EmployeeNotFoundError, EmployeeServiceError
from employee_api.core.retry import RetryPolicy, call_with_retry
from employee_api.models.employee import CreateEmployeeRequest, Employee
from employee_api.services.employee_client import EmployeeClient, employee_client

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOP_EARNERS_LIMIT = 10


class EmployeeService:
    def __init__(
        self,
        client: EmployeeClient,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.client = client
        self.retry_policy = retry_policy or RetryPolicy()
        self.sleep = sleep

    async def initialize(self, settings: Settings) -> None:
        self.retry_policy = RetryPolicy.from_settings(settings)
        logger.info("EmployeeService initialized (retry_policy=%s)", self.retry_policy)

    async def _with_retry(self, operation: Callable[[], Awaitable[T]], description: str) -> T:
        return await call_with_retry(
            operation,
            self.retry_policy,
            description=description,
            sleep=self.sleep,
        )

    async def get_all_employees(self) -> list[Employee]:
        async def fetch() -> list[Employee]:
            response = await self.client.list_all()
            if response.data is None:
                raise EmployeeServiceError("Failed to fetch employees: No data returned")
            return response.data

        return await self._with_retry(fetch, "fetch employees")

    async def search_by_name(self, search_string: str) -> list[Employee]:
        logger.info("Searching employees by name containing: %s", search_string)
        needle = search_string.lower()
        matches = [emp for emp in await self.get_all_employees() if needle in emp.employee_name.lower()]

        if not matches:
            raise EmployeeNotFoundError(f"No employees found with name containing: {search_string}")
        return matches

    async def get_employee_by_id(self, employee_id: str) -> Employee:
        logger.info("Fetching employee by id: %s", employee_id)
        for emp in await self.get_all_employees():
            if emp.id == employee_id:
                return emp
        raise EmployeeNotFoundError(f"No employee found with id: {employee_id}")

    async def get_highest_salary(self) -> int:
        employees = await self.get_all_employees()
        if not employees:
            raise EmployeeNotFoundError("No employees found to determine highest salary")
        return max(emp.employee_salary for emp in employees)

    async def get_top_ten_highest_earning_names(self) -> list[str]:
        employees = await self.get_all_employees()
        # sorted() is stable, so equal salaries keep upstream order
        ranked = sorted(employees, key=lambda emp: emp.employee_salary, reverse=True)
        return [emp.employee_name for emp in ranked[:TOP_EARNERS_LIMIT]]

    async def create_employee(self, request: CreateEmployeeRequest) -> Employee:
        logger.info("Creating employee: %s", request)

        async def create() -> Employee:
            response = await self.client.create(request)
            if response.data is None:
                raise EmployeeServiceError("Failed to create employee: No data returned")
            return response.data

        employee = await self._with_retry(create, "create employee")
        logger.info("Employee created successfully: %s", employee)
        return employee

    async def delete_employee_by_id(self, employee_id: str) -> Employee:
        logger.info("Deleting employee with id: %s", employee_id)
        employee = await self.get_employee_by_id(employee_id)

        async def delete() -> None:
            response = await self.client.delete_by_name(employee.employee_name)
            if response.data is not True:
                raise EmployeeServiceError(
                    f"Failed to delete employee: upstream reported status {response.status!r}"
                )

        await self._with_retry(delete, f"delete employee {employee_id}")
        logger.info("Employee deleted successfully: %s", employee)
        return employee


employee_service = EmployeeService(employee_client)
