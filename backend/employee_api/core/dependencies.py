from __future__ import annotations

from employee_api.services.employee_client import EmployeeClient, employee_client
from employee_api.services.employee_service import EmployeeService, employee_service


def get_employee_service() -> EmployeeService:
    return employee_service


def get_employee_client() -> EmployeeClient:
    return employee_client
