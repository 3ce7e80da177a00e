from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from employee_api.core.dependencies import get_employee_service
from employee_api.models.employee import CreateEmployeeRequest, Employee
from employee_api.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employee", tags=["employee"])


@router.get("", response_model=list[Employee])
async def get_all_employees(
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    logger.info("Getting all employees")
    return await service.get_all_employees()


@router.get("/search/{search_string}", response_model=list[Employee])
async def get_employees_by_name_search(
    search_string: str,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    logger.info("Searching employees with name containing: %s", search_string)
    return await service.search_by_name(search_string)


# Fixed paths must stay above "/{employee_id}" or they are matched as ids.
@router.get("/highestSalary", response_model=int)
async def get_highest_salary_of_employees(
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    logger.info("Getting highest salary among all employees")
    return await service.get_highest_salary()


@router.get("/topTenHighestEarningEmployeeNames", response_model=list[str])
async def get_top_ten_highest_earning_employee_names(
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    logger.info("Getting top 10 highest earning employee names")
    return await service.get_top_ten_highest_earning_names()


@router.get("/{employee_id}", response_model=Employee)
async def get_employee_by_id(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    logger.info("Getting employee with id: %s", employee_id)
    return await service.get_employee_by_id(employee_id)


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    employee_input: CreateEmployeeRequest,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    logger.info("Creating new employee: %s", employee_input)
    return await service.create_employee(employee_input)


@router.delete("/{employee_id}", response_class=PlainTextResponse)
async def delete_employee_by_id(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    logger.info("Deleting employee with id: %s", employee_id)
    deleted = await service.delete_employee_by_id(employee_id)
    return f"Employee: {deleted.employee_name} deleted successfully"
