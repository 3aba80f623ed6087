# employee_api/routers/employees.py
import logging
import math
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Path, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from employee_api.core.config import Settings, get_settings
from employee_api.core.errors import EmployeeNotFoundError
from employee_api.db import get_db
from employee_api.ingestion import apply_update, ingest_employees, to_employee
from employee_api.models import Employee
from employee_api.repository import SORTABLE, EmployeeRepository
from employee_api.resources import PackageResource, UploadResource
from employee_api.schemas import EmployeeIn, EmployeeOut, EmployeePage, ImportResult

router = APIRouter(prefix="/employees", tags=["Employees"])
logger = logging.getLogger("employees")

MAX_PAGE_SIZE = 100
# page * size tiene que entrar en un BIGINT
MAX_PAGE = 10_000_000
MAX_EMPLOYEE_ID = 999_999_999_999_999
PROCESSED_MSG = "CSV file processed and data saved successfully."

EmployeeId = Annotated[int, Path(ge=1, le=MAX_EMPLOYEE_ID, description="ID del empleado", examples=[1])]


def get_repository(db: Session = Depends(get_db)) -> EmployeeRepository:
    return EmployeeRepository(db)


def _get_or_404(repo: EmployeeRepository, employee_id: int) -> Employee:
    employee = repo.find_by_id(employee_id)
    if employee is None:
        raise EmployeeNotFoundError(employee_id)
    return employee


# -------- carga de CSV --------
@router.post("/import-from-resources", status_code=status.HTTP_201_CREATED,
             response_model=ImportResult, summary="Cargar el CSV empaquetado con la app",
             responses={500: {"description": "Error leyendo o guardando el CSV"}})
def import_from_resources(
    repo: EmployeeRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    resource = PackageResource(settings.RESOURCE_PACKAGE, settings.RESOURCE_CSV)
    rows = ingest_employees(resource, repo)
    return ImportResult(message=PROCESSED_MSG, rows=rows)


@router.post("/upload-from-file", status_code=status.HTTP_201_CREATED,
             response_model=ImportResult, summary="Subir un CSV de empleados (multipart)",
             responses={400: {"description": "File is empty"},
                        500: {"description": "Error procesando el CSV"}})
def upload_from_file(
    file: UploadFile = File(...),
    repo: EmployeeRepository = Depends(get_repository),
):
    raw = file.file.read()
    if not raw:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File is empty")
    rows = ingest_employees(UploadResource(file.filename, raw), repo)
    return ImportResult(message=PROCESSED_MSG, rows=rows)


# -------- CRUD --------
@router.get("", response_model=EmployeePage, summary="Listar empleados (paginado)",
            responses={400: {"description": "page, size, sortBy o month inválido"}})
def list_employees(
    page: int = Query(0, ge=0, le=MAX_PAGE),
    size: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    sort_by: str = Query("id", alias="sortBy"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Filtra por mes de nacimiento"),
    repo: EmployeeRepository = Depends(get_repository),
):
    if sort_by not in SORTABLE:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail=f"sortBy debe ser uno de {sorted(SORTABLE)}")
    offset = page * size
    if month is not None:
        rows, total = repo.find_by_birth_month(month, offset, size, sort_by)
    else:
        rows, total = repo.find_all(offset, size, sort_by)
    return EmployeePage(
        content=[EmployeeOut.model_validate(e) for e in rows],
        page=page,
        size=size,
        total_elements=total,
        total_pages=math.ceil(total / size),
    )


@router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED,
             summary="Crear empleado",
             responses={400: {"description": "Datos inválidos"}})
def create_employee(payload: EmployeeIn, repo: EmployeeRepository = Depends(get_repository)):
    employee = repo.save(to_employee(payload))
    logger.info("employee_created", extra={"employee_id": employee.id})
    return EmployeeOut.model_validate(employee)


@router.put("/{employee_id}", response_model=EmployeeOut, summary="Actualizar empleado",
            responses={404: {"description": "Employee not found"},
                       400: {"description": "ID o datos inválidos"}})
def update_employee(
    payload: EmployeeIn,
    employee_id: EmployeeId,
    repo: EmployeeRepository = Depends(get_repository),
):
    employee = _get_or_404(repo, employee_id)
    employee = repo.save(apply_update(employee, payload))
    return EmployeeOut.model_validate(employee)


@router.get("/{employee_id}", response_model=EmployeeOut, summary="Obtener empleado por ID",
            responses={404: {"description": "Employee not found"},
                       400: {"description": "ID inválido"}})
def get_employee(employee_id: EmployeeId, repo: EmployeeRepository = Depends(get_repository)):
    return EmployeeOut.model_validate(_get_or_404(repo, employee_id))


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT,
               summary="Borrar empleado",
               responses={404: {"description": "Employee not found"}})
def delete_employee(employee_id: EmployeeId, repo: EmployeeRepository = Depends(get_repository)):
    repo.delete(_get_or_404(repo, employee_id))
    logger.info("employee_deleted", extra={"employee_id": employee_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
