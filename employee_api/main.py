# employee_api/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from employee_api import models  # noqa: F401  registra las tablas en Base.metadata
from employee_api.core.config import get_settings
from employee_api.core.errors import (
    EmployeeNotFoundError,
    ParseError,
    ResourceNotFoundError,
    StorageError,
)
from employee_api.db import Base, engine
from employee_api.routers import employees, system

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("employee_api")

tags_metadata = [
    {"name": "System", "description": "Salud del servicio y metadatos."},
    {"name": "Employees", "description": "CRUD de empleados y carga de CSV."},
]


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"error": err.get("msg", "Invalid value"),
             "message": "Invalid field: " + ".".join(str(p) for p in err.get("loc", ()))}
            for err in exc.errors()
        ]
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=errors)

    @app.exception_handler(EmployeeNotFoundError)
    async def employee_not_found(request: Request, exc: EmployeeNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, "Employee Not Found", str(exc))

    @app.exception_handler(ParseError)
    async def parse_error(request: Request, exc: ParseError):
        logger.error("csv_parse_failed", extra={"path": request.url.path, "error": str(exc)})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR,
                      "Error processing CSV file", str(exc))

    @app.exception_handler(ResourceNotFoundError)
    async def resource_not_found(request: Request, exc: ResourceNotFoundError):
        logger.error("csv_resource_missing", extra={"path": request.url.path, "error": str(exc)})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR,
                      "Error processing CSV file", str(exc))

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage Error", str(exc))


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=settings.APP_DESCRIPTION,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    # Redirige "/" -> "/docs"
    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/docs")
    app.include_router(system.router, prefix=settings.API_PREFIX)
    app.include_router(employees.router, prefix=settings.API_PREFIX)
    register_exception_handlers(app)
    return app

app = create_app()
