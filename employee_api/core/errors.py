# employee_api/core/errors.py
"""Errores tipados de la API; main.py los traduce a status HTTP."""


class EmployeeApiError(Exception):
    """Base de todos los errores propios del servicio."""


class ParseError(EmployeeApiError):
    """CSV mal formado o sin columnas requeridas. Aborta toda la ingesta."""


class ResourceNotFoundError(EmployeeApiError):
    pass


class DateFormatUnrecognized(EmployeeApiError, ValueError):
    """Ningún formato conocido reconoce la fecha. No es fatal."""

    def __init__(self, value):
        super().__init__(f"Invalid birthday format: {value!r}")
        self.value = value


class StorageError(EmployeeApiError):
    """Fallo de la base de datos (constraint, conexión...)."""


class EmployeeNotFoundError(EmployeeApiError):
    def __init__(self, employee_id: int):
        super().__init__(f"Employee not found with id: {employee_id}")
        self.employee_id = employee_id
