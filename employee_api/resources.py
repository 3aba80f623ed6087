# employee_api/resources.py
"""Orígenes de CSV: archivo en disco, recurso empaquetado o upload.

Todos exponen ``open_text()``, un context manager que entrega un stream de
texto y lo cierra al salir, aun si el parseo falla.
"""
import io
from contextlib import contextmanager
from importlib import resources
from pathlib import Path
from typing import ContextManager, Iterator, Protocol, TextIO

from employee_api.core.errors import ParseError, ResourceNotFoundError

ENCODING = "utf-8-sig"  # tolera el BOM que agregan las planillas


class TextResource(Protocol):
    name: str

    def open_text(self) -> ContextManager[TextIO]: ...


class FileResource:
    def __init__(self, path):
        self.path = Path(path).expanduser()
        self.name = str(self.path)

    @contextmanager
    def open_text(self) -> Iterator[TextIO]:
        try:
            f = self.path.open("r", encoding=ENCODING, newline="")
        except FileNotFoundError as e:
            raise ResourceNotFoundError(f"No existe {self.path}") from e
        except OSError as e:
            # directorio, sin permisos...
            raise ResourceNotFoundError(f"No se puede abrir {self.path}: {e.strerror}") from e
        with f:
            yield f


class PackageResource:
    """Archivo incluido dentro de un paquete instalado (p.ej. data/employees.csv)."""

    def __init__(self, package: str, name: str):
        self.package = package
        self.resource_name = name
        self.name = f"{package}:{name}"

    @contextmanager
    def open_text(self) -> Iterator[TextIO]:
        try:
            ref = resources.files(self.package).joinpath(self.resource_name)
        except ModuleNotFoundError as e:
            raise ResourceNotFoundError(f"No existe el paquete {self.package}") from e
        if not ref.is_file():
            raise ResourceNotFoundError(f"No existe {self.name}")
        with ref.open("r", encoding=ENCODING, newline="") as f:
            yield f


class UploadResource:
    """Bytes recibidos en un multipart upload."""

    def __init__(self, filename: str, data: bytes):
        self.name = filename or "upload.csv"
        self.data = data

    @contextmanager
    def open_text(self) -> Iterator[TextIO]:
        try:
            text = self.data.decode(ENCODING)
        except UnicodeDecodeError as e:
            raise ParseError(f"{self.name}: el archivo no es UTF-8 ({e.reason})") from e
        with io.StringIO(text, newline="") as f:
            yield f
