# employee_api/csv_parser.py
import csv
import io
import logging

import pandas as pd
from pydantic import ValidationError

from employee_api.core.errors import ParseError
from employee_api.resources import TextResource
from employee_api.schemas import EmployeeIn, split_location

logger = logging.getLogger("ingestion")

FIRST_NAME = "First name"
LAST_NAME = "Last name"
LOCATION = "Location"
BIRTHDAY = "Birthday"
REQUIRED_COLUMNS = [FIRST_NAME, LAST_NAME, LOCATION, BIRTHDAY]

# todo como texto; "" queda como "". index_col=False: nunca usar la 1ra columna como índice
READ_CSV_KW = dict(
    dtype=str,
    keep_default_na=False,
    skip_blank_lines=True,
    index_col=False,
)


def _check_field_counts(text: str, source: str) -> None:
    """Cada fila de datos debe tener tantos campos como el header.

    pandas rellena las filas cortas (NaN o "" según la versión) y con filas
    largas corre las columnas, así que el conteo se valida antes.
    """
    reader = csv.reader(io.StringIO(text, newline=""))
    width = None
    for fields in reader:
        if not fields:
            continue
        if width is None:
            width = len(fields)
        elif len(fields) != width:
            raise ParseError(
                f"{source}: fila {reader.line_num} tiene {len(fields)} campos, se esperaban {width}"
            )


def _read_frame(resource: TextResource) -> pd.DataFrame:
    try:
        with resource.open_text() as stream:
            text = stream.read()
        _check_field_counts(text, resource.name)
        df = pd.read_csv(io.StringIO(text, newline=""), **READ_CSV_KW)
    except csv.Error as e:
        raise ParseError(f"{resource.name}: CSV mal formado ({e})") from e
    except pd.errors.EmptyDataError as e:
        raise ParseError(f"{resource.name}: el CSV está vacío") from e
    except pd.errors.ParserError as e:
        raise ParseError(f"{resource.name}: CSV mal formado ({e})") from e
    except UnicodeDecodeError as e:
        raise ParseError(f"{resource.name}: el archivo no es UTF-8 ({e.reason})") from e
    df.columns = [str(c).strip() for c in df.columns]
    return df


def _cell(row: pd.Series, column: str, line: int, source: str) -> str:
    value = row[column]
    if pd.isna(value):
        raise ParseError(f"{source}: fila {line} sin valor para '{column}'")
    return str(value)


def parse_row(row: pd.Series, line: int, source: str = "<csv>") -> EmployeeIn:
    location = _cell(row, LOCATION, line, source)
    city, state = split_location(location)
    try:
        return EmployeeIn(
            first_name=_cell(row, FIRST_NAME, line, source),
            last_name=_cell(row, LAST_NAME, line, source),
            city=city,
            state=state,
            location=location,
            birth_date=_cell(row, BIRTHDAY, line, source),
        )
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ParseError(f"{source}: fila {line} inválida ({fields})") from e


def load_employees_from_csv(resource: TextResource) -> list[EmployeeIn]:
    """Lee el CSV completo y devuelve un EmployeeIn por fila, en orden.

    Todo o nada: cualquier fila mala aborta con ParseError y no se devuelve
    nada. Las columnas se buscan por nombre, no por posición.
    """
    df = _read_frame(resource)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ParseError(f"{resource.name}: faltan columnas {missing}")

    employees: list[EmployeeIn] = []
    # la línea 1 es el header
    for line, (_, row) in enumerate(df.iterrows(), start=2):
        employees.append(parse_row(row, line, resource.name))
    logger.info("csv_parsed", extra={"source": resource.name, "rows": len(employees)})
    return employees
