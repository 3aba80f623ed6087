# employee_api/core/config.py
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Employee Management API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "CRUD de empleados con carga masiva desde CSV."
    API_PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    # MySQL
    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    MYSQL_DB: str = "employees"
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = "2023"
    MYSQL_CHARSET: str = "utf8mb4"

    # URL completa de SQLAlchemy; si viene, pisa los MYSQL_* (p.ej. sqlite://)
    DATABASE_URL: Optional[str] = None
    CREATE_TABLES: bool = True

    # CSV empaquetado que usa /employees/import-from-resources
    RESOURCE_PACKAGE: str = "employee_api"
    RESOURCE_CSV: str = "data/employees.csv"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def sqlalchemy_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}"
            f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"
            f"?charset={self.MYSQL_CHARSET}"
        )

    @property
    def db_engine_name(self) -> str:
        return self.sqlalchemy_url.split(":", 1)[0].split("+", 1)[0]


@lru_cache
def get_settings() -> Settings:
    return Settings()
