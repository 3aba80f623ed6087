from datetime import date
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def split_location(location: Optional[str]) -> tuple[str, str]:
    """'New York, NY' -> ('New York', 'NY'). Sin coma el estado queda vacío."""
    if not location:
        return "", ""
    parts = str(location).split(",", 1)
    city = parts[0].strip()
    state = parts[1].strip() if len(parts) > 1 else ""
    return city, state


class EmployeeIn(BaseModel):
    first_name: str = Field(min_length=1, max_length=80)
    last_name:  str = Field(min_length=1, max_length=80)
    city:       Optional[str] = Field(default=None, max_length=120)
    state:      Optional[str] = Field(default=None, max_length=120)
    location:   Optional[str] = Field(default=None, max_length=255)
    birth_date: str

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def not_blank(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def derive_city_state(self):
        if self.city is None and self.state is None:
            self.city, self.state = split_location(self.location)
        return self


class EmployeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    city: Optional[str] = None
    state: Optional[str] = None
    location: Optional[str] = None
    birth_date: Optional[date] = Field(default=None, validation_alias=AliasChoices("birth_date", "birth_day"))


class EmployeePage(BaseModel):
    content: list[EmployeeOut]
    page: int
    size: int
    total_elements: int
    total_pages: int


class ImportResult(BaseModel):
    message: str
    rows: int
