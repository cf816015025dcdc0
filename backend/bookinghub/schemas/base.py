# bookinghub/schemas/base.py
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from bookinghub.core.scheduling import parse_date, parse_time


class CamelModel(BaseModel):
    """
    snake_case in Python, camelCase on the wire (roomId, startDate, ...).
    Accepts either spelling on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def check_date(value: str) -> str:
    parse_date(value)
    return value


def check_time(value: str) -> str:
    parse_time(value)
    return value


# "YYYY-MM-DD" / "HH:MM" strings, kept as strings once validated
DateStr = Annotated[str, AfterValidator(check_date)]
TimeStr = Annotated[str, AfterValidator(check_time)]
