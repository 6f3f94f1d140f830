# app/utils/validators.py

from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validate_record(schema: Type[SchemaT], data: Any) -> SchemaT:
    """Parse ``data`` with ``schema`` or raise a VALIDATION_ERROR AppException."""
    if not isinstance(data, dict):
        raise AppException("Invalid data", ErrorCode.VALIDATION_ERROR)

    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise AppException(
            "Invalid data",
            ErrorCode.VALIDATION_ERROR,
            {"errors": exc.errors(include_url=False, include_context=False, include_input=False)},
        )


def collect_fields(schema: Type[BaseModel], body: dict) -> List[str]:
    """Distinct schema field names present in ``body``, in the order they appear.

    Aliases resolve to their field name and keys the schema does not know are
    dropped.
    """
    by_key = {}
    for name, info in schema.model_fields.items():
        by_key[name] = name
        if info.alias:
            by_key[info.alias] = name

    fields: List[str] = []
    for key in body:
        name = by_key.get(key)
        if name and name not in fields:
            fields.append(name)
    return fields
