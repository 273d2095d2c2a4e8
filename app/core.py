# app/core.py
# Body validation stage for create/update routes.
import json
from typing import Any, Dict, List

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models import ProductIn


def _error_fields(exc: PydanticValidationError) -> List[str]:
    fields: List[str] = []
    for err in exc.errors():
        loc = err.get("loc") or ("body",)
        name = str(loc[0])
        if name not in fields:
            fields.append(name)
    return fields


def validate_product_payload(payload: Any) -> ProductIn:
    """
    Check a decoded JSON body against the product schema.

    name/category must be non-empty strings, price a non-negative number.
    description and inStock are optional. A client-supplied `id` is dropped;
    any other unknown key is a violation.
    """
    if not isinstance(payload, dict):
        raise ValidationError(["body"], "Request body must be a JSON object")

    body: Dict[str, Any] = {k: v for k, v in payload.items() if k != "id"}
    try:
        return ProductIn.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError(_error_fields(e)) from e


async def validated_product(request: Request) -> ProductIn:
    """FastAPI dependency: decode the request body and validate it."""
    raw = await request.body()
    try:
        payload = json.loads(raw) if raw else None
    except ValueError as e:
        raise ValidationError(["body"], "Request body is not valid JSON") from e
    return validate_product_payload(payload)
