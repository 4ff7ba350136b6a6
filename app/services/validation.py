"""
Product payload validation.

Field rules live on the pydantic schemas (``ProductCreate`` / ``ProductUpdate``);
this module normalizes raw request input, runs the schema, turns pydantic's
errors into ``{field: [message, ...]}`` and adds the product_code uniqueness
check against the store.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from app.exceptions import ProductValidationError
from app.schemas import ProductCreate, ProductUpdate
from app.services import messages
from app.services import product_store

FIELD_ORDER = ("product_code", "product_name", "description", "price", "quantity", "category")

_NUMBER_ERRORS = {"decimal_parsing", "decimal_type", "finite_number", "float_parsing", "float_type"}
_INTEGER_ERRORS = {"int_parsing", "int_from_float", "int_type", "int_parsing_size"}


def normalize_payload(payload: Any) -> Dict[str, Any]:
    """
    Trim string values and turn blank strings into None.

    Anything that is not a JSON object is treated as an empty payload.
    """
    if not isinstance(payload, dict):
        return {}

    normalized = {}
    for field in FIELD_ORDER:
        if field not in payload:
            continue
        value = payload[field]
        if isinstance(value, str):
            value = value.strip() or None
        normalized[field] = value
    return normalized


def _message_for(field: str, error: Dict[str, Any]) -> str:
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    if error_type == "missing" or error.get("input") is None:
        return messages.required_message(field)
    if error_type == "string_type":
        return messages.string_message(field)
    if error_type == "string_too_long":
        return messages.max_length_message(field, ctx.get("max_length"))
    if error_type == "greater_than_equal":
        return messages.min_value_message(field, ctx.get("ge"))
    if error_type == "less_than_equal":
        return messages.max_value_message(field, ctx.get("le"))
    if error_type == "decimal_max_places":
        return messages.decimal_places_message(field, ctx.get("decimal_places"))
    if error_type in _INTEGER_ERRORS:
        return messages.integer_message(field)
    if error_type in _NUMBER_ERRORS:
        return messages.number_message(field)
    return error["msg"]


def collect_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Map a pydantic ValidationError to field -> ordered messages."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "payload"
        errors.setdefault(field, []).append(_message_for(field, error))
    return errors


def _ordered(errors: Dict[str, List[str]]) -> Dict[str, List[str]]:
    ordered = {field: errors[field] for field in FIELD_ORDER if field in errors}
    ordered.update({field: msgs for field, msgs in errors.items() if field not in ordered})
    return ordered


async def validate_product_payload(
    db: AsyncSession,
    payload: Any,
    product_id: Optional[int] = None,
) -> BaseModel:
    """
    Validate a create payload (``product_id`` is None) or an update payload
    for the product with ``product_id``.

    Returns the validated schema instance. Raises ProductValidationError.
    """
    data = normalize_payload(payload)
    schema = ProductCreate if product_id is None else ProductUpdate

    errors: Dict[str, List[str]] = {}
    validated = None
    try:
        validated = schema.model_validate(data)
    except ValidationError as exc:
        errors = collect_errors(exc)

    product_code = data.get("product_code")
    if isinstance(product_code, str) and "product_code" not in errors:
        if await product_store.product_code_taken(db, product_code, exclude_id=product_id):
            errors["product_code"] = [messages.taken_message("product_code")]

    if errors:
        raise ProductValidationError(_ordered(errors))
    return validated
