from decimal import Decimal

import pytest

from app.exceptions import ProductValidationError
from app.services import product_store
from app.services.validation import normalize_payload, validate_product_payload


class TestNormalizePayload:
    def test_trims_and_nulls_blank_strings(self):
        payload = {"product_name": "  Lamp ", "description": "", "category": "   ", "price": 3}

        assert normalize_payload(payload) == {
            "product_name": "Lamp",
            "description": None,
            "category": None,
            "price": 3,
        }

    def test_drops_unknown_fields(self):
        assert normalize_payload({"id": 5, "deleted_at": "now", "quantity": 1}) == {"quantity": 1}

    def test_non_object(self):
        assert normalize_payload(None) == {}
        assert normalize_payload("text") == {}


@pytest.mark.asyncio
async def test_create_returns_validated_payload(session_factory):
    async with session_factory() as db:
        validated = await validate_product_payload(
            db, {"product_name": "Lamp", "price": "12.5", "quantity": "2", "category": "Home"}
        )

    assert validated.model_dump() == {
        "product_name": "Lamp",
        "description": None,
        "price": Decimal("12.5"),
        "quantity": 2,
        "category": "Home",
        "product_code": None,
    }


@pytest.mark.asyncio
async def test_errors_are_ordered_by_field(session_factory):
    async with session_factory() as db:
        with pytest.raises(ProductValidationError) as exc_info:
            await validate_product_payload(db, {"category": "c" * 300}, product_id=1)

    assert exc_info.value.errors == {
        "product_code": ["The product code field is required."],
        "product_name": ["The product name field is required."],
        "price": ["The price field is required."],
        "quantity": ["The quantity field is required."],
        "category": ["The category must not be greater than 255 characters."],
    }


@pytest.mark.asyncio
async def test_string_fields_reject_other_types(session_factory):
    async with session_factory() as db:
        with pytest.raises(ProductValidationError) as exc_info:
            await validate_product_payload(db, {"product_name": 42, "price": 1, "quantity": 1})

    assert exc_info.value.errors == {"product_name": ["The product name must be a string."]}


@pytest.mark.asyncio
async def test_update_uniqueness_excludes_own_id(session_factory):
    payload = {"product_code": "SAME", "product_name": "Lamp", "price": 1, "quantity": 1}
    async with session_factory() as db:
        product = await product_store.create_product(
            db, {"product_code": "SAME", "product_name": "Lamp", "price": Decimal("1"), "quantity": 1}
        )

        validated = await validate_product_payload(db, payload, product_id=product.id)
        assert validated.product_code == "SAME"

        with pytest.raises(ProductValidationError) as exc_info:
            await validate_product_payload(db, payload, product_id=product.id + 1)

    assert exc_info.value.errors == {"product_code": ["The product code has already been taken."]}


@pytest.mark.asyncio
@pytest.mark.parametrize("price", ["5.999", 5.999, "0.001"])
async def test_price_is_not_rounded_to_two_places(session_factory, price):
    async with session_factory() as db:
        with pytest.raises(ProductValidationError) as exc_info:
            await validate_product_payload(db, {"product_name": "Lamp", "price": price, "quantity": 1})

    assert exc_info.value.errors == {"price": ["The price must not have more than 2 decimal places."]}
