import httpx
import pytest

from app.client.api_client import ApiError, ApiNotFoundError, ApiValidationError, ProductApiClient
from app.client.view import DELETE_CONFIRMATION, ProductInventoryView


@pytest.fixture
def api(http_client):
    return ProductApiClient(client=http_client)


@pytest.fixture
def view(api):
    return ProductInventoryView(api)


def _fill(view, **fields):
    for name, value in fields.items():
        view.state.update_field(name, value)


@pytest.mark.asyncio
async def test_submit_creates_and_reloads(view):
    _fill(view, product_name="Widget A", price="5", quantity="2", category="Tools")

    saved = await view.submit()

    assert saved.product_name == "Widget A"
    assert [p.id for p in view.state.products] == [saved.id]
    assert view.state.categories == ["Tools"]
    assert view.state.form.product_name == ""


@pytest.mark.asyncio
async def test_submit_validation_errors_keep_form(view):
    _fill(view, product_name="Widget A", price="-1")

    assert await view.submit() is None

    assert view.state.errors == {
        "price": ["The price must be at least 0."],
        "quantity": ["The quantity field is required."],
    }
    assert view.state.form.product_name == "Widget A"
    assert view.state.products == []


@pytest.mark.asyncio
async def test_edit_then_submit_updates(view, api):
    created = await api.create_product({"product_name": "Lamp", "price": 3, "quantity": 1})
    await view.load()

    view.edit(view.state.products[0])
    _fill(view, product_code="L-1", quantity="8")
    saved = await view.submit()

    assert saved.id == created.id
    assert saved.product_code == "L-1"
    assert saved.quantity == 8
    assert view.state.editing_id is None
    assert (await api.get_product(created.id)).quantity == 8


@pytest.mark.asyncio
async def test_edit_without_code_fails_update(view, api):
    await api.create_product({"product_name": "Lamp", "price": 3, "quantity": 1})
    await view.load()

    view.edit(view.state.products[0])
    await view.submit()

    assert view.state.first_error("product_code") == "The product code field is required."
    assert view.state.is_editing


@pytest.mark.asyncio
async def test_delete_requires_confirmation(view, api):
    product = await api.create_product({"product_name": "Lamp", "price": 3, "quantity": 1})
    await view.load()
    prompts = []

    def decline(message):
        prompts.append(message)
        return False

    assert not await view.delete(product.id, decline)
    assert prompts == [DELETE_CONFIRMATION]
    assert len(view.state.products) == 1

    assert await view.delete(product.id, lambda message: True)
    assert view.state.products == []


@pytest.mark.asyncio
async def test_delete_missing_product_is_logged(view, caplog):
    assert not await view.delete(404, lambda message: True)
    assert "Error deleting product" in caplog.text


@pytest.mark.asyncio
async def test_api_client_errors(api):
    with pytest.raises(ApiNotFoundError):
        await api.get_product(1)

    with pytest.raises(ApiValidationError) as exc_info:
        await api.create_product({})
    assert set(exc_info.value.errors) == {"product_name", "price", "quantity"}

    assert await api.list_products() == []


@pytest.mark.asyncio
async def test_load_failure_keeps_previous_list(view):
    async def broken(request):
        return httpx.Response(500, json={"detail": "Internal server error"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(broken), base_url="http://testserver") as http:
        failing = ProductInventoryView(ProductApiClient(client=http), state=view.state)
        await failing.load()

    assert view.state.products == []


@pytest.mark.asyncio
async def test_non_json_error_page_is_logged_not_raised(view, caplog):
    async def proxy_page(request):
        return httpx.Response(404, text="<html>Not Found</html>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(proxy_page), base_url="http://testserver") as http:
        failing = ProductInventoryView(ProductApiClient(client=http), state=view.state)

        assert not await failing.delete(1, lambda message: True)
        await failing.load()

    assert "Error deleting product" in caplog.text
    assert "Error fetching products" in caplog.text
    assert view.state.products == []


@pytest.mark.asyncio
async def test_non_json_success_body_raises_api_error():
    async def plain_text(request):
        return httpx.Response(200, text="OK")

    async with httpx.AsyncClient(transport=httpx.MockTransport(plain_text), base_url="http://testserver") as http:
        with pytest.raises(ApiError, match="non-JSON"):
            await ProductApiClient(client=http).list_products()
