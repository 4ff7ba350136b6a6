"""
Client-side view state for the inventory page.

Filtering is in-memory over the last fetched list: a product is shown when its
name contains the search term (case-insensitive) and, if a category filter is
set, its category equals the filter.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, Iterable, List, Optional
from app.schemas import ProductResponse

FORM_FIELDS = ("product_code", "product_name", "description", "price", "quantity", "category")


def derive_categories(products: Iterable[ProductResponse]) -> List[str]:
    """Distinct non-empty categories in first-seen order."""
    seen: Dict[str, None] = {}
    for product in products:
        if product.category:
            seen.setdefault(product.category, None)
    return list(seen)


def matches(product: ProductResponse, search_term: str = "", category_filter: str = "") -> bool:
    matches_search = search_term.lower() in product.product_name.lower()
    matches_category = not category_filter or product.category == category_filter
    return matches_search and matches_category


def filter_products(
    products: Iterable[ProductResponse],
    search_term: str = "",
    category_filter: str = "",
) -> List[ProductResponse]:
    return [p for p in products if matches(p, search_term, category_filter)]


class ProductForm(BaseModel):
    """In-progress form values, kept as the raw strings a user typed."""

    product_code: str = ""
    product_name: str = ""
    description: str = ""
    price: str = ""
    quantity: str = ""
    category: str = ""

    @classmethod
    def from_product(cls, product: ProductResponse) -> "ProductForm":
        return cls(
            product_code=product.product_code or "",
            product_name=product.product_name,
            description=product.description or "",
            price=str(product.price),
            quantity=str(product.quantity),
            category=product.category or "",
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class ProductViewState(BaseModel):
    products: List[ProductResponse] = Field(default_factory=list)
    search_term: str = ""
    category_filter: str = ""
    categories: List[str] = Field(default_factory=list)
    form: ProductForm = Field(default_factory=ProductForm)
    editing_id: Optional[int] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def filtered_products(self) -> List[ProductResponse]:
        return filter_products(self.products, self.search_term, self.category_filter)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def set_products(self, products: List[ProductResponse]) -> None:
        self.products = list(products)
        self.categories = derive_categories(self.products)

    def set_search_term(self, search_term: str) -> None:
        self.search_term = search_term

    def set_category_filter(self, category_filter: str) -> None:
        self.category_filter = category_filter

    def update_field(self, field: str, value: str) -> None:
        """Set one form field and clear its error."""
        if field not in FORM_FIELDS:
            raise KeyError(field)
        setattr(self.form, field, value)
        self.errors.pop(field, None)

    def start_edit(self, product: ProductResponse) -> None:
        self.editing_id = product.id
        self.form = ProductForm.from_product(product)
        self.errors = {}

    def set_errors(self, errors: Dict[str, List[str]]) -> None:
        self.errors = dict(errors)

    def first_error(self, field: str) -> Optional[str]:
        messages = self.errors.get(field)
        return messages[0] if messages else None

    def reset_form(self) -> None:
        self.editing_id = None
        self.form = ProductForm()
        self.errors = {}
