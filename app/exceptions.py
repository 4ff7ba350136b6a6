from typing import Dict, List


class ProductNotFoundError(Exception):
    """No live product has the requested id."""

    message = "Product not found"

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class ProductValidationError(Exception):
    """Payload failed validation; carries field -> ordered messages."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__(f"Validation failed for: {', '.join(errors)}")
