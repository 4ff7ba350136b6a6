from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from typing import Optional, Dict, List

# Column limits of the products table
MAX_PRICE = Decimal("99999999.99")
MAX_INT = 2147483647


# Product Schemas
class ProductBase(BaseModel):
    product_name: str = Field(..., max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., ge=0, le=MAX_PRICE, decimal_places=2, description="Unit price")
    quantity: int = Field(..., ge=0, le=MAX_INT, description="Units in stock")
    category: Optional[str] = Field(None, max_length=255, description="Free-text category")


class ProductCreate(ProductBase):
    product_code: Optional[str] = Field(None, max_length=100, description="Product code (unique among live products)")


class ProductUpdate(ProductBase):
    product_code: str = Field(..., max_length=100, description="Product code (unique among live products)")


class ProductResponse(BaseModel):
    id: int
    product_code: Optional[str] = None
    product_name: str
    description: Optional[str] = None
    price: Decimal
    quantity: int
    category: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


class MessageResponse(BaseModel):
    message: str


class ValidationErrorResponse(BaseModel):
    errors: Dict[str, List[str]]
