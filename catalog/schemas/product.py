from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

# largest decimal price whose minor-units value fits a 32-bit INTEGER column
MAX_PRICE = 21474836.47
MAX_DESCRIPTION_LENGTH = 2000


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    price: float = Field(..., ge=0, le=MAX_PRICE, allow_inf_nan=False)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("description", mode="before")
    @classmethod
    def blank_description_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProductCreate(ProductBase):
    pass

class ProductUpdate(ProductBase):
    pass


class ProductResource(BaseModel):
    """Public shape of a product, price in major units."""

    id: int
    name: str
    description: Optional[str] = None
    price: float = Field(validation_alias="price_decimal")

    class Config:
        from_attributes = True
        populate_by_name = True


class ProductResponse(ProductResource):
    created_at: datetime
    updated_at: datetime


class ProductEnvelope(BaseModel):
    data: ProductResource


class ProductCollection(BaseModel):
    data: list[ProductResource]
