# backend/app/schemas/product_schema.py
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic import ConfigDict

CENT = Decimal("0.01")


class ProductInfoIn(BaseModel):
    """Seller-editable fields; defaults are the "empty" values validation rejects."""
    name: str = ""
    price: Decimal = Decimal("0")
    weight: float = Field(0.0, allow_inf_nan=False)
    description: Optional[str] = ""
    stock: int = 0

    @field_validator("price")
    @classmethod
    def round_to_cents(cls, v: Decimal) -> Decimal:
        # the column keeps two places; a sub-cent price rounds to 0.00
        try:
            return v.quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise ValueError("price out of range")


class ProductInfoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    sku: str
    name: str
    price: float
    weight: float
    description: Optional[str] = None
    stock: int
    user_id: int


class ProductImageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    image_path: str


class SellerInfo(BaseModel):
    email: str = ""
    full_name: str = ""
    address: str = ""
    phone_number: str = ""


class ProductOut(BaseModel):
    product_info: ProductInfoOut
    product_images: List[ProductImageOut] = []
    seller_info: SellerInfo = SellerInfo()

    @classmethod
    def from_product(cls, p, seller_info: Optional[SellerInfo] = None) -> "ProductOut":
        return cls(
            product_info=ProductInfoOut.model_validate(p),
            product_images=[ProductImageOut.model_validate(img) for img in p.images],
            seller_info=seller_info or SellerInfo(),
        )
