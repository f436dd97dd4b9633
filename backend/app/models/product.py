from sqlalchemy import Column, Float, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.db import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(15), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    weight = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    user_id = Column("account_user_id", Integer, nullable=False, index=True)

    images = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductImage.id",
    )

    def __repr__(self):
        return f"<Product sku={self.sku} name={self.name}>"


# registers ProductImage with the mapper so the relationship above resolves
from app.models.product_image import ProductImage  # noqa: E402,F401
