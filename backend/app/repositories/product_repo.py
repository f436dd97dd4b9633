from typing import List, Optional

from app.models.product import Product
from app.models.product_image import ProductImage
from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session, selectinload


class ProductRepository:
    """Queries over products and their images.

    Methods only flush; committing is left to the caller's transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def sku_exists(self, sku: str) -> bool:
        stmt = select(Product.id).where(Product.sku == sku)
        return self.db.execute(stmt).first() is not None

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()  # assigns product.id
        return product

    def get_by_sku(self, sku: str) -> Optional[Product]:
        stmt = (
            select(Product)
            .options(selectinload(Product.images))
            .where(Product.sku == sku)
            .execution_options(populate_existing=True)
        )
        return self.db.scalars(stmt).first()

    def list(
        self, owner_id: Optional[int] = None, search: Optional[str] = None
    ) -> List[Product]:
        """
        Products ordered by id, images attached.

        ``owner_id`` (when non-zero) and ``search`` are ANDed; ``search`` matches
        name or description case-insensitively as a literal substring.
        """
        stmt = (
            select(Product)
            .options(selectinload(Product.images))
            .execution_options(populate_existing=True)
        )
        if owner_id:
            stmt = stmt.where(Product.user_id == owner_id)
        if search:
            stmt = stmt.where(
                or_(
                    Product.name.icontains(search, autoescape=True),
                    Product.description.icontains(search, autoescape=True),
                )
            )
        stmt = stmt.order_by(Product.id)
        return list(self.db.scalars(stmt).all())

    def delete_images(self, product_id: int) -> int:
        result = self.db.execute(
            delete(ProductImage).where(ProductImage.product_id == product_id)
        )
        return result.rowcount

    def add_image(self, product_id: int, image_path: str) -> ProductImage:
        img = ProductImage(product_id=product_id, image_path=image_path)
        self.db.add(img)
        self.db.flush()
        return img

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()
