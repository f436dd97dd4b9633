import logging
from typing import Callable, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.errors import ProductNotFound, StorageError
from app.models.product import Product
from app.models.product_image import ProductImage
from app.repositories.product_repo import ProductRepository
from app.schemas.product_schema import ProductInfoIn
from app.storage.image_storage import ImageStorage
from app.utils.sku import generate_sku
from app.utils.transactions import smart_transaction

logger = logging.getLogger(__name__)


class ProductService:
    """
    Transactional use-cases over the product catalog.

    Every public method runs in its own transaction (or SAVEPOINT when the
    caller already holds one) and reports database failures as StorageError.
    """

    def __init__(
        self,
        db: Session,
        storage: Optional[ImageStorage] = None,
        repo: Optional[ProductRepository] = None,
        sku_factory: Callable[[], str] = generate_sku,
    ):
        self.db = db
        self.storage = storage
        self.repo = repo or ProductRepository(db)
        self.sku_factory = sku_factory

    def _issue_sku(self) -> str:
        # must run inside the insert's transaction so the check and the
        # insert see the same snapshot
        while True:
            candidate = self.sku_factory()
            if not self.repo.sku_exists(candidate):
                return candidate
            logger.debug("SKU collision on %s, drawing another", candidate)

    def create_product(self, info: ProductInfoIn, user_id: int) -> Product:
        """
        Insert a product under a freshly issued, collision-free SKU.
        Returns the persisted product (id and sku assigned).
        """
        with smart_transaction(self.db, "insert product"):
            sku = self._issue_sku()
            product = self.repo.add(
                Product(
                    sku=sku,
                    name=info.name,
                    price=info.price,
                    weight=info.weight,
                    description=info.description,
                    stock=info.stock,
                    user_id=user_id,
                )
            )
        logger.info("Created product %s (id=%s) for user %s", product.sku, product.id, user_id)
        return product

    def list_products(
        self, owner_id: Optional[int] = None, search: Optional[str] = None
    ) -> List[Product]:
        with smart_transaction(self.db, "get products"):
            return self.repo.list(owner_id=owner_id, search=search)

    def get_product(self, sku: str) -> Product:
        with smart_transaction(self.db, "get product"):
            product = self.repo.get_by_sku(sku)
            if not product:
                raise ProductNotFound(f"Product with SKU '{sku}' not found")
            return product

    def update_product(self, sku: str, info: ProductInfoIn, user_id: int) -> Product:
        """Replace every editable field of the product; sku and id never change."""
        with smart_transaction(self.db, "update product"):
            product = self.repo.get_by_sku(sku)
            if not product:
                raise ProductNotFound(f"Product with SKU '{sku}' not found")
            product.name = info.name
            product.price = info.price
            product.weight = info.weight
            product.description = info.description
            product.stock = info.stock
            product.user_id = user_id
            self.db.flush()
        logger.info("Updated product %s", sku)
        return product

    def replace_images(self, product_id: int, files: Iterable) -> List[ProductImage]:
        """
        Swap the product's images for ``files`` (objects with ``filename`` and ``file``).

        All-or-nothing: on failure the image rows are rolled back and files
        written during this call are removed from the content store.
        """
        if self.storage is None:
            raise StorageError("image storage is not configured")

        written: List[str] = []
        try:
            with smart_transaction(self.db, "save product images"):
                self.repo.delete_images(product_id)
                images = []
                for upload in files:
                    try:
                        path = self.storage.save(upload.filename, upload.file)
                    except OSError as e:
                        raise StorageError(f"There's an error when saving product image => {e}") from e
                    written.append(path)
                    images.append(self.repo.add_image(product_id, path))
        except Exception:
            for path in written:
                self.storage.remove(path)
            raise
        logger.info("Replaced images of product %s (%d files)", product_id, len(images))
        return images

    def delete_product(self, sku: str) -> bool:
        """
        Delete the product and, by cascade, its images.
        A missing SKU is a no-op; returns False in that case.
        """
        with smart_transaction(self.db, "delete product"):
            product = self.repo.get_by_sku(sku)
            if not product:
                logger.info("Delete requested for unknown SKU %s, nothing to do", sku)
                return False
            self.repo.delete(product)
        logger.info("Deleted product %s", sku)
        return True

    def decrease_stock(self, sku: str, qty: int) -> Product:
        """Subtract ``qty`` from stock; no floor, stock may go negative."""
        with smart_transaction(self.db, "update product stock"):
            product = self.repo.get_by_sku(sku)
            if not product:
                raise ProductNotFound(f"Product with SKU '{sku}' not found")
            product.stock = product.stock - qty
            self.db.flush()
        logger.info("Decreased stock of %s by %s (now %s)", sku, qty, product.stock)
        return product
