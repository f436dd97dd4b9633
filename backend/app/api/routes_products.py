import logging
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.adapters.account_service import AccountServiceClient
from app.api.deps import get_account_client, get_current_user, get_image_storage, require_role
from app.db import get_db
from app.errors import CatalogError, status_for
from app.schemas.product_schema import ProductInfoIn, ProductInfoOut, ProductOut
from app.schemas.user_schema import AccountUser, Role
from app.services.product_service import ProductService
from app.storage.image_storage import ImageStorage
from app.utils.validator import validate_product_info

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["products"])


def _http_error(e: CatalogError) -> HTTPException:
    return HTTPException(status_code=status_for(e), detail=e.message)


def _require_sku(sku: Optional[str]) -> str:
    if not sku or not sku.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="parameter 'sku' empty/not found",
        )
    return sku


def product_info_form(
    name: str = Form(""),
    price: Decimal = Form(Decimal("0")),
    weight: float = Form(0.0),
    description: str = Form(""),
    stock: int = Form(0),
) -> ProductInfoIn:
    try:
        return ProductInfoIn(
            name=name, price=price, weight=weight, description=description, stock=stock
        )
    except ValidationError as e:
        err = e.errors()[0]
        field = err["loc"][0] if err["loc"] else "product info"
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field} invalid => {err['msg']}",
        )


def _service(db: Session, storage: ImageStorage = None) -> ProductService:
    return ProductService(db, storage=storage)


@router.post(
    "/product/",
    summary="Add product",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductInfoOut,
)
def add_product(
    info: ProductInfoIn = Depends(product_info_form),
    product_images: Optional[List[UploadFile]] = File(None),
    user: AccountUser = Depends(require_role(Role.SELLER)),
    db: Session = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
):
    try:
        validate_product_info(info)
    except CatalogError as e:
        raise _http_error(e)

    svc = _service(db, storage)
    try:
        product = svc.create_product(info, user_id=user.id)
    except CatalogError as e:
        raise _http_error(e)

    if product_images:
        try:
            svc.replace_images(product.id, product_images)
        except CatalogError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=(
                    "Product info data created successfully, "
                    f"but saving product images failed => {e.message}"
                ),
            )

    return ProductInfoOut.model_validate(product)


@router.get("/products/", summary="List products", response_model=List[ProductOut])
def list_products(
    search: Optional[str] = Query(None, description="search term"),
    user: AccountUser = Depends(require_role(Role.BUYER)),
    db: Session = Depends(get_db),
):
    try:
        products = _service(db).list_products(search=search)
    except CatalogError as e:
        raise _http_error(e)
    return [ProductOut.from_product(p) for p in products]


@router.get(
    "/products/user/",
    summary="List the calling seller's products",
    response_model=List[ProductOut],
)
def list_own_products(
    search: Optional[str] = Query(None, description="search term"),
    user: AccountUser = Depends(require_role(Role.SELLER)),
    db: Session = Depends(get_db),
):
    try:
        products = _service(db).list_products(owner_id=user.id, search=search)
    except CatalogError as e:
        raise _http_error(e)
    return [ProductOut.from_product(p) for p in products]


@router.get("/product/", summary="Get product by SKU", response_model=ProductOut)
def get_product(
    sku: Optional[str] = Query(None),
    testing: bool = Query(False, description="skip the seller info lookup"),
    user: AccountUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    accounts: AccountServiceClient = Depends(get_account_client),
):
    sku = _require_sku(sku)
    try:
        product = _service(db).get_product(sku)
        seller_info = None if testing else accounts.get_user(product.user_id)
    except CatalogError as e:
        raise _http_error(e)
    return ProductOut.from_product(product, seller_info)


@router.put("/product/", summary="Update product by SKU", response_model=ProductInfoOut)
def update_product(
    sku: Optional[str] = Query(None),
    info: ProductInfoIn = Depends(product_info_form),
    product_images: Optional[List[UploadFile]] = File(None),
    user: AccountUser = Depends(require_role(Role.SELLER)),
    db: Session = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
):
    try:
        validate_product_info(info)
    except CatalogError as e:
        raise _http_error(e)
    sku = _require_sku(sku)

    svc = _service(db, storage)
    try:
        product = svc.update_product(sku, info, user_id=user.id)
    except CatalogError as e:
        raise _http_error(e)

    if product_images:
        try:
            svc.replace_images(product.id, product_images)
        except CatalogError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=(
                    "Product info data updated successfully, "
                    f"but update product images failed => {e.message}"
                ),
            )

    return ProductInfoOut.model_validate(product)


@router.delete("/product/", summary="Delete product by SKU")
def delete_product(
    sku: Optional[str] = Query(None),
    user: AccountUser = Depends(require_role(Role.SELLER)),
    db: Session = Depends(get_db),
):
    sku = _require_sku(sku)
    try:
        _service(db).delete_product(sku)
    except CatalogError as e:
        raise _http_error(e)
    return {"message": "Delete product success!"}


@router.put("/product/decrease/stock/", summary="Decrease product stock by SKU")
def decrease_stock(
    sku: Optional[str] = Query(None),
    qty: int = Form(0),
    user: AccountUser = Depends(require_role(Role.SELLER)),
    db: Session = Depends(get_db),
):
    sku = _require_sku(sku)
    try:
        _service(db).decrease_stock(sku, qty)
    except CatalogError as e:
        raise _http_error(e)
    return {"message": "Product stock updated!"}
