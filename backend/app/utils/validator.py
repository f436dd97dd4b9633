from app.errors import ProductValidationError


def validate_product_info(info) -> None:
    """
    Raise ProductValidationError for the first missing required field.

    Checked in order: name (blank after trimming), price (zero), weight (zero).
    Stock and owner are not validated here.
    """
    if not (info.name or "").strip():
        raise ProductValidationError("name empty/not found")

    if not info.price:
        raise ProductValidationError("price empty/not found")

    if not info.weight:
        raise ProductValidationError("weight empty/not found")
