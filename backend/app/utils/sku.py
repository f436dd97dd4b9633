import secrets
import string

SKU_LENGTH = 10
SKU_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase


def generate_sku() -> str:
    """
    Return a random SKU candidate of SKU_LENGTH characters from SKU_ALPHABET.

    The ``secrets`` source is seeded by the OS, so sequences differ between
    process starts. Uniqueness is the caller's job (see ProductService.create_product).
    """
    return "".join(secrets.choice(SKU_ALPHABET) for _ in range(SKU_LENGTH))
