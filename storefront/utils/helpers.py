"""
Helper utilities
"""

import secrets
import string
import time
import slugify as python_slugify

ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


def generate_slug(text: str) -> str:
    """
    Generate URL-friendly slug from text

    Args:
        text: Input text

    Returns:
        Slug
    """
    return python_slugify.slugify(text)


def generate_order_number() -> str:
    """
    Generate a human-readable order number

    Format: ORD-<epoch milliseconds>-<9 random uppercase alphanumerics>
    """
    timestamp = int(time.time() * 1000)
    suffix = "".join(secrets.choice(ORDER_NUMBER_ALPHABET) for _ in range(9))
    return f"ORD-{timestamp}-{suffix}"
