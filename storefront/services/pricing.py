"""
Pricing rules shared by the cart and checkout

Unit prices and stock resolve variant-first; order totals use a fixed tax
rate and a free-shipping threshold taken from settings.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple

from storefront.core.config import settings
from storefront.models import Product, ProductVariant

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Round to cents, half-up"""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def effective_price(product: Product, variant: Optional[ProductVariant] = None) -> Decimal:
    """Variant price when the variant sets one, else the product price"""
    if variant is not None and variant.price is not None:
        return to_money(variant.price)
    return to_money(product.price)


def effective_stock(product: Product, variant: Optional[ProductVariant] = None) -> int:
    """Variant stock when the variant tracks one, else the product stock"""
    if variant is not None and variant.stock_qty is not None:
        return variant.stock_qty
    return product.stock_qty or 0


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    total: Decimal


def calculate_order_totals(
    subtotal: Decimal,
    tax_rate: Optional[Decimal] = None,
    free_shipping_threshold: Optional[Decimal] = None,
    flat_shipping_fee: Optional[Decimal] = None,
) -> OrderTotals:
    """
    Derive tax, shipping and total from a subtotal

    Shipping is free only when the subtotal is strictly above the threshold.
    """
    tax_rate = settings.TAX_RATE if tax_rate is None else tax_rate
    threshold = settings.FREE_SHIPPING_THRESHOLD if free_shipping_threshold is None else free_shipping_threshold
    flat_fee = settings.FLAT_SHIPPING_FEE if flat_shipping_fee is None else flat_shipping_fee

    subtotal = to_money(subtotal)
    tax = to_money(subtotal * tax_rate)
    shipping_cost = to_money(0) if subtotal > threshold else to_money(flat_fee)

    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        shipping_cost=shipping_cost,
        total=subtotal + tax + shipping_cost,
    )


def lines_subtotal(lines: Iterable[Tuple[Product, Optional[ProductVariant], int]]) -> Decimal:
    """Sum current unit price times quantity over (product, variant, quantity) lines"""
    return to_money(
        sum(
            (effective_price(product, variant) * quantity for product, variant, quantity in lines),
            Decimal("0")
        )
    )
