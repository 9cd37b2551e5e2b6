from decimal import Decimal

from storefront.models import Product, ProductVariant
from storefront.services.pricing import (
    calculate_order_totals,
    effective_price,
    effective_stock,
    lines_subtotal,
    to_money
)


def test_totals_above_threshold_ship_free():
    totals = calculate_order_totals(Decimal("60.00"))

    assert totals.subtotal == Decimal("60.00")
    assert totals.tax == Decimal("6.00")
    assert totals.shipping_cost == Decimal("0.00")
    assert totals.total == Decimal("66.00")


def test_totals_below_threshold_pay_flat_fee():
    totals = calculate_order_totals(Decimal("30.00"))

    assert totals.tax == Decimal("3.00")
    assert totals.shipping_cost == Decimal("9.99")
    assert totals.total == Decimal("42.99")


def test_threshold_is_strict():
    totals = calculate_order_totals(Decimal("50.00"))

    assert totals.shipping_cost == Decimal("9.99")
    assert totals.total == Decimal("64.99")


def test_tax_rounds_half_up_to_cents():
    totals = calculate_order_totals(Decimal("0.05"))

    assert totals.tax == Decimal("0.01")
    assert totals.total == Decimal("10.05")


def test_overrides_take_precedence_over_settings():
    totals = calculate_order_totals(
        Decimal("100"),
        tax_rate=Decimal("0.2"),
        free_shipping_threshold=Decimal("200"),
        flat_shipping_fee=Decimal("5")
    )

    assert totals.tax == Decimal("20.00")
    assert totals.shipping_cost == Decimal("5.00")
    assert totals.total == Decimal("125.00")


def test_effective_price_and_stock_prefer_variant_values():
    product = Product(price=Decimal("10.00"), stock_qty=5)
    variant = ProductVariant(price=Decimal("12.50"), stock_qty=2)

    assert effective_price(product, variant) == Decimal("12.50")
    assert effective_stock(product, variant) == 2


def test_variant_without_overrides_falls_back_to_product():
    product = Product(price=Decimal("10.00"), stock_qty=5)
    variant = ProductVariant(price=None, stock_qty=None)

    assert effective_price(product, variant) == Decimal("10.00")
    assert effective_stock(product, variant) == 5
    assert effective_price(product) == Decimal("10.00")
    assert effective_stock(product) == 5


def test_lines_subtotal_uses_current_prices():
    widget = Product(price=Decimal("20.00"), stock_qty=5)
    gadget = Product(price=Decimal("10.00"), stock_qty=5)
    large = ProductVariant(price=Decimal("15.00"))

    subtotal = lines_subtotal([(widget, None, 2), (gadget, large, 1)])

    assert subtotal == Decimal("55.00")


def test_to_money():
    assert to_money("1.005") == Decimal("1.01")
    assert to_money(3) == Decimal("3.00")
