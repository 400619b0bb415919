"""
Bulk order arithmetic. Pure functions so they can be reused by the admin
recalculation path and tested in isolation.
"""
from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal('0.01')


def money(value):
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def actual_pieces(quantity, order_type, pieces_per_set=None):
    """Sets are priced per piece: quantity x pieces_per_set"""
    if order_type == 'sets' and pieces_per_set:
        return quantity * pieces_per_set
    return quantity


def line_total(quantity, order_type, unit_price, pieces_per_set=None):
    return money(actual_pieces(quantity, order_type, pieces_per_set) * Decimal(str(unit_price)))


def order_total(subtotal, delivery_charges=0, cash_handling_fees=0, discount=0):
    """subtotal + delivery + cash handling - discount, never below zero"""
    total = money(subtotal) + money(delivery_charges) + money(cash_handling_fees) - money(discount)
    return max(total, Decimal('0.00'))


def split_gst_inclusive(amount, rate):
    """Split a GST inclusive amount into ``(base, gst)``"""
    amount = money(amount)
    rate = Decimal(str(rate))
    base = money(amount * 100 / (100 + rate))
    return base, amount - base
