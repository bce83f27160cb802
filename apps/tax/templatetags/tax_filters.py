from decimal import Decimal, InvalidOperation

from django import template
from django.conf import settings

register = template.Library()

CURRENCY_SYMBOLS = {'USD': '$', 'HNL': 'L'}


@register.filter
def currency(value):
    """금액 표시: $12,345.67"""
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return value
    symbol = CURRENCY_SYMBOLS.get(getattr(settings, 'TAX_CURRENCY', 'USD'), '')
    return f"{symbol}{amount:,.2f}"
