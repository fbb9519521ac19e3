"""Cash purchase calculations"""

from trailer_desk.domain.models import CashDiscount, CashSettlement
from trailer_desk.domain.validation import non_negative_amount


def calculate_cash(price: float, tax_percent: float, fees: float, added_options: float = 0) -> CashSettlement:
    """
    Total due for an outright cash purchase.

    Options are taxed with the trailer, fees are not:
        subtotal = price + options
        total    = subtotal + subtotal * tax% + fees
    """
    price = non_negative_amount("price", price)
    tax_percent = non_negative_amount("tax_percent", tax_percent)
    fees = non_negative_amount("fees", fees)
    added_options = non_negative_amount("added_options", added_options)

    subtotal = price + added_options
    taxes = subtotal * (tax_percent / 100)
    total_cash = subtotal + taxes + fees

    return CashSettlement(
        base_price=price,
        added_options=added_options,
        subtotal=subtotal,
        taxes=taxes,
        fees=fees,
        total_cash=total_cash,
    )


def calculate_tax(price: float, tax_percent: float) -> float:
    price = non_negative_amount("price", price)
    tax_percent = non_negative_amount("tax_percent", tax_percent)
    return price * (tax_percent / 100)


def calculate_out_the_door(price: float, tax_percent: float, fees: float) -> float:
    """Price plus tax plus fees, without options"""
    price = non_negative_amount("price", price)
    fees = non_negative_amount("fees", fees)
    return price + calculate_tax(price, tax_percent) + fees


def calculate_cash_discount(price: float, discount_percent: float) -> CashDiscount:
    """Percentage discount some dealers offer for paying in full"""
    price = non_negative_amount("price", price)
    discount_percent = non_negative_amount("discount_percent", discount_percent)

    discount = price * (discount_percent / 100)
    return CashDiscount(
        original_price=price,
        discount=discount,
        discounted_price=price - discount,
    )
