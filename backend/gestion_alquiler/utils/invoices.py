"""
Invoice totals - VAT (IVA) amount and VAT-inclusive total of incomes and expenses
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class InvoiceTotals:
    total_iva: float
    total_invoice: float

    @property
    def taxable_base(self) -> float:
        return self.total_invoice - self.total_iva


def expense_totals(amount: float, iva: float) -> InvoiceTotals:
    """
    Totals of an expense invoice

    Args:
        amount: Base amount (VAT excluded)
        iva: VAT percentage (0-100)
    """
    total_iva = amount * iva / 100
    return InvoiceTotals(total_iva=total_iva, total_invoice=amount + total_iva)


def income_totals(
    price_per_night: float,
    people: int,
    nights: int,
    discount: float,
    iva: float
) -> InvoiceTotals:
    """
    Totals of a booking

    The discount is applied to the base amount first and VAT is computed on
    the discounted amount.

    Args:
        price_per_night: Rate price per person and night
        people: Number of guests
        nights: Nights of the stay
        discount: Discount percentage (0-100)
        iva: VAT percentage of the rate (0-100)
    """
    base = price_per_night * people * nights
    discounted = base * (1 - discount / 100)
    total_iva = discounted * iva / 100
    return InvoiceTotals(total_iva=total_iva, total_invoice=discounted + total_iva)
