"""
Dashboard Service - Income, expense and VAT settlement

``build_dashboard`` is a pure fold over already loaded records; the service
class only loads them and shapes the quarterly variant.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from gestion_alquiler.core.logging import get_logger
from gestion_alquiler.db.models import Expense, Income
from gestion_alquiler.services.base import BaseService
from gestion_alquiler.utils.dates import QuarterWindow, current_year, quarter_bounds, quarter_of

logger = get_logger(__name__)


@dataclass
class Settlement:
    """Totals of a set of incomes and expenses"""
    incomes: List[Any] = field(default_factory=list)
    expenses: List[Any] = field(default_factory=list)
    total_incomes: float = 0.0
    total_expenses: float = 0.0
    total_vat_quarterly_incomes: float = 0.0
    total_vat_quarterly_expenses: float = 0.0
    current_quarter: int = 1

    @property
    def result(self) -> float:
        return self.total_incomes - self.total_expenses

    @property
    def quarterly_vat(self) -> float:
        """VAT owed when positive, refundable when negative"""
        return self.total_vat_quarterly_incomes - self.total_vat_quarterly_expenses

    @property
    def taxable_incomes(self) -> float:
        return self.total_incomes - self.total_vat_quarterly_incomes

    @property
    def taxable_expenses(self) -> float:
        return self.total_expenses - self.total_vat_quarterly_expenses

    def to_dict(self) -> Dict[str, Any]:
        return {
            "incomes": self.incomes,
            "total_incomes": self.total_incomes,
            "expenses": self.expenses,
            "total_expenses": self.total_expenses,
            "result": self.result,
            "current_quarter": self.current_quarter,
            "total_vat_quarterly_incomes": self.total_vat_quarterly_incomes,
            "total_vat_quarterly_expenses": self.total_vat_quarterly_expenses,
            "quarterly_vat": self.quarterly_vat
        }


def build_dashboard(
    incomes: Sequence[Any],
    expenses: Sequence[Any],
    window: Optional[QuarterWindow] = None
) -> Settlement:
    """
    Aggregate incomes and expenses into a settlement

    Args:
        incomes: Records with ``check_in``, ``total_invoice`` and ``total_iva``
        expenses: Records with ``date``, ``total_invoice`` and ``total_iva``
        window: Optional inclusive range; incomes are matched on check-in
            and expenses on date

    Returns:
        Settlement with the records that were counted and their sums
    """
    if window is not None:
        incomes = [income for income in incomes if window.contains(income.check_in)]
        expenses = [expense for expense in expenses if window.contains(expense.date)]

    settlement = Settlement(
        incomes=list(incomes),
        expenses=list(expenses),
        current_quarter=quarter_of()
    )
    for income in settlement.incomes:
        settlement.total_incomes += income.total_invoice
        settlement.total_vat_quarterly_incomes += income.total_iva
    for expense in settlement.expenses:
        settlement.total_expenses += expense.total_invoice
        settlement.total_vat_quarterly_expenses += expense.total_iva
    return settlement


class DashboardService(BaseService):

    def get_dashboard(self) -> Dict[str, Any]:
        with self.db_errors("loading dashboard records"):
            incomes = self.db.query(Income).order_by(Income.check_in, Income.id).all()
            expenses = self.db.query(Expense).order_by(Expense.date, Expense.id).all()

        settlement = build_dashboard(incomes, expenses)
        logger.info(
            "Dashboard computed",
            incomes=len(settlement.incomes),
            expenses=len(settlement.expenses),
            result=settlement.result
        )
        return settlement.to_dict()

    def get_quarter_dashboard(self, quarter: int, year: Optional[int] = None) -> Dict[str, Any]:
        """
        Settlement of one quarter

        Raises:
            ValidationException: If quarter is not in 1-4
            DatabaseException: If loading the records fails
        """
        if year is None:
            year = current_year()
        window = quarter_bounds(year, quarter)
        with self.db_errors(f"loading records of quarter {quarter}"):
            incomes = (
                self.db.query(Income)
                .filter(Income.check_in >= window.start, Income.check_in <= window.end)
                .order_by(Income.check_in, Income.id)
                .all()
            )
            expenses = (
                self.db.query(Expense)
                .filter(Expense.date >= window.start, Expense.date <= window.end)
                .order_by(Expense.date, Expense.id)
                .all()
            )

        settlement = build_dashboard(incomes, expenses, window)
        data = settlement.to_dict()
        data.update({
            "quarter": quarter,
            "year": year,
            "quarterly_incomes": settlement.taxable_incomes,
            "quarterly_expenses": settlement.taxable_expenses,
            "start_of_quarter": window.start,
            "end_of_quarter": window.end
        })
        logger.info(
            "Quarter dashboard computed",
            quarter=quarter,
            year=year,
            quarterly_vat=settlement.quarterly_vat
        )
        return data

