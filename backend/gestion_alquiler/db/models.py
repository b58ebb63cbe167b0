from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from gestion_alquiler.db.base import Base, TimestampMixin
from gestion_alquiler.utils.dates import nights_between
from gestion_alquiler.utils.invoices import expense_totals, income_totals


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class User(Base, TimestampMixin):
    """API user. Username and password are stored encrypted."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=UserRole.USER.value)
    email = Column(String, nullable=False)
    deleted = Column(Boolean, nullable=False, default=False, index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    def mark_as_deleted(self) -> None:
        self.deleted = True
        self.deleted_at = datetime.now(timezone.utc)

    def __repr__(self):
        return f"<User(id={self.id}, role='{self.role}', deleted={self.deleted})>"


class Apartment(Base, TimestampMixin):
    """Rental apartment."""
    __tablename__ = "apartments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False, index=True)
    postal_code = Column(String(5), nullable=False)
    country = Column(String, nullable=False)

    # Relationships
    rates = relationship("Rate", back_populates="apartment")
    incomes = relationship("Income", back_populates="apartment")
    expenses = relationship("Expense", back_populates="apartment")

    def __repr__(self):
        return f"<Apartment(id={self.id}, name='{self.name}')>"


class Rate(Base, TimestampMixin):
    """Price card of an apartment."""
    __tablename__ = "rates"

    id = Column(Integer, primary_key=True, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    price_per_night = Column(Float, nullable=False, default=0)
    iva = Column(Float, nullable=False, default=0)  # VAT %

    # Relationships
    apartment = relationship("Apartment", back_populates="rates")
    incomes = relationship("Income", back_populates="rate")

    def __repr__(self):
        return f"<Rate(id={self.id}, price_per_night={self.price_per_night}, iva={self.iva})>"


class Intermediary(Base, TimestampMixin):
    """Booking channel or agent."""
    __tablename__ = "intermediaries"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    surname = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    commission = Column(Float, nullable=False, default=0)  # %

    # Relationships
    incomes = relationship("Income", back_populates="intermediary")

    def __repr__(self):
        return f"<Intermediary(id={self.id}, name='{self.name}')>"


class Income(Base, TimestampMixin):
    """Booking invoice. Check-in and check-out are UTC milliseconds."""
    __tablename__ = "incomes"

    id = Column(Integer, primary_key=True, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id"), nullable=False, index=True)
    intermediary_id = Column(Integer, ForeignKey("intermediaries.id"), nullable=False, index=True)
    rate_id = Column(Integer, ForeignKey("rates.id"), nullable=False, index=True)

    check_in = Column(BigInteger, nullable=False, index=True)
    check_out = Column(BigInteger, nullable=False, index=True)
    nights = Column(Integer, nullable=False, default=0)

    client_name = Column(String, nullable=False)
    client_nif = Column(String, nullable=False)
    client_phone = Column(String, nullable=False)
    number_of_people = Column(Integer, nullable=False, default=1)
    discount = Column(Float, nullable=False, default=0)  # %

    total_iva = Column(Float, nullable=False, default=0)
    total_invoice = Column(Float, nullable=False, default=0)
    observations = Column(Text, nullable=True)

    # Relationships
    apartment = relationship("Apartment", back_populates="incomes")
    intermediary = relationship("Intermediary", back_populates="incomes")
    rate = relationship("Rate", back_populates="incomes")

    def refresh_totals(self, rate: Rate) -> None:
        """Derive nights and totals from the stay and the current values of ``rate``"""
        self.nights = nights_between(self.check_in, self.check_out)
        totals = income_totals(
            rate.price_per_night,
            self.number_of_people,
            self.nights,
            self.discount or 0,
            rate.iva
        )
        self.total_iva = totals.total_iva
        self.total_invoice = totals.total_invoice

    def __repr__(self):
        return f"<Income(id={self.id}, check_in={self.check_in}, total_invoice={self.total_invoice})>"


class Expense(Base, TimestampMixin):
    """Apartment expense invoice. Date is UTC milliseconds."""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id"), nullable=False, index=True)
    concept = Column(String, nullable=False)
    date = Column(BigInteger, nullable=False, index=True)
    provider_nif = Column(String, nullable=True)
    expense = Column(Float, nullable=False, default=0)
    iva = Column(Float, nullable=False, default=0)  # VAT %
    total_iva = Column(Float, nullable=False, default=0)
    total_invoice = Column(Float, nullable=False, default=0)
    paid = Column(Boolean, nullable=False, default=False)

    # Relationships
    apartment = relationship("Apartment", back_populates="expenses")

    def refresh_totals(self) -> None:
        totals = expense_totals(self.expense, self.iva)
        self.total_iva = totals.total_iva
        self.total_invoice = totals.total_invoice

    def __repr__(self):
        return f"<Expense(id={self.id}, concept='{self.concept}', total_invoice={self.total_invoice})>"
