"""
API request and response models

Fields are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gestion_alquiler.db.models import UserRole

T = TypeVar("T")

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class RecordResponse(CamelModel):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Pagination

class PageInfo(BaseModel):
    current: int
    prev: Optional[int] = None
    has_prev: bool
    next: Optional[int] = None
    has_next: bool
    total: int


class ItemsInfo(BaseModel):
    limit: int
    begin: int
    end: int
    total: int


class PaginationInfo(BaseModel):
    pages: PageInfo
    items: ItemsInfo


class Page(BaseModel, Generic[T]):
    results: List[T]
    pagination: PaginationInfo


class DeletedResponse(BaseModel):
    id: int


# Apartments

class ApartmentCreate(CamelModel):
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1, max_length=5)
    country: str = Field(..., min_length=1)


class ApartmentUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1)
    postal_code: Optional[str] = Field(None, min_length=1, max_length=5)
    country: Optional[str] = Field(None, min_length=1)


class ApartmentResponse(RecordResponse):
    name: str
    address: str
    city: str
    postal_code: str
    country: str


# Rates

class RateCreate(CamelModel):
    apartment_id: int
    name: str = Field(..., min_length=1)
    price_per_night: float = Field(..., ge=0)
    iva: float = Field(0, ge=0, le=100)


class RateUpdate(CamelModel):
    apartment_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1)
    price_per_night: Optional[float] = Field(None, ge=0)
    iva: Optional[float] = Field(None, ge=0, le=100)


class RateResponse(RecordResponse):
    apartment_id: int
    name: str
    price_per_night: float
    iva: float


# Intermediaries

class IntermediaryCreate(CamelModel):
    name: str = Field(..., min_length=1)
    surname: str = Field(..., min_length=1)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    phone: Optional[str] = None
    commission: float = Field(0, ge=0, le=100)


class IntermediaryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    surname: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    phone: Optional[str] = None
    commission: Optional[float] = Field(None, ge=0, le=100)


class IntermediaryResponse(RecordResponse):
    name: str
    surname: str
    email: Optional[str] = None
    phone: Optional[str] = None
    commission: float


# Incomes

class IncomeCreate(CamelModel):
    apartment_id: int
    intermediary_id: int
    rate_id: int
    check_in: int = Field(..., ge=0, description="UTC timestamp in milliseconds")
    check_out: int = Field(..., ge=0, description="UTC timestamp in milliseconds")
    client_name: str = Field(..., min_length=1)
    client_nif: str = Field(..., min_length=1)
    client_phone: str = Field(..., min_length=1)
    number_of_people: int = Field(..., ge=1)
    discount: float = Field(0, ge=0, le=100)
    observations: Optional[str] = None


class IncomeUpdate(CamelModel):
    apartment_id: Optional[int] = None
    intermediary_id: Optional[int] = None
    rate_id: Optional[int] = None
    check_in: Optional[int] = Field(None, ge=0)
    check_out: Optional[int] = Field(None, ge=0)
    client_name: Optional[str] = Field(None, min_length=1)
    client_nif: Optional[str] = Field(None, min_length=1)
    client_phone: Optional[str] = Field(None, min_length=1)
    number_of_people: Optional[int] = Field(None, ge=1)
    discount: Optional[float] = Field(None, ge=0, le=100)
    observations: Optional[str] = None


class IncomeResponse(RecordResponse):
    apartment_id: int
    intermediary_id: int
    rate_id: int
    check_in: int
    check_out: int
    nights: int
    client_name: str
    client_nif: str
    client_phone: str
    number_of_people: int
    discount: float
    total_iva: float
    total_invoice: float
    observations: Optional[str] = None


# Expenses

class ExpenseCreate(CamelModel):
    apartment_id: int
    concept: str = Field(..., min_length=1)
    date: int = Field(..., ge=0, description="UTC timestamp in milliseconds")
    provider_nif: Optional[str] = None
    expense: float = Field(..., ge=0)
    iva: float = Field(0, ge=0, le=100)
    paid: bool = False


class ExpenseUpdate(CamelModel):
    apartment_id: Optional[int] = None
    concept: Optional[str] = Field(None, min_length=1)
    date: Optional[int] = Field(None, ge=0)
    provider_nif: Optional[str] = None
    expense: Optional[float] = Field(None, ge=0)
    iva: Optional[float] = Field(None, ge=0, le=100)
    paid: Optional[bool] = None


class ExpenseResponse(RecordResponse):
    apartment_id: int
    concept: str
    date: int
    provider_nif: Optional[str] = None
    expense: float
    iva: float
    total_iva: float
    total_invoice: float
    paid: bool


# Users and auth

class UserCreate(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.USER
    email: str = Field(..., pattern=EMAIL_PATTERN)


class UserUpdate(CamelModel):
    username: Optional[str] = Field(None, min_length=1)
    role: Optional[UserRole] = None
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    deleted: Optional[bool] = None


class ChangePasswordRequest(CamelModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class UserResponse(RecordResponse):
    username: str
    role: UserRole
    email: str
    deleted: bool
    deleted_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    username: str
    token: str
    expires: int = Field(..., description="Token lifetime in seconds")


# Dashboard

class DashboardResponse(CamelModel):
    incomes: List[IncomeResponse]
    total_incomes: float
    expenses: List[ExpenseResponse]
    total_expenses: float
    result: float
    current_quarter: int
    total_vat_quarterly_incomes: float = Field(..., alias="totalVATQuarterlyIncomes")
    total_vat_quarterly_expenses: float = Field(..., alias="totalVATQuarterlyExpenses")
    quarterly_vat: float = Field(..., alias="quarterlyVAT")


class QuarterDashboardResponse(DashboardResponse):
    quarter: int
    year: int
    quarterly_incomes: float
    quarterly_expenses: float
    start_of_quarter: int
    end_of_quarter: int
