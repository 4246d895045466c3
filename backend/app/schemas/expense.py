"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from app.models.expense import ExpenseCategory
from app.schemas.user import UserSummary


class ExpenseParticipantIn(BaseModel):
    """One participant's share when creating or updating an expense."""
    user_id: int
    share: Decimal = Field(ge=0)
    is_paid: bool = False


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    title: str = Field(min_length=1)
    description: Optional[str] = None
    amount: Decimal = Field(ge=0)
    currency: str = "USD"
    category: ExpenseCategory = ExpenseCategory.OTHER
    date: Optional[dt_date] = None  # Defaults to today
    receipt: Optional[str] = None
    paid_by_id: Optional[int] = None  # Defaults to the caller
    participants: Optional[List[ExpenseParticipantIn]] = None  # Defaults to the payer alone

    @field_validator("currency", mode="before")
    @classmethod
    def upper_currency(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class ExpenseUpdate(BaseModel):
    """Schema for expense update; participants, when given, replace the list."""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    currency: Optional[str] = None
    category: Optional[ExpenseCategory] = None
    date: Optional[dt_date] = None
    receipt: Optional[str] = None
    participants: Optional[List[ExpenseParticipantIn]] = None

    @field_validator("currency", mode="before")
    @classmethod
    def upper_currency(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class ExpenseParticipantResponse(BaseModel):
    """Schema for expense participant response."""
    user: UserSummary
    share: Decimal
    is_paid: bool

    class Config:
        from_attributes = True


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    trip_id: int
    title: str
    description: Optional[str] = None
    amount: Decimal
    currency: str
    category: ExpenseCategory
    date: dt_date
    receipt: Optional[str] = None
    paid_by: UserSummary
    participants: List[ExpenseParticipantResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ExpenseData(BaseModel):
    expense: ExpenseResponse


class ExpenseListData(BaseModel):
    expenses: List[ExpenseResponse]
    count: int
    total: Decimal


class BalanceEntry(BaseModel):
    """Net balance of one user: positive is owed to them, negative they owe."""
    user: UserSummary
    balance: Decimal


class Transfer(BaseModel):
    """Schema for a single suggested settle-up payment."""
    from_user: UserSummary
    to_user: UserSummary
    amount: Decimal


class BalanceSummary(BaseModel):
    balances: List[BalanceEntry]
    transfers: List[Transfer]
