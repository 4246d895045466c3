"""
Expense model for tracking shared spending.
"""
from datetime import date
from sqlalchemy import (
    Column, String, Numeric, Date, Boolean, Text, Enum as SQLEnum, ForeignKey, Integer
)
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class ExpenseCategory(str, enum.Enum):
    ACCOMMODATION = "ACCOMMODATION"
    TRANSPORTATION = "TRANSPORTATION"
    FOOD = "FOOD"
    ACTIVITIES = "ACTIVITIES"
    SHOPPING = "SHOPPING"
    OTHER = "OTHER"


class Expense(BaseModel):
    """Expense model representing a single spending event."""
    __tablename__ = "expenses"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(15, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    category = Column(SQLEnum(ExpenseCategory), default=ExpenseCategory.OTHER, nullable=False)
    date = Column(Date, nullable=False, default=date.today, index=True)
    receipt = Column(String(500), nullable=True)
    paid_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    paid_by = relationship("User", foreign_keys=[paid_by_id])
    participants = relationship(
        "ExpenseParticipant", back_populates="expense", cascade="all, delete-orphan",
        order_by="ExpenseParticipant.id"
    )


class ExpenseParticipant(BaseModel):
    """A user's share of one expense."""
    __tablename__ = "expense_participants"

    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    share = Column(Numeric(15, 2), nullable=False)
    is_paid = Column(Boolean, default=False, nullable=False)

    # Relationships
    expense = relationship("Expense", back_populates="participants")
    user = relationship("User")
