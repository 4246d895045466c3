"""
Expense service for expense-related business logic.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.models.expense import Expense, ExpenseParticipant
from app.models.trip import Trip
from app.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseParticipantIn
from app.services.access_service import has_access

logger = logging.getLogger(__name__)

REQUIRED_EXPENSE_FIELDS = ("title", "amount", "currency", "category", "date")


def _ensure_trip_member(trip: Trip, user_id: int) -> None:
    if not has_access(trip, user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"User {user_id} is not a member of this trip"
        )


def _build_participants(trip: Trip, participants: List[ExpenseParticipantIn]) -> List[ExpenseParticipant]:
    """Participant rows for an expense; every user must be on the trip roster."""
    for p in participants:
        _ensure_trip_member(trip, p.user_id)
    return [
        ExpenseParticipant(user_id=p.user_id, share=p.share, is_paid=p.is_paid)
        for p in participants
    ]


def _warn_on_share_mismatch(expense: Expense) -> None:
    # Shares are expected to add up to the amount but this is not enforced
    total_shares = sum((Decimal(p.share) for p in expense.participants), Decimal(0))
    if expense.participants and total_shares != Decimal(expense.amount):
        logger.warning(
            f"Expense {expense.id} shares total {total_shares} but amount is {expense.amount}"
        )


def create_expense(trip: Trip, caller_id: int, expense_data: ExpenseCreate, db: Session) -> Expense:
    """Create an expense; without explicit participants the payer carries the full amount."""
    payer_id = expense_data.paid_by_id if expense_data.paid_by_id is not None else caller_id
    _ensure_trip_member(trip, payer_id)

    if expense_data.participants is not None:
        participants = _build_participants(trip, expense_data.participants)
    else:
        participants = [ExpenseParticipant(user_id=payer_id, share=expense_data.amount)]

    expense = Expense(
        trip_id=trip.id,
        title=expense_data.title,
        description=expense_data.description,
        amount=expense_data.amount,
        currency=expense_data.currency,
        category=expense_data.category,
        date=expense_data.date or date.today(),
        receipt=expense_data.receipt,
        paid_by_id=payer_id
    )
    expense.participants = participants

    db.add(expense)
    db.commit()
    db.refresh(expense)

    _warn_on_share_mismatch(expense)
    return expense


def update_expense(expense: Expense, expense_data: ExpenseUpdate, db: Session) -> Expense:
    """
    Apply a partial update; a participants list replaces the existing one.
    Explicit nulls clear optional fields and are ignored for required ones.
    """
    participants = None
    if expense_data.participants is not None:
        participants = _build_participants(expense.trip, expense_data.participants)

    updates = expense_data.model_dump(exclude_unset=True, exclude={"participants"})
    for field, value in updates.items():
        if value is None and field in REQUIRED_EXPENSE_FIELDS:
            continue
        setattr(expense, field, value)

    if participants is not None:
        expense.participants = participants

    db.commit()
    db.refresh(expense)

    _warn_on_share_mismatch(expense)
    return expense


def total_amount(expenses: List[Expense]) -> Decimal:
    return sum((Decimal(e.amount) for e in expenses), Decimal(0))


def get_expense_or_404(expense_id: int, db: Session) -> Expense:
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return expense
