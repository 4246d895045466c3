"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload
from app.db.session import get_db
from app.models.user import User
from app.models.expense import Expense, ExpenseParticipant
from app.schemas.common import ApiResponse
from app.schemas.expense import (
    ExpenseCreate, ExpenseUpdate, ExpenseResponse, ExpenseData, ExpenseListData
)
from app.services import expense_service
from app.services.access_service import check_trip_access
from app.api.dependencies import get_current_user

router = APIRouter(tags=["expenses"])


@router.post("/trips/{trip_id}/expenses", response_model=ApiResponse[ExpenseData],
             status_code=status.HTTP_201_CREATED)
async def create_expense(
    trip_id: int,
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record a shared expense paid by the current user (or a named member)."""
    trip = check_trip_access(trip_id, current_user.id, db)
    expense = expense_service.create_expense(trip, current_user.id, expense_data, db)
    return ApiResponse(
        message="Expense created successfully",
        data=ExpenseData(expense=ExpenseResponse.model_validate(expense))
    )


@router.get("/trips/{trip_id}/expenses", response_model=ApiResponse[ExpenseListData])
async def list_expenses(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List a trip's expenses, newest date first, with their total."""
    check_trip_access(trip_id, current_user.id, db)

    expenses = db.query(Expense).options(
        joinedload(Expense.paid_by),
        joinedload(Expense.participants).joinedload(ExpenseParticipant.user)
    ).filter(
        Expense.trip_id == trip_id
    ).order_by(Expense.date.desc(), Expense.id.desc()).all()

    return ApiResponse(data=ExpenseListData(
        expenses=[ExpenseResponse.model_validate(e) for e in expenses],
        count=len(expenses),
        total=expense_service.total_amount(expenses)
    ))


@router.put("/expenses/{expense_id}", response_model=ApiResponse[ExpenseData])
async def update_expense(
    expense_id: int,
    expense_data: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an expense."""
    expense = expense_service.get_expense_or_404(expense_id, db)
    check_trip_access(expense.trip_id, current_user.id, db)

    expense = expense_service.update_expense(expense, expense_data, db)
    return ApiResponse(
        message="Expense updated successfully",
        data=ExpenseData(expense=ExpenseResponse.model_validate(expense))
    )


@router.delete("/expenses/{expense_id}", response_model=ApiResponse[None])
async def delete_expense(
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    expense = expense_service.get_expense_or_404(expense_id, db)
    check_trip_access(expense.trip_id, current_user.id, db)

    db.delete(expense)
    db.commit()
    return ApiResponse(message="Expense deleted successfully")
