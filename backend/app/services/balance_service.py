"""
Balance service: per-user net balances and settle-up suggestions.

Balances are recomputed from the current expense set on every read and are
never persisted.
"""
from typing import Dict, Iterable, List, Tuple
from decimal import Decimal
from sqlalchemy.orm import Session
from app.models.expense import Expense
from app.models.trip import Trip
from app.models.user import User


def compute_balances(expenses: Iterable[Expense], member_ids: Iterable[int] = ()) -> Dict[int, Decimal]:
    """
    Net balance per user (positive = owed to the user, negative = the user owes).

    The payer of each expense is credited with its amount and every participant
    is debited with their share. Every id in member_ids starts at zero.
    """
    net_balances: Dict[int, Decimal] = {user_id: Decimal(0) for user_id in member_ids}

    for expense in expenses:
        payer_id = expense.paid_by_id
        net_balances[payer_id] = net_balances.get(payer_id, Decimal(0)) + Decimal(expense.amount)

        for participant in expense.participants:
            user_id = participant.user_id
            net_balances[user_id] = net_balances.get(user_id, Decimal(0)) - Decimal(participant.share)

    return net_balances


def minimize_transfers(balances: Iterable[Tuple[int, Decimal]]) -> List[Tuple[int, int, Decimal]]:
    """
    Suggest (debtor_id, creditor_id, amount) payments that settle the balances.

    Each round pairs whoever owes the most with whoever is owed the most and
    settles the smaller of the two amounts, so every round clears at least one
    user. Ties go to the lower user id.
    """
    balances = list(balances)
    owed = {uid: amount for uid, amount in balances if amount > 0}
    owing = {uid: -amount for uid, amount in balances if amount < 0}

    def largest(side: Dict[int, Decimal]) -> int:
        return max(side, key=lambda uid: (side[uid], -uid))

    suggestions = []
    while owed and owing:
        creditor_id, debtor_id = largest(owed), largest(owing)
        amount = min(owed[creditor_id], owing[debtor_id])
        suggestions.append((debtor_id, creditor_id, amount))

        for side, uid in ((owed, creditor_id), (owing, debtor_id)):
            side[uid] -= amount
            if side[uid] == 0:
                del side[uid]

    return suggestions


def summarize_trip_balances(trip: Trip, db: Session) -> dict:
    """Balances for every member of the trip plus suggested transfers."""
    expenses = db.query(Expense).filter(Expense.trip_id == trip.id).all()
    member_ids = [trip.owner_id] + [m.user_id for m in trip.members]

    net_balances = compute_balances(expenses, member_ids)
    suggestions = minimize_transfers(net_balances.items())

    users = db.query(User).filter(User.id.in_(list(net_balances.keys()))).all()
    user_map = {user.id: user for user in users}

    return {
        "balances": [
            {"user": user_map[uid], "balance": balance}
            for uid, balance in net_balances.items()
            if uid in user_map
        ],
        "transfers": [
            {"from_user": user_map[debtor_id], "to_user": user_map[creditor_id], "amount": amount}
            for debtor_id, creditor_id, amount in suggestions
            if debtor_id in user_map and creditor_id in user_map
        ],
    }
