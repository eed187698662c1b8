from decimal import Decimal

from sqlalchemy import update

from millionaire import db
from millionaire.models import User


def credit_balance(user_id: int, amount) -> None:
    """Add ``amount`` to the user's balance inside the caller's transaction.

    The increment happens in SQL, so two games of the same user finishing
    at once cannot overwrite each other's credit.
    """
    amount = Decimal(amount)
    if amount <= 0:
        return
    db.session.execute(
        update(User)
        .where(User.id == user_id)
        .values(balance=User.balance + amount)
    )
