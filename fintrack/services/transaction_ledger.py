import logging
from collections import defaultdict
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Numeric, case, desc, func, type_coerce
from sqlalchemy.exc import IntegrityError

from fintrack import config
from fintrack.db import Database
from fintrack.errors import ValidationError, NotFoundError
from fintrack.models import Kind, Transaction
from fintrack.services.base import unit_of_work
from fintrack.services.category_store import find_owned_category
from fintrack.utils.date_helpers import RANGE_TOKENS, DateRange, resolve_range, today, utcnow
from fintrack.utils.logging_utils import log_store_call
from fintrack.utils.money import parse_amount, to_money, has_sub_cent_digits, money_sum

logger = logging.getLogger("fintrack.ledger")

DESCRIPTION_MAX_LENGTH = 255
AMOUNT_MAX = Decimal("9999999999.99") # Numeric(12, 2)
MONEY_TOTAL = Numeric(14, 2, asdecimal=True)


def _parse_date(value) -> date_type:
    if value is None or value == "":
        return today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_type):
        return value
    if isinstance(value, str):
        try:
            return date_type.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Invalid date: {value!r}. Expected YYYY-MM-DD", date=value)


def _apply_range(query, date_range: Optional[DateRange]):
    if date_range is None:
        return query
    if date_range.start is not None:
        query = query.filter(Transaction.date >= date_range.start)
    if date_range.end is not None:
        query = query.filter(Transaction.date <= date_range.end)
    return query


def _kind_total(kind: Kind):
    """SUM of one kind's amounts, 0 when there are none."""
    amount = case((Transaction.type == kind, Transaction.amount), else_=0)
    return type_coerce(func.coalesce(func.sum(amount), 0), MONEY_TOTAL)


class TransactionLedger:
    """Records movements and computes the dashboard and analysis aggregates.

    Also serves as the ``TransactionExistenceCheck`` handed to the category
    store, through ``has_transactions_for_category``.
    """

    def __init__(self, db: Database, recent_limit: int = config.RECENT_TRANSACTIONS_LIMIT):
        self.db = db
        self.recent_limit = recent_limit

    def _owner_query(self, session, owner_id: int, date_range: Optional[DateRange] = None):
        query = session.query(Transaction).filter(Transaction.user_id == owner_id)
        return _apply_range(query, date_range).order_by(desc(Transaction.date), desc(Transaction.id))

    # WRITES

    def create_transaction(self, owner_id: int, category_id: int, description: str, amount,
                           date=None, kind=None) -> Transaction:
        """Record a movement under one of the owner's categories.

        ``kind`` is accepted for callers that still send it but never used:
        the movement always takes its category's type.
        """
        try:
            amount = parse_amount(amount)
        except ValueError:
            raise ValidationError("Amount must be a number", owner_id=owner_id, amount=amount)
        if amount <= 0:
            raise ValidationError("Amount must be greater than 0", owner_id=owner_id, amount=str(amount))
        if amount > AMOUNT_MAX:
            raise ValidationError(f"Amount must not exceed {AMOUNT_MAX}", owner_id=owner_id, amount=str(amount))
        if has_sub_cent_digits(amount):
            raise ValidationError("Amount can have at most two decimal places", owner_id=owner_id, amount=str(amount))
        amount = to_money(amount)

        description = description.strip() if isinstance(description, str) else ""
        if not description:
            raise ValidationError("Description is required", owner_id=owner_id)
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters", owner_id=owner_id)

        movement_date = _parse_date(date)

        with unit_of_work(self.db, logger, "create_transaction", owner_id=owner_id, category_id=category_id) as session:
            category = find_owned_category(session, category_id, owner_id)
            if not category:
                raise NotFoundError("Category not found or does not belong to the user",
                                    owner_id=owner_id, category_id=category_id)

            if kind is not None and str(getattr(kind, "value", kind)).lower() != category.type.value:
                logger.debug(f"Ignoring supplied type {kind!r}, category {category_id} is {category.type.value}")

            new_transaction = Transaction(
                user_id=owner_id,
                category_id=category.id,
                description=description,
                amount=amount,
                type=category.type,
                date=movement_date,
                created_at=utcnow(),
            )
            new_transaction.category = category
            session.add(new_transaction)
            try:
                session.flush()
            except IntegrityError:
                # category deleted between the lookup and the insert
                raise NotFoundError("Category not found or does not belong to the user",
                                    owner_id=owner_id, category_id=category_id)

            log_store_call(logger, "create_transaction",
                           f"owner_id={owner_id} transaction_id={new_transaction.id} "
                           f"category_id={category.id} type={category.type.value} amount={amount}")
            return new_transaction

    def delete_transaction(self, transaction_id: int, owner_id: int) -> None:
        with unit_of_work(self.db, logger, "delete_transaction", owner_id=owner_id, transaction_id=transaction_id) as session:
            transaction = session.query(Transaction).filter_by(id=transaction_id, user_id=owner_id).first()
            if not transaction:
                raise NotFoundError("Transaction not found or does not belong to the user",
                                    owner_id=owner_id, transaction_id=transaction_id)
            session.delete(transaction)
            session.flush()

            log_store_call(logger, "delete_transaction", f"owner_id={owner_id} transaction_id={transaction_id}")

    # READS

    def list_transactions(self, owner_id: int) -> list[Transaction]:
        with unit_of_work(self.db, logger, "list_transactions", owner_id=owner_id) as session:
            return self._owner_query(session, owner_id).all()

    def has_transactions_for_category(self, category_id: int) -> bool:
        with unit_of_work(self.db, logger, "has_transactions_for_category", category_id=category_id) as session:
            return session.query(Transaction.id).filter(Transaction.category_id == category_id).first() is not None

    def compute_financial_summary(self, owner_id: int, date_range: Optional[DateRange] = None) -> dict:
        """Income and expense totals summed in SQL, plus the newest movements."""
        with unit_of_work(self.db, logger, "compute_financial_summary", owner_id=owner_id) as session:
            income, expenses = (
                _apply_range(
                    session.query(_kind_total(Kind.INCOME), _kind_total(Kind.EXPENSE))
                    .filter(Transaction.user_id == owner_id),
                    date_range,
                )
                .one()
            )
            recent = self._owner_query(session, owner_id, date_range).limit(self.recent_limit).all()

        total_income = to_money(income)
        total_expenses = to_money(expenses)

        return {
            "total_income": total_income,
            "total_expenses": total_expenses,
            "balance": total_income - total_expenses,
            "recent_transactions": recent,
        }

    def compute_analysis(self, owner_id: int, range_token: str = "all", reference: date_type = None) -> dict:
        range_token = range_token or "all"
        try:
            date_range = resolve_range(range_token, reference)
        except ValueError:
            raise ValidationError(
                f"Invalid range {range_token!r}. Use one of: {', '.join(RANGE_TOKENS)}",
                owner_id=owner_id, range=range_token,
            )

        with unit_of_work(self.db, logger, "compute_analysis", owner_id=owner_id, range=range_token) as session:
            movements = self._owner_query(session, owner_id, date_range).all()

        categories_used = {}
        for movement in movements:
            category = movement.category
            categories_used.setdefault(category.id, {
                "id": category.id,
                "name": category.name,
                "type": category.type,
            })

        logger.info(f"Analysis for owner_id={owner_id} range={range_token}: "
                    f"{len(movements)} movements, {len(categories_used)} categories")

        return {
            "movements": movements,
            "categories_used": sorted(categories_used.values(), key=lambda c: (c["name"], c["id"])),
            "summary": {
                "total_transactions": len(movements),
                "date_range": range_token,
                "has_data": len(movements) > 0,
            },
            "period": date_range,
        }

    def compute_expenses_by_category(self, owner_id: int, date_range: Optional[DateRange] = None) -> list[dict]:
        with unit_of_work(self.db, logger, "compute_expenses_by_category", owner_id=owner_id) as session:
            expenses = (
                _apply_range(session.query(Transaction), date_range)
                .filter(Transaction.user_id == owner_id, Transaction.type == Kind.EXPENSE)
                .all()
            )

        amounts = defaultdict(list)
        names = {}
        for t in expenses:
            amounts[t.category_id].append(t.amount)
            names[t.category_id] = t.category_name

        grouped = [
            {
                "category_id": category_id,
                "category_name": names[category_id],
                "total": money_sum(category_amounts),
                "count": len(category_amounts),
            }
            for category_id, category_amounts in amounts.items()
        ]
        grouped.sort(key=lambda row: (-row["total"], row["category_id"]))
        return grouped
