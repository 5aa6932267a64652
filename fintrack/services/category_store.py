import logging
from collections import defaultdict
from typing import Protocol

from sqlalchemy import asc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fintrack.db import Database
from fintrack.errors import ValidationError, ConflictError, NotFoundError
from fintrack.models import Category, Kind, Transaction
from fintrack.services.base import unit_of_work, is_foreign_key_violation
from fintrack.utils.logging_utils import log_store_call
from fintrack.utils.money import money_sum

logger = logging.getLogger("fintrack.categories")

NAME_MAX_LENGTH = 255


class TransactionExistenceCheck(Protocol):
    """The only thing the category store needs to know about transactions."""

    def has_transactions_for_category(self, category_id: int) -> bool:
        ...


def parse_kind(kind) -> Kind:
    if isinstance(kind, Kind):
        return kind
    if isinstance(kind, str):
        try:
            return Kind(kind.strip().lower())
        except ValueError:
            pass
    raise ValidationError('Invalid category type. Must be "income" or "expense".', kind=kind)


def find_owned_category(session: Session, category_id: int, owner_id: int):
    return session.query(Category).filter_by(id=category_id, user_id=owner_id).first()


class CategoryStore:
    def __init__(self, db: Database, transactions: TransactionExistenceCheck):
        self.db = db
        self.transactions = transactions

    def list_categories(self, owner_id: int) -> list[Category]:
        with unit_of_work(self.db, logger, "list_categories", owner_id=owner_id) as session:
            return (
                session.query(Category)
                .filter_by(user_id=owner_id)
                .order_by(asc(Category.name), asc(Category.id))
                .all()
            )

    def get_category(self, category_id: int, owner_id: int) -> Category:
        with unit_of_work(self.db, logger, "get_category", owner_id=owner_id, category_id=category_id) as session:
            category = find_owned_category(session, category_id, owner_id)
            if not category:
                raise NotFoundError("Category not found", owner_id=owner_id, category_id=category_id)
            return category

    def create_category(self, owner_id: int, name: str, kind) -> Category:
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise ValidationError("Category name is required", owner_id=owner_id)
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Category name must be at most {NAME_MAX_LENGTH} characters", owner_id=owner_id)
        kind = parse_kind(kind)

        with unit_of_work(self.db, logger, "create_category", owner_id=owner_id, name=name) as session:
            exists = session.query(Category).filter_by(user_id=owner_id, name=name).first()
            if exists:
                logger.warning(f"Duplicate category rejected | owner_id={owner_id} name={name!r}")
                raise ConflictError("A category with that name already exists for this user", owner_id=owner_id, name=name)

            new_category = Category(user_id=owner_id, name=name, type=kind)
            session.add(new_category)
            try:
                session.flush()
            except IntegrityError as e:
                if is_foreign_key_violation(e):
                    raise NotFoundError("User not found", owner_id=owner_id)
                # lost a race against a concurrent insert of the same name
                raise ConflictError("A category with that name already exists for this user", owner_id=owner_id, name=name)

            log_store_call(logger, "create_category", f"owner_id={owner_id} category_id={new_category.id} type={kind.value}")
            return new_category

    def delete_category(self, category_id: int, owner_id: int) -> None:
        with unit_of_work(self.db, logger, "delete_category", owner_id=owner_id, category_id=category_id) as session:
            category = find_owned_category(session, category_id, owner_id)
            if not category:
                raise NotFoundError("Category not found", owner_id=owner_id, category_id=category_id)

            if self.transactions.has_transactions_for_category(category_id):
                logger.warning(f"Delete blocked, category in use | owner_id={owner_id} category_id={category_id}")
                raise ConflictError("category has associated transactions", owner_id=owner_id, category_id=category_id)

            session.delete(category)
            try:
                session.flush()
            except IntegrityError:
                # a movement referencing it was inserted after the check
                logger.warning(f"Delete blocked by foreign key | owner_id={owner_id} category_id={category_id}")
                raise ConflictError("category has associated transactions", owner_id=owner_id, category_id=category_id)

            log_store_call(logger, "delete_category", f"owner_id={owner_id} category_id={category_id}")

    def get_categories_with_totals(self, owner_id: int) -> list[dict]:
        with unit_of_work(self.db, logger, "get_categories_with_totals", owner_id=owner_id) as session:
            categories = (
                session.query(Category)
                .filter_by(user_id=owner_id)
                .order_by(asc(Category.name), asc(Category.id))
                .all()
            )
            rows = (
                session.query(Transaction.category_id, Transaction.amount)
                .filter(Transaction.user_id == owner_id)
                .all()
            )

        amounts_by_category = defaultdict(list)
        for category_id, amount in rows:
            amounts_by_category[category_id].append(amount)

        return [
            {
                "id": c.id,
                "name": c.name,
                "type": c.type,
                "amount": money_sum(amounts_by_category.get(c.id, [])),
            }
            for c in categories
        ]
