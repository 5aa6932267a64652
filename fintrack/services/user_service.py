import logging
from sqlalchemy.exc import IntegrityError

from fintrack.db import Database
from fintrack.errors import ValidationError, ConflictError, NotFoundError
from fintrack.models import User
from fintrack.services.base import unit_of_work

logger = logging.getLogger("fintrack.users")

# Registration and credentials belong to the identity service; this only
# creates the user rows that categories and movements hang off.

def save_user(db: Database, name: str, email: str, password_hash: str = None) -> User:
    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name or not email:
        raise ValidationError("Name and email are required")

    with unit_of_work(db, logger, "save_user", email=email) as session:
        if session.query(User).filter_by(email=email).first():
            raise ConflictError("A user with this email already exists", email=email)

        new_user = User(name=name, email=email, password_hash=password_hash)
        session.add(new_user)
        try:
            session.flush()
        except IntegrityError:
            raise ConflictError("A user with this email already exists", email=email)

        logger.info(f"save_user | user_id={new_user.id}")
        return new_user


def get_user(db: Database, user_id: int) -> User:
    with unit_of_work(db, logger, "get_user", user_id=user_id) as session:
        user = session.query(User).filter_by(id=user_id).first()
        if not user:
            raise NotFoundError("User not found", user_id=user_id)
        return user
