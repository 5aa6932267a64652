from sqlalchemy import Column, Integer, String, DateTime
from fintrack.utils.date_helpers import utcnow
from fintrack.db import Base
from sqlalchemy.orm import relationship

# Owned by the identity collaborator; the core only references users.id

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=utcnow)

    categories = relationship("Category", backref="user", passive_deletes=True)
    transactions = relationship("Transaction", backref="user", passive_deletes=True)
