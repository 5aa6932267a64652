from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, Enum
from fintrack.db import Base
from fintrack.models.kind import Kind
from sqlalchemy.orm import relationship, backref
from datetime import date
from fintrack.utils.date_helpers import utcnow


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True)

    description = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2, asdecimal=True), nullable=False) # always positive
    type = Column(
        Enum(Kind, name="kind", native_enum=False, values_callable=lambda kinds: [k.value for k in kinds]),
        nullable=False,
    ) # copied from the category when created
    date = Column(Date, nullable=False, default=date.today)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # passive: deleting a referenced category must hit the RESTRICT foreign key
    category = relationship("Category", backref=backref("transactions", passive_deletes="all"), lazy="joined")

    @property
    def category_name(self):
        return self.category.name if self.category is not None else None

    def __repr__(self):
        return f"<Transaction id={self.id} amount={self.amount} date={self.date} type={self.type.value}>"
