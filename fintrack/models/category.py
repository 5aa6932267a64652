from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, UniqueConstraint
from fintrack.db import Base
from fintrack.models.kind import Kind
from fintrack.utils.date_helpers import utcnow


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_id_name"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(
        Enum(Kind, name="kind", native_enum=False, values_callable=lambda kinds: [k.value for k in kinds]),
        nullable=False,
    ) # fixed at creation

    created_at = Column(DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<Category id={self.id} name={self.name!r} type={self.type.value}>"
