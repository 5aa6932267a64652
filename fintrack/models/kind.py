import enum


class Kind(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"
