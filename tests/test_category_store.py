"""Tests for the category store."""
import pytest
from datetime import date
from decimal import Decimal

from fintrack.errors import ValidationError, ConflictError, NotFoundError
from fintrack.models import Kind
from fintrack.services.category_store import CategoryStore


class FakeExistenceCheck:
    """Stands in for the ledger in the delete guard."""

    def __init__(self, in_use=()):
        self.in_use = set(in_use)
        self.calls = []

    def has_transactions_for_category(self, category_id):
        self.calls.append(category_id)
        return category_id in self.in_use


def test_list_categories_empty(store, owner):
    assert store.list_categories(owner) == []


def test_create_and_list_round_trip(store, owner):
    food = store.create_category(owner, "Food", "expense")

    categories = store.list_categories(owner)
    assert [(c.id, c.name, c.type) for c in categories] == [(food.id, "Food", Kind.EXPENSE)]
    assert food.id is not None


def test_list_is_ordered_by_name_and_repeatable(store, owner):
    store.create_category(owner, "Salary", "income")
    store.create_category(owner, "Food", "expense")
    store.create_category(owner, "Rent", "expense")

    first = [c.name for c in store.list_categories(owner)]
    second = [c.name for c in store.list_categories(owner)]
    assert first == ["Food", "Rent", "Salary"]
    assert first == second


def test_name_is_trimmed(store, owner):
    category = store.create_category(owner, "  Travel  ", Kind.EXPENSE)
    assert category.name == "Travel"
    with pytest.raises(ConflictError):
        store.create_category(owner, "Travel", "expense")


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_name_rejected(store, owner, name):
    with pytest.raises(ValidationError):
        store.create_category(owner, name, "expense")


def test_long_name_rejected(store, owner):
    with pytest.raises(ValidationError):
        store.create_category(owner, "x" * 256, "expense")


@pytest.mark.parametrize("kind", ["savings", "", None, 1])
def test_invalid_kind_rejected(store, owner, kind):
    with pytest.raises(ValidationError):
        store.create_category(owner, "Food", kind)


def test_kind_token_is_case_insensitive(store, owner):
    assert store.create_category(owner, "Bonus", "INCOME").type == Kind.INCOME


def test_duplicate_name_conflicts_regardless_of_kind(store, owner):
    store.create_category(owner, "Food", "expense")
    with pytest.raises(ConflictError):
        store.create_category(owner, "Food", "income")
    assert len(store.list_categories(owner)) == 1


def test_names_are_case_sensitive(store, owner):
    store.create_category(owner, "Food", "expense")
    store.create_category(owner, "food", "expense")
    assert [c.name for c in store.list_categories(owner)] == ["Food", "food"]


def test_same_name_for_different_owners(store, owner, other_owner):
    store.create_category(owner, "Food", "expense")
    store.create_category(other_owner, "Food", "expense")
    assert len(store.list_categories(owner)) == 1
    assert len(store.list_categories(other_owner)) == 1


def test_create_for_unknown_user_is_not_found(store):
    with pytest.raises(NotFoundError):
        store.create_category(999, "Food", "expense")


def test_delete_unused_category(store, owner):
    food = store.create_category(owner, "Food", "expense")
    store.delete_category(food.id, owner)
    assert store.list_categories(owner) == []


def test_delete_missing_or_foreign_category_is_not_found(store, owner, other_owner):
    theirs = store.create_category(other_owner, "Food", "expense")

    with pytest.raises(NotFoundError) as missing:
        store.delete_category(12345, owner)
    with pytest.raises(NotFoundError) as foreign:
        store.delete_category(theirs.id, owner)

    assert missing.value.message == foreign.value.message
    assert len(store.list_categories(other_owner)) == 1


def test_delete_guard_uses_existence_check(database, owner):
    fake = FakeExistenceCheck()
    store = CategoryStore(database, fake)
    food = store.create_category(owner, "Food", "expense")
    fake.in_use.add(food.id)

    with pytest.raises(ConflictError) as exc:
        store.delete_category(food.id, owner)

    assert "associated transactions" in exc.value.message
    assert fake.calls == [food.id]
    assert len(store.list_categories(owner)) == 1


def test_delete_blocked_while_movements_exist(store, ledger, owner):
    food = store.create_category(owner, "Food", "expense")
    movement = ledger.create_transaction(owner, food.id, "Groceries", "50.00", date(2024, 1, 5))

    with pytest.raises(ConflictError):
        store.delete_category(food.id, owner)

    ledger.delete_transaction(movement.id, owner)
    store.delete_category(food.id, owner)
    assert store.list_categories(owner) == []


def test_foreign_key_blocks_delete_when_check_misses(database, ledger, owner):
    # a movement slipping in after the check must still block the delete
    store = CategoryStore(database, FakeExistenceCheck())
    food = store.create_category(owner, "Food", "expense")
    ledger.create_transaction(owner, food.id, "Groceries", "50.00", date(2024, 1, 5))

    with pytest.raises(ConflictError):
        store.delete_category(food.id, owner)

    assert len(store.list_categories(owner)) == 1
    assert len(ledger.list_transactions(owner)) == 1


def test_categories_with_totals(store, ledger, owner, other_owner):
    food = store.create_category(owner, "Food", "expense")
    salary = store.create_category(owner, "Salary", "income")
    store.create_category(owner, "Gifts", "expense")
    theirs = store.create_category(other_owner, "Food", "expense")

    ledger.create_transaction(owner, food.id, "Groceries", "50.10", date(2024, 1, 5))
    ledger.create_transaction(owner, food.id, "Bakery", "0.20", date(2024, 1, 6))
    ledger.create_transaction(owner, salary.id, "January", "2000", date(2024, 1, 31))
    ledger.create_transaction(other_owner, theirs.id, "Lunch", "99.99", date(2024, 1, 5))

    totals = {row["name"]: row for row in store.get_categories_with_totals(owner)}

    assert totals["Food"]["amount"] == Decimal("50.30")
    assert totals["Salary"]["amount"] == Decimal("2000.00")
    assert totals["Gifts"]["amount"] == Decimal("0.00")
    assert totals["Salary"]["type"] == Kind.INCOME
    assert list(totals) == ["Food", "Gifts", "Salary"]


def test_get_category_is_owner_scoped(store, owner, other_owner):
    food = store.create_category(owner, "Food", "expense")
    assert store.get_category(food.id, owner).name == "Food"
    with pytest.raises(NotFoundError):
        store.get_category(food.id, other_owner)


def test_seed_categories_is_repeatable(database, owner):
    from fintrack.scripts.seed_categories import seed, categories

    assert seed(database, owner) == len(categories)
    assert seed(database, owner) == 0
