from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def parse_amount(value) -> Decimal:
    """Parse an int, float, str or Decimal amount into a Decimal.

    Floats go through ``str`` so 0.1 becomes Decimal("0.1") and not its
    binary expansion. Raises ``ValueError`` for anything that is not a finite
    number.
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def to_money(value) -> Decimal:
    return parse_amount(value).quantize(CENT, rounding=ROUND_HALF_UP)


def has_sub_cent_digits(amount: Decimal) -> bool:
    return amount != amount.quantize(CENT, rounding=ROUND_HALF_UP)


def money_sum(amounts) -> Decimal:
    total = ZERO
    for amount in amounts:
        total += amount
    return total.quantize(CENT)
