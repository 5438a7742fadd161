from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel


CREDIT_DECIMAL_PLACES = 2
_CREDIT_QUANTUM = Decimal("0.01")


class CreditPackage(BaseModel):
    credits: int
    amount_mmk: int
    popular: bool = False


class PaymentMethodInfo(BaseModel):
    id: str
    name: str
    description: str
    instructions: str


class CreditQuote(BaseModel):
    """화면의 금액 입력란 텍스트와 MMK 합계.

    500 크레딧이면 credits="500", amount_mmk=50000 이 된다.
    """

    credits: str
    amount_mmk: int


def parse_credits(value: str | float | int) -> Decimal:
    """크레딧 수량을 Decimal 로 파싱한다.

    양수이고 소수점 2자리 이내여야 한다. 조건을 어기면 ValueError.
    """

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"invalid credit amount: {value!r}") from exc

    if not amount.is_finite() or amount <= 0:
        raise ValueError("credit amount must be a positive number")
    if amount != amount.quantize(_CREDIT_QUANTUM):
        raise ValueError(
            f"credit amount allows at most {CREDIT_DECIMAL_PLACES} decimal places"
        )
    return amount


def format_credits(amount: Decimal | float | int) -> str:
    """입력란에 보여줄 문자열. 불필요한 0 과 소수점은 뗀다 (500.00 -> "500")."""

    text = format(Decimal(str(amount)).quantize(_CREDIT_QUANTUM), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def credits_to_mmk(amount: Decimal | float | int, rate_mmk: int) -> int:
    total = Decimal(str(amount)) * rate_mmk
    return int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def quote(amount: Decimal | float | int, rate_mmk: int) -> CreditQuote:
    return CreditQuote(
        credits=format_credits(amount),
        amount_mmk=credits_to_mmk(amount, rate_mmk),
    )
