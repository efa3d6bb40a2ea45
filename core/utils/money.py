"""
금액(Decimal) 유틸리티

모든 금액은 Decimal로 처리. float는 받지 않음 (이진 부동소수점 오차 방지).
합산은 exact_arithmetic() 안에서 수행되어 반올림이 일어나지 않음.
"""

from contextlib import AbstractContextManager
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Iterable

ZERO = Decimal("0")

# 금액 하나가 가질 수 있는 최대 유효 자릿수 (NUMERIC(38) 기준)
MAX_AMOUNT_DIGITS = 38

# 반올림이 발생하면 예외 (Inexact)
EXACT_CONTEXT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)


def exact_arithmetic() -> AbstractContextManager[Context]:
    """반올림 없는 Decimal 연산 컨텍스트

    사용 예시:
    ```python
    with exact_arithmetic():
        total = debit_total - credit_total
    ```
    """
    return localcontext(EXACT_CONTEXT)


def to_decimal(value: Decimal | int | str) -> Decimal:
    """금액 값을 Decimal로 변환

    Args:
        value: Decimal, int 또는 숫자 문자열

    Returns:
        유한한 Decimal 값

    Raises:
        TypeError: float 등 허용하지 않는 타입
        ValueError: 숫자가 아니거나 NaN/Infinity이거나 유효 자릿수 초과
    """
    # bool은 int의 하위 클래스
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, str)):
        raise TypeError(f"Amount must be Decimal, int or str, got {type(value).__name__}")

    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    if len(result.as_tuple().digits) > MAX_AMOUNT_DIGITS:
        raise ValueError(f"Amount exceeds {MAX_AMOUNT_DIGITS} significant digits: {value!r}")
    return result


def sum_decimal(values: Iterable[Decimal]) -> Decimal:
    """Decimal 합계 (빈 시퀀스는 0, 반올림 없음)"""
    total = ZERO
    with exact_arithmetic():
        for value in values:
            total += value
    return total
