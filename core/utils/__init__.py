"""
유틸리티 패키지

기간(날짜 범위) 처리, Decimal 금액 처리 등 공통 유틸리티
"""

from core.utils.dates import UNBOUNDED, DateRange, to_date, today
from core.utils.money import ZERO, exact_arithmetic, sum_decimal, to_decimal
from core.utils.snapshot import SnapshotGuard

__all__ = [
    "UNBOUNDED",
    "DateRange",
    "to_date",
    "today",
    "ZERO",
    "exact_arithmetic",
    "sum_decimal",
    "to_decimal",
    "SnapshotGuard",
]
