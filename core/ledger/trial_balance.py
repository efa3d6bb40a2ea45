"""
시산표 검증

다섯 유형 합계를 결합하여 회계 등식을 확인.

    Asset − (Liability + Equity + Revenue − Expense) = 0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from core.ledger.aggregator import TypeAggregator
from core.ledger.types import TRIAL_BALANCE_ORDER, AccountType
from core.utils.dates import UNBOUNDED, DateRange
from core.utils.money import ZERO, exact_arithmetic

if TYPE_CHECKING:
    from adapters.interfaces import IPostingStore

logger = logging.getLogger(__name__)


def combine(totals: dict[AccountType, Decimal]) -> Decimal:
    """유형 합계로 시산표 값 계산"""
    with exact_arithmetic():
        return totals[AccountType.ASSET] - (
            totals[AccountType.LIABILITY]
            + totals[AccountType.EQUITY]
            + totals[AccountType.REVENUE]
            - totals[AccountType.EXPENSE]
        )


@dataclass(frozen=True)
class TrialBalanceReport:
    """시산표 결과

    difference가 0이 아니면 데이터 품질 문제 (예외 아님).
    호출자가 대사(reconciliation) 경고로 처리.
    """

    date_range: DateRange
    totals: dict[AccountType, Decimal]
    difference: Decimal

    @property
    def is_balanced(self) -> bool:
        """회계 등식 충족 여부"""
        return self.difference == ZERO


class TrialBalanceValidator:
    """시산표 검증기

    전체 원장 단위에서만 정의됨.

    Args:
        store: Posting 저장소
        aggregator: 유형 집계기 (None이면 store로 생성)
    """

    def __init__(self, store: IPostingStore, aggregator: TypeAggregator | None = None):
        self.store = store
        self.aggregator = aggregator or TypeAggregator(store)

    async def totals(self, date_range: DateRange = UNBOUNDED) -> dict[AccountType, Decimal]:
        """다섯 유형 합계 (하나의 스냅샷에서 조회)"""
        async with self.store.snapshot():
            return {
                account_type: await self.aggregator.type_balance(account_type, date_range)
                for account_type in TRIAL_BALANCE_ORDER
            }

    async def trial_balance(self, date_range: DateRange = UNBOUNDED) -> Decimal:
        """시산표 값 (정상이면 0)"""
        return combine(await self.totals(date_range))

    async def check(self, date_range: DateRange = UNBOUNDED) -> TrialBalanceReport:
        """시산표 검증 결과

        불일치 시 경고 로그만 남기고 결과를 반환.
        """
        totals = await self.totals(date_range)
        report = TrialBalanceReport(
            date_range=date_range,
            totals=totals,
            difference=combine(totals),
        )

        if not report.is_balanced:
            logger.warning(
                f"Trial balance does not net to zero: {report.difference}",
                extra={
                    "difference": str(report.difference),
                    "start_date": str(date_range.start),
                    "end_date": str(date_range.end),
                },
            )

        return report
