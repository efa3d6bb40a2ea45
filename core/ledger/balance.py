"""
계정 잔액 계산

단일 계정의 차변 합계, 대변 합계, 순잔액 계산.
모든 합계는 호출 내 지역 변수로만 계산 (공유 상태 없음).
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from core.ledger.models import Account
from core.ledger.types import JournalSide
from core.utils.dates import UNBOUNDED, DateRange
from core.utils.money import ZERO, exact_arithmetic

if TYPE_CHECKING:
    from adapters.interfaces import IPostingStore


class BalanceCalculator:
    """계정 잔액 계산기

    잔액 = 정상 잔액 방향 합계 − 반대 방향 합계.
    Contra 계정은 정상 잔액 방향이 반전되므로 뺄셈 순서가 뒤바뀜.

    Args:
        store: Posting 저장소
    """

    def __init__(self, store: IPostingStore):
        self.store = store

    async def side_total(
        self,
        account: Account,
        side: JournalSide,
        date_range: DateRange = UNBOUNDED,
    ) -> Decimal:
        """한 방향의 분개 금액 합계"""
        total = ZERO
        with exact_arithmetic():
            async for posting in self.store.find_postings(account.account_id, side, date_range):
                total += posting.amount
        return total

    async def credits_balance(
        self,
        account: Account,
        date_range: DateRange = UNBOUNDED,
    ) -> Decimal:
        """대변 합계

        Args:
            account: 계정
            date_range: 거래일 포함 구간 (기본: 전체 기간)

        Returns:
            대변 금액 합계 (항상 0 이상)
        """
        return await self.side_total(account, JournalSide.CREDIT, date_range)

    async def debits_balance(
        self,
        account: Account,
        date_range: DateRange = UNBOUNDED,
    ) -> Decimal:
        """차변 합계

        Args:
            account: 계정
            date_range: 거래일 포함 구간 (기본: 전체 기간)

        Returns:
            차변 금액 합계 (항상 0 이상)
        """
        return await self.side_total(account, JournalSide.DEBIT, date_range)

    async def balance(
        self,
        account: Account,
        date_range: DateRange = UNBOUNDED,
    ) -> Decimal:
        """순잔액

        예: 일반 ASSET → 차변 − 대변, contra ASSET → 대변 − 차변

        Args:
            account: 계정
            date_range: 거래일 포함 구간 (기본: 전체 기간)

        Returns:
            순잔액 (음수 가능)
        """
        normal = account.normal_side
        async with self.store.snapshot():
            normal_total = await self.side_total(account, normal, date_range)
            other_total = await self.side_total(account, normal.opposite, date_range)

        with exact_arithmetic():
            return normal_total - other_total
