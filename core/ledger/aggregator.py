"""
계정 유형별 잔액 집계
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from core.ledger.balance import BalanceCalculator
from core.ledger.types import AccountType
from core.utils.dates import UNBOUNDED, DateRange
from core.utils.money import ZERO, exact_arithmetic

if TYPE_CHECKING:
    from adapters.interfaces import IPostingStore


class TypeAggregator:
    """유형별 잔액 집계기

    해당 유형의 모든 계정 잔액을 합산.
    일반 계정은 더하고 contra 계정은 뺌.

    Contra 계정은 balance() 안에서 한 번(방향 반전), 집계에서 다시 한 번
    (부호 반전) 보정됨. 두 보정이 합쳐져 contra 계정이 유형 합계를
    줄이는 효과가 되며, 이 상태에서 시산표가 0이 됨.

    모든 계정 조회는 하나의 store.snapshot() 안에서 수행됨.

    Args:
        store: Posting 저장소
        calculator: 계정 잔액 계산기 (None이면 store로 생성)
    """

    def __init__(self, store: IPostingStore, calculator: BalanceCalculator | None = None):
        self.store = store
        self.calculator = calculator or BalanceCalculator(store)

    async def type_balance(
        self,
        account_type: AccountType,
        date_range: DateRange = UNBOUNDED,
    ) -> Decimal:
        """유형 합계

        Args:
            account_type: 계정 유형
            date_range: 거래일 포함 구간 (기본: 전체 기간)

        Returns:
            contra 보정된 유형 합계
        """
        total = ZERO
        seen: set[str] = set()

        async with self.store.snapshot():
            async for account in self.store.find_accounts_by_type(account_type):
                if account.account_id in seen:
                    continue
                seen.add(account.account_id)

                balance = await self.calculator.balance(account, date_range)
                with exact_arithmetic():
                    if account.contra:
                        total -= balance
                    else:
                        total += balance

        return total
