"""
분개 생성기

호출자가 전달한 분개 항목을 검증하여 복식부기 분개로 변환
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from core.ledger.errors import (
    EmptyPostingsError,
    InvalidDescriptionError,
    InvalidPostingFormatError,
    InvalidSideError,
    NonPositiveAmountError,
    UnbalancedTransactionError,
    UnknownAccountError,
)
from core.ledger.types import JournalSide
from core.utils.dates import to_date
from core.utils.money import ZERO, sum_decimal, to_decimal

if TYPE_CHECKING:
    from adapters.interfaces import IPostingStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JournalLine:
    """분개 항목

    하나의 계정에 대한 차변 또는 대변 금액.
    금액은 항상 양수, 부호는 잔액 계산 시 side로 결정됨.
    """

    account_id: str
    side: JournalSide
    amount: Decimal

    # 메타
    memo: str | None = None


@dataclass(frozen=True)
class JournalEntry:
    """분개

    하나의 거래에 대한 복식부기 기록.
    차변 합계 = 대변 합계 (균형). 저장 후 변경 불가 (정정은 역분개로).
    """

    entry_id: str
    entry_date: date
    description: str
    lines: tuple[JournalLine, ...]

    memo: str | None = None
    created_at: datetime | None = field(default=None, compare=False)

    @property
    def debit_total(self) -> Decimal:
        """차변 합계"""
        return sum_decimal(line.amount for line in self.lines if line.side == JournalSide.DEBIT)

    @property
    def credit_total(self) -> Decimal:
        """대변 합계"""
        return sum_decimal(line.amount for line in self.lines if line.side == JournalSide.CREDIT)

    def is_balanced(self) -> bool:
        """균형 검증

        단일 통화이므로 허용 오차 없이 정확히 일치해야 함.

        Returns:
            True if sum(debit) == sum(credit) 이고 양쪽 모두 항목이 있음
        """
        debit_total = self.debit_total
        return debit_total > ZERO and debit_total == self.credit_total


PostingInput = JournalLine | Mapping[str, Any] | tuple


def coerce_side(value: Any) -> JournalSide:
    """DEBIT/CREDIT 문자열 또는 Enum을 JournalSide로 변환"""
    if isinstance(value, JournalSide):
        return value
    if isinstance(value, str):
        try:
            return JournalSide(value.strip().upper())
        except ValueError:
            pass
    raise InvalidSideError(value)


def _coerce_amount(value: Any, account_id: str) -> Decimal:
    try:
        amount = to_decimal(value)
    except (TypeError, ValueError) as e:
        raise NonPositiveAmountError(value, account_id) from e

    if amount <= ZERO:
        raise NonPositiveAmountError(value, account_id)
    return amount


def _coerce_line(posting: PostingInput) -> JournalLine:
    """입력 형식 정규화

    지원 형식:
    - JournalLine
    - {"account_id": ..., "side": ..., "amount": ..., "memo": ...}
    - (account_id, side, amount) 또는 (account_id, side, amount, memo)
    """
    if isinstance(posting, JournalLine):
        account_id, side, amount, memo = posting.account_id, posting.side, posting.amount, posting.memo
    elif isinstance(posting, Mapping):
        account_id = posting.get("account_id")
        side = posting.get("side")
        amount = posting.get("amount")
        memo = posting.get("memo")
    elif isinstance(posting, tuple) and len(posting) in (3, 4):
        account_id, side, amount = posting[:3]
        memo = posting[3] if len(posting) == 4 else None
    else:
        raise InvalidPostingFormatError(posting)

    account_id = str(account_id) if account_id is not None else ""
    return JournalLine(
        account_id=account_id,
        side=coerce_side(side),
        amount=_coerce_amount(amount, account_id),
        memo=memo,
    )


class JournalEntryBuilder:
    """분개 항목을 검증하여 JournalEntry 생성

    모든 검증은 저장 전에 동기적으로 수행됨.
    실패 시 어떤 항목도 저장소에 기록되지 않음.
    """

    def __init__(self, store: IPostingStore):
        """
        Args:
            store: 계정 존재 여부 확인용 저장소
        """
        self.store = store

    async def build(
        self,
        entry_date: date | datetime | str,
        description: str,
        postings: Iterable[PostingInput],
        memo: str | None = None,
    ) -> JournalEntry:
        """분개 생성

        검증 순서:
        1. 적요 (InvalidDescriptionError)
        2. 항목 형식/존재 (InvalidPostingFormatError, EmptyPostingsError)
        3. 방향/금액 (InvalidSideError, NonPositiveAmountError)
        4. 차대 균형 (UnbalancedTransactionError)
        5. 계정 존재 (UnknownAccountError)

        Args:
            entry_date: 거래일
            description: 적요
            postings: 분개 항목 목록
            memo: 메모

        Returns:
            검증된 JournalEntry (아직 저장되지 않음)
        """
        if not isinstance(description, str):
            raise InvalidDescriptionError(description)

        lines = tuple(_coerce_line(posting) for posting in postings)
        if not lines:
            raise EmptyPostingsError()

        entry = JournalEntry(
            entry_id=str(uuid4()),
            entry_date=to_date(entry_date),
            description=description,
            lines=lines,
            memo=memo,
        )

        if not entry.is_balanced():
            raise UnbalancedTransactionError(entry.debit_total, entry.credit_total)

        for account_id in dict.fromkeys(line.account_id for line in lines):
            if await self.store.get_account(account_id) is None:
                raise UnknownAccountError(account_id)

        logger.debug(f"Built journal entry: {entry.entry_id} ({len(lines)} lines)")
        return entry
