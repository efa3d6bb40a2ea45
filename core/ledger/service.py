"""
원장 서비스

계정 생성, 분개 기록, 잔액/시산표 조회를 제공하는 전체 원장 Facade
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from contextlib import asynccontextmanager
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, AsyncContextManager, AsyncIterator

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import get_settings
from core.ledger.aggregator import TypeAggregator
from core.ledger.balance import BalanceCalculator
from core.ledger.entry_builder import JournalEntry, JournalEntryBuilder, PostingInput, coerce_side
from core.ledger.errors import InvalidPostingError, RequiresWholeLedgerError, UnknownAccountError
from core.ledger.models import Account, PostingRecord, coerce_account_type
from core.ledger.schema import init_ledger_schema
from core.ledger.store import LedgerStore
from core.ledger.trial_balance import TrialBalanceReport, TrialBalanceValidator
from core.ledger.types import AccountType, JournalSide
from core.logging import setup_logging
from core.utils.dates import DateRange

if TYPE_CHECKING:
    from adapters.interfaces import IPostingStore

logger = logging.getLogger(__name__)

DateLike = date | datetime | str | None


class Ledger:
    """전체 원장 Facade

    저장소 하나에 대해 잔액 계산기, 유형 집계기, 시산표 검증기를 묶음.
    시산표는 이 클래스에서만 제공됨 (TypeLedger에는 없음).

    Args:
        store: Posting 저장소 (LedgerStore, InMemoryPostingStore 등)
        end_date_grace_days: 시작일만 주어졌을 때 종료일을
            오늘 + N일로 채우는 옵션 (None이면 종료일 제한 없음)

    사용 예시:
    ```python
    ledger = Ledger(InMemoryPostingStore())

    cash = await ledger.create_account(AccountType.ASSET, "Cash")
    sales = await ledger.create_account(AccountType.REVENUE, "Sales")

    await ledger.post_transaction(
        date(2024, 1, 1),
        "Cash sale",
        [(cash.account_id, "DEBIT", "1000"), (sales.account_id, "CREDIT", "1000")],
    )

    await ledger.trial_balance()  # Decimal("0")
    ```
    """

    def __init__(self, store: IPostingStore, end_date_grace_days: int | None = None):
        self.store = store
        self.end_date_grace_days = end_date_grace_days

        self.entry_builder = JournalEntryBuilder(store)
        self.calculator = BalanceCalculator(store)
        self.aggregator = TypeAggregator(store, self.calculator)
        self.validator = TrialBalanceValidator(store, self.aggregator)

    def date_range(self, start_date: DateLike = None, end_date: DateLike = None) -> DateRange:
        """호출 인자로 조회 구간 생성"""
        return DateRange.of(start_date, end_date, grace_days=self.end_date_grace_days)

    # -------------------------------------------------------------------------
    # 계정
    # -------------------------------------------------------------------------

    async def create_account(
        self,
        account_type: AccountType | str,
        name: str,
        contra: bool = False,
    ) -> Account:
        """계정 생성

        Args:
            account_type: 5대 계정 유형 중 하나
            name: 계정 이름 (전체 원장에서 유일)
            contra: Contra 계정 여부

        Returns:
            생성된 계정

        Raises:
            InvalidAccountTypeError: 유효하지 않은 유형
            DuplicateNameError: 이미 사용 중인 이름
        """
        account = Account.create(account_type, name, contra)
        await self.store.add_account(account)

        logger.info(
            f"계정 생성: {account.name}",
            extra={
                "account_id": account.account_id,
                "account_type": account.account_type.value,
                "contra": account.contra,
            },
        )
        return account

    async def rename_account(self, account_id: str, name: str) -> Account:
        """계정 이름 변경 (유일성 재검사)"""
        account = await self.store.rename_account(account_id, name)
        logger.info(f"계정 이름 변경: {account_id} -> {account.name}")
        return account

    async def get_account(self, account_id: str) -> Account | None:
        """ID로 계정 조회"""
        return await self.store.get_account(account_id)

    async def get_account_by_name(self, name: str) -> Account | None:
        """이름으로 계정 조회"""
        return await self.store.get_account_by_name(name)

    async def list_accounts(self, account_type: AccountType | str | None = None) -> list[Account]:
        """계정 목록 조회"""
        if account_type is not None:
            account_type = coerce_account_type(account_type)
        return await self.store.list_accounts(account_type)

    async def _require_account(self, account_id: str) -> Account:
        account = await self.store.get_account(account_id)
        if account is None:
            raise UnknownAccountError(account_id)
        return account

    def for_type(self, account_type: AccountType | str) -> TypeLedger:
        """유형별 Facade 반환"""
        return TypeLedger(self, coerce_account_type(account_type))

    # -------------------------------------------------------------------------
    # 분개
    # -------------------------------------------------------------------------

    async def post_transaction(
        self,
        entry_date: date | datetime | str,
        description: str,
        postings: Iterable[PostingInput],
        memo: str | None = None,
    ) -> JournalEntry:
        """거래 기록

        모든 검증을 저장 전에 수행하고, 통과하면 원자적으로 저장.

        Args:
            entry_date: 거래일
            description: 적요
            postings: 분개 항목 목록 (JournalLine, dict 또는 tuple)
            memo: 메모

        Returns:
            저장된 분개

        Raises:
            EmptyPostingsError: 항목 없음
            NonPositiveAmountError: 금액이 0 이하
            InvalidSideError: DEBIT/CREDIT가 아닌 방향
            UnbalancedTransactionError: 차대 불균형
            UnknownAccountError: 존재하지 않는 계정
        """
        try:
            entry = await self.entry_builder.build(entry_date, description, postings, memo)
        except InvalidPostingError as e:
            logger.warning(f"거래 기록 거부: {e}")
            raise

        await self.store.commit_entry(entry)

        logger.debug(
            f"거래 기록: {entry.entry_id}",
            extra={"entry_date": entry.entry_date.isoformat(), "total": str(entry.debit_total)},
        )
        return entry

    async def get_entry(self, entry_id: str) -> JournalEntry | None:
        """분개 단건 조회"""
        return await self.store.get_entry(entry_id)

    async def postings(
        self,
        account_id: str,
        side: JournalSide | str | None = None,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> list[PostingRecord]:
        """계정의 기간별 분개 항목 목록

        Args:
            account_id: 계정 ID
            side: DEBIT/CREDIT (None이면 양쪽 모두)
            start_date: 시작일
            end_date: 종료일

        Returns:
            분개 항목 목록 (side 지정 없으면 차변 → 대변 순)
        """
        await self._require_account(account_id)
        date_range = self.date_range(start_date, end_date)

        sides = list(JournalSide) if side is None else [coerce_side(side)]

        records: list[PostingRecord] = []
        for journal_side in sides:
            async for record in self.store.find_postings(account_id, journal_side, date_range):
                records.append(record)
        return records

    # -------------------------------------------------------------------------
    # 잔액
    # -------------------------------------------------------------------------

    async def credits_balance(
        self,
        account_id: str,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> Decimal:
        """계정 대변 합계"""
        account = await self._require_account(account_id)
        return await self.calculator.credits_balance(account, self.date_range(start_date, end_date))

    async def debits_balance(
        self,
        account_id: str,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> Decimal:
        """계정 차변 합계"""
        account = await self._require_account(account_id)
        return await self.calculator.debits_balance(account, self.date_range(start_date, end_date))

    async def balance(
        self,
        account_id: str,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> Decimal:
        """계정 순잔액

        Args:
            account_id: 계정 ID
            start_date: 시작일 (None이면 제한 없음)
            end_date: 종료일 (None이면 제한 없음)

        Returns:
            정상 잔액 방향 기준 순잔액
        """
        account = await self._require_account(account_id)
        return await self.calculator.balance(account, self.date_range(start_date, end_date))

    async def type_balance(
        self,
        account_type: AccountType | str,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> Decimal:
        """유형 합계 (contra 보정)"""
        return await self.aggregator.type_balance(
            coerce_account_type(account_type),
            self.date_range(start_date, end_date),
        )

    async def trial_balance(
        self,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> Decimal:
        """시산표 값

        Asset − (Liability + Equity + Revenue − Expense).
        균형 분개만 기록되었다면 항상 0.
        """
        return await self.validator.trial_balance(self.date_range(start_date, end_date))

    async def check_trial_balance(
        self,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> TrialBalanceReport:
        """시산표 검증 결과 (유형별 합계 포함)"""
        return await self.validator.check(self.date_range(start_date, end_date))


class TypeLedger:
    """유형별 Facade

    한 계정 유형에 한정된 조회만 제공.
    """

    def __init__(self, ledger: Ledger, account_type: AccountType):
        self.ledger = ledger
        self.account_type = account_type

    async def accounts(self) -> list[Account]:
        """해당 유형의 계정 목록"""
        return await self.ledger.list_accounts(self.account_type)

    async def create_account(self, name: str, contra: bool = False) -> Account:
        """해당 유형의 계정 생성"""
        return await self.ledger.create_account(self.account_type, name, contra)

    async def balance(self, start_date: DateLike = None, end_date: DateLike = None) -> Decimal:
        """유형 합계"""
        return await self.ledger.type_balance(self.account_type, start_date, end_date)

    async def trial_balance(self, start_date: DateLike = None, end_date: DateLike = None) -> Decimal:
        """유형 단위 시산표는 정의되지 않음

        Raises:
            RequiresWholeLedgerError: 항상
        """
        raise RequiresWholeLedgerError(self.account_type)


@asynccontextmanager
async def open_ledger(
    db_path: Path | str,
    end_date_grace_days: int | None = None,
) -> AsyncIterator[Ledger]:
    """SQLite 원장 열기

    연결 생성 → 스키마 초기화 → Ledger 반환 → 종료 시 연결 해제.

    사용 예시:
    ```python
    async with open_ledger(Paths.LEDGER_DB) as ledger:
        await ledger.trial_balance()
    ```
    """
    db = SQLiteAdapter(db_path)
    await db.connect()
    try:
        await init_ledger_schema(db)
        yield Ledger(LedgerStore(db), end_date_grace_days=end_date_grace_days)
    finally:
        await db.close()


def open_configured_ledger(
    settings_path: Path | None = None,
    configure_logging: bool = False,
) -> AsyncContextManager[Ledger]:
    """ledger.yaml 설정으로 SQLite 원장 열기

    Args:
        settings_path: ledger.yaml 경로 (None이면 기본 경로 사용)
        configure_logging: True면 logging.level로 루트 로거 설정
    """
    settings = get_settings(settings_path)

    if configure_logging:
        level = logging.getLevelName(settings.log_level)
        setup_logging("ledger", console_level=level, file_level=level)

    return open_ledger(settings.db_path, end_date_grace_days=settings.end_date_grace_days)
