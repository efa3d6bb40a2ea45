"""Ledger / TypeLedger 서비스 테스트"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from adapters.memory.posting_store import InMemoryPostingStore
from core.ledger.errors import (
    DuplicateNameError,
    InvalidAccountTypeError,
    InvalidSideError,
    UnbalancedTransactionError,
    UnknownAccountError,
)
from core.ledger.service import Ledger
from core.ledger.types import AccountType, JournalSide
from core.utils.dates import DateRange, today


class TestAccounts:
    """계정 관리 테스트"""

    @pytest.mark.asyncio
    async def test_create_and_lookup(self, ledger: Ledger) -> None:
        """생성 후 ID/이름으로 조회"""
        cash = await ledger.create_account("asset", "Cash")

        assert await ledger.get_account(cash.account_id) == cash
        assert await ledger.get_account_by_name("Cash") == cash
        assert await ledger.get_account("missing") is None
        assert await ledger.get_account_by_name("Missing") is None

    @pytest.mark.asyncio
    async def test_duplicate_name(self, ledger: Ledger) -> None:
        """같은 이름은 유형이 달라도 거부"""
        await ledger.create_account(AccountType.ASSET, "Cash")

        with pytest.raises(DuplicateNameError) as exc_info:
            await ledger.create_account(AccountType.REVENUE, "Cash")

        assert exc_info.value.name == "Cash"
        assert len(await ledger.list_accounts()) == 1

    @pytest.mark.asyncio
    async def test_invalid_type(self, ledger: Ledger) -> None:
        """기반 유형 거부"""
        with pytest.raises(InvalidAccountTypeError):
            await ledger.create_account("ACCOUNT", "Anything")

        assert await ledger.list_accounts() == []

    @pytest.mark.asyncio
    async def test_list_accounts_by_type(self, ledger: Ledger) -> None:
        """유형별 목록 (이름순)"""
        await ledger.create_account(AccountType.ASSET, "Cash")
        await ledger.create_account(AccountType.ASSET, "Bank")
        await ledger.create_account(AccountType.EXPENSE, "Rent")

        assets = await ledger.list_accounts("ASSET")

        assert [account.name for account in assets] == ["Bank", "Cash"]
        assert [account.name for account in await ledger.list_accounts()] == ["Bank", "Cash", "Rent"]

    @pytest.mark.asyncio
    async def test_rename(self, ledger: Ledger) -> None:
        """이름 변경 및 유일성 재검사"""
        cash = await ledger.create_account(AccountType.ASSET, "Cash")
        await ledger.create_account(AccountType.ASSET, "Bank")

        renamed = await ledger.rename_account(cash.account_id, "Petty Cash")
        assert renamed.name == "Petty Cash"
        assert await ledger.get_account_by_name("Cash") is None

        with pytest.raises(DuplicateNameError):
            await ledger.rename_account(cash.account_id, "Bank")

        with pytest.raises(UnknownAccountError):
            await ledger.rename_account("missing", "Anything")

    @pytest.mark.asyncio
    async def test_rename_keeps_postings(self, ledger: Ledger) -> None:
        """이름 변경 후에도 잔액 유지"""
        cash = await ledger.create_account(AccountType.ASSET, "Cash")
        sales = await ledger.create_account(AccountType.REVENUE, "Sales")
        await ledger.post_transaction(
            date(2024, 1, 1), "Sale", [(cash.account_id, "DEBIT", "10"), (sales.account_id, "CREDIT", "10")]
        )

        await ledger.rename_account(cash.account_id, "Till")

        assert await ledger.balance(cash.account_id) == Decimal("10")


class TestPostTransaction:
    """거래 기록 테스트"""

    @pytest.mark.asyncio
    async def test_post_and_get_entry(self, ledger: Ledger) -> None:
        """저장 후 단건 조회"""
        cash = await ledger.create_account(AccountType.ASSET, "Cash")
        sales = await ledger.create_account(AccountType.REVENUE, "Sales")

        entry = await ledger.post_transaction(
            "2024-01-01",
            "Cash sale",
            [(cash.account_id, "DEBIT", "1000"), (sales.account_id, "CREDIT", "1000")],
            memo="first sale",
        )

        stored = await ledger.get_entry(entry.entry_id)
        assert stored == entry
        assert stored.memo == "first sale"
        assert await ledger.get_entry("missing") is None

    @pytest.mark.asyncio
    async def test_rejected_transaction_leaves_nothing(
        self, ledger: Ledger, memory_store: InMemoryPostingStore
    ) -> None:
        """검증 실패 시 어떤 항목도 기록되지 않음"""
        cash = await ledger.create_account(AccountType.ASSET, "Cash")
        sales = await ledger.create_account(AccountType.REVENUE, "Sales")

        with pytest.raises(UnbalancedTransactionError):
            await ledger.post_transaction(
                date(2024, 1, 1),
                "Unbalanced",
                [(cash.account_id, "DEBIT", "100"), (sales.account_id, "CREDIT", "99")],
            )

        with pytest.raises(UnknownAccountError):
            await ledger.post_transaction(
                date(2024, 1, 1),
                "Unknown",
                [(cash.account_id, "DEBIT", "100"), ("missing", "CREDIT", "100")],
            )

        assert memory_store.state.entries == {}
        assert await ledger.debits_balance(cash.account_id) == Decimal("0")
        assert await ledger.trial_balance() == Decimal("0")

    @pytest.mark.asyncio
    async def test_compound_entry(self, ledger: Ledger) -> None:
        """다중 항목 분개"""
        cash = await ledger.create_account(AccountType.ASSET, "Cash")
        sales = await ledger.create_account(AccountType.REVENUE, "Sales")
        tax = await ledger.create_account(AccountType.LIABILITY, "VAT Payable")

        await ledger.post_transaction(
            date(2024, 1, 1),
            "Sale with VAT",
            [
                (cash.account_id, "DEBIT", "110"),
                (sales.account_id, "CREDIT", "100"),
                (tax.account_id, "CREDIT", "10"),
            ],
        )

        assert await ledger.balance(cash.account_id) == Decimal("110")
        assert await ledger.balance(tax.account_id) == Decimal("10")
        assert await ledger.trial_balance() == Decimal("0")

    @pytest.mark.asyncio
    async def test_large_amount_balance_exact(self, ledger: Ledger) -> None:
        """28자리를 넘는 금액도 잔액이 반올림되지 않음"""
        cash = await ledger.create_account(AccountType.ASSET, "Cash")
        sales = await ledger.create_account(AccountType.REVENUE, "Sales")
        amount = Decimal("1234567890123456789012345678.91")

        await ledger.post_transaction(
            date(2024, 1, 1), "Large sale", [(cash.account_id, "DEBIT", amount), (sales.account_id, "CREDIT", amount)]
        )
        await ledger.post_transaction(
            date(2024, 1, 2), "Small sale", [(cash.account_id, "DEBIT", "0.01"), (sales.account_id, "CREDIT", "0.01")]
        )

        assert await ledger.balance(cash.account_id) == Decimal("1234567890123456789012345678.92")
        assert await ledger.type_balance(AccountType.REVENUE) == Decimal("1234567890123456789012345678.92")
        assert await ledger.trial_balance() == Decimal("0")


class TestQueries:
    """조회 테스트"""

    @pytest.mark.asyncio
    async def test_unknown_account_balance(self, ledger: Ledger) -> None:
        """존재하지 않는 계정 잔액 조회"""
        with pytest.raises(UnknownAccountError):
            await ledger.balance("missing")

    @pytest.mark.asyncio
    async def test_postings(self, ledger: Ledger) -> None:
        """방향/기간별 분개 항목"""
        cash = await ledger.create_account(AccountType.ASSET, "Cash")
        sales = await ledger.create_account(AccountType.REVENUE, "Sales")

        first = await ledger.post_transaction(
            date(2024, 1, 1), "Sale", [(cash.account_id, "DEBIT", "100"), (sales.account_id, "CREDIT", "100")]
        )
        second = await ledger.post_transaction(
            date(2024, 2, 1), "Refund", [(sales.account_id, "DEBIT", "30"), (cash.account_id, "CREDIT", "30")]
        )

        debits = await ledger.postings(cash.account_id, "debit")
        assert [(p.entry_id, p.amount) for p in debits] == [(first.entry_id, Decimal("100"))]

        both = await ledger.postings(cash.account_id)
        assert [p.entry_id for p in both] == [first.entry_id, second.entry_id]

        february = await ledger.postings(cash.account_id, JournalSide.CREDIT, "2024-02-01", "2024-02-29")
        assert [p.amount for p in february] == [Decimal("30")]

        with pytest.raises(InvalidSideError):
            await ledger.postings(cash.account_id, "LEFT")

    @pytest.mark.asyncio
    async def test_start_after_end(self, ledger: Ledger) -> None:
        """시작일이 종료일보다 늦으면 ValueError"""
        cash = await ledger.create_account(AccountType.ASSET, "Cash")

        with pytest.raises(ValueError):
            await ledger.balance(cash.account_id, "2024-02-01", "2024-01-01")


class TestGraceWindow:
    """종료일 유예 옵션 테스트"""

    def test_disabled_by_default(self, ledger: Ledger) -> None:
        """기본값은 종료일 제한 없음"""
        assert ledger.date_range("2024-01-01") == DateRange(start=date(2024, 1, 1))

    def test_fills_end_when_only_start(self, memory_store: InMemoryPostingStore) -> None:
        """시작일만 주어지면 오늘 + N일"""
        ledger = Ledger(memory_store, end_date_grace_days=15)

        date_range = ledger.date_range("2024-01-01")

        assert date_range.end == today() + timedelta(days=15)

    def test_explicit_end_wins(self, memory_store: InMemoryPostingStore) -> None:
        """종료일이 주어지면 그대로 사용"""
        ledger = Ledger(memory_store, end_date_grace_days=15)

        assert ledger.date_range("2024-01-01", "2024-01-31").end == date(2024, 1, 31)
        assert ledger.date_range().is_unbounded

    @pytest.mark.asyncio
    async def test_excludes_far_future_entries(self, memory_store: InMemoryPostingStore) -> None:
        """유예 기간 밖의 선일자 분개 제외"""
        ledger = Ledger(memory_store, end_date_grace_days=15)
        cash = await ledger.create_account(AccountType.ASSET, "Cash")
        sales = await ledger.create_account(AccountType.REVENUE, "Sales")

        near = today() + timedelta(days=10)
        far = today() + timedelta(days=60)
        for entry_date, amount in ((near, "10"), (far, "20")):
            await ledger.post_transaction(
                entry_date, "Forward", [(cash.account_id, "DEBIT", amount), (sales.account_id, "CREDIT", amount)]
            )

        start = today() - timedelta(days=1)
        assert await ledger.balance(cash.account_id, start) == Decimal("10")
        assert await ledger.balance(cash.account_id) == Decimal("30")


class TestTypeLedger:
    """유형별 Facade 테스트"""

    @pytest.mark.asyncio
    async def test_scoped_operations(self, ledger: Ledger) -> None:
        """해당 유형으로 한정된 계정/잔액"""
        assets = ledger.for_type("asset")
        equity = ledger.for_type(AccountType.EQUITY)

        cash = await assets.create_account("Cash")
        await assets.create_account("Accumulated Depreciation", contra=True)
        capital = await equity.create_account("Capital")

        await ledger.post_transaction(
            date(2024, 1, 1), "Invest", [(cash.account_id, "DEBIT", "500"), (capital.account_id, "CREDIT", "500")]
        )

        assert assets.account_type is AccountType.ASSET
        assert [account.name for account in await assets.accounts()] == ["Accumulated Depreciation", "Cash"]
        assert await assets.balance() == Decimal("500")
        assert await equity.balance("2024-02-01", None) == Decimal("0")

    def test_invalid_type(self, ledger: Ledger) -> None:
        """유효하지 않은 유형"""
        with pytest.raises(InvalidAccountTypeError):
            ledger.for_type("ACCOUNT")
