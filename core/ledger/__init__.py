"""
복식부기 (Double-Entry Bookkeeping) 원장 엔진

계정 유형별 정상 잔액, contra 계정, 기간별 잔액 집계,
전체 원장 시산표 검증을 제공.

사용 예시:
```python
from core.ledger import AccountType, open_ledger

async with open_ledger("data/ledger.db") as ledger:
    cash = await ledger.create_account(AccountType.ASSET, "Cash")
    sales = await ledger.create_account(AccountType.REVENUE, "Sales")

    # 분개 기록
    await ledger.post_transaction(
        "2024-01-01",
        "Cash sale",
        [
            (cash.account_id, "DEBIT", "1000"),
            (sales.account_id, "CREDIT", "1000"),
        ],
    )

    # 잔액 조회
    balance = await ledger.balance(cash.account_id)

    # 시산표 조회
    trial_balance = await ledger.trial_balance()
```
"""

from core.ledger.aggregator import TypeAggregator
from core.ledger.balance import BalanceCalculator
from core.ledger.entry_builder import JournalEntry, JournalEntryBuilder, JournalLine
from core.ledger.errors import (
    DuplicateNameError,
    EmptyPostingsError,
    InvalidAccountTypeError,
    InvalidDescriptionError,
    InvalidPostingError,
    InvalidPostingFormatError,
    InvalidSideError,
    LedgerError,
    NonPositiveAmountError,
    RequiresWholeLedgerError,
    UnbalancedTransactionError,
    UndefinedOperationError,
    UnknownAccountError,
)
from core.ledger.models import Account, PostingRecord
from core.ledger.service import Ledger, TypeLedger, open_configured_ledger, open_ledger
from core.ledger.store import LedgerStore
from core.ledger.trial_balance import TrialBalanceReport, TrialBalanceValidator
from core.ledger.types import NORMAL_BALANCE, AccountType, JournalSide, normal_side

__all__ = [
    # 핵심 클래스
    "Ledger",
    "TypeLedger",
    "open_ledger",
    "open_configured_ledger",
    "LedgerStore",
    "BalanceCalculator",
    "TypeAggregator",
    "TrialBalanceValidator",
    "TrialBalanceReport",
    "JournalEntryBuilder",
    "JournalEntry",
    "JournalLine",
    "Account",
    "PostingRecord",
    # Enum
    "AccountType",
    "JournalSide",
    # 상수
    "NORMAL_BALANCE",
    "normal_side",
    # 에러
    "LedgerError",
    "DuplicateNameError",
    "InvalidAccountTypeError",
    "InvalidPostingError",
    "EmptyPostingsError",
    "InvalidPostingFormatError",
    "InvalidDescriptionError",
    "NonPositiveAmountError",
    "InvalidSideError",
    "UnknownAccountError",
    "UnbalancedTransactionError",
    "UndefinedOperationError",
    "RequiresWholeLedgerError",
]
