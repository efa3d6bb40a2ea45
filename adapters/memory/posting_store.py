"""
메모리 Posting 저장소

IPostingStore Protocol 구현체.
DB 없이 원장 엔진을 사용하거나 테스트할 때 사용.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import AsyncContextManager, AsyncIterator

from core.ledger.entry_builder import JournalEntry
from core.ledger.errors import DuplicateNameError, UnknownAccountError
from core.ledger.models import Account, PostingRecord
from core.ledger.types import AccountType, JournalSide
from core.utils.dates import DateRange
from core.utils.snapshot import SnapshotGuard

logger = logging.getLogger(__name__)


@dataclass
class MemoryState:
    """메모리 내 저장 상태"""

    # 계정 (account_id -> Account)
    accounts: dict[str, Account] = field(default_factory=dict)

    # 분개 (entry_id -> JournalEntry), 커밋 순서 유지
    entries: dict[str, JournalEntry] = field(default_factory=dict)

    # 계정별 분개 ID 색인 (account_id -> [entry_id, ...])
    entries_by_account: dict[str, list[str]] = field(default_factory=dict)


class InMemoryPostingStore:
    """메모리 Posting 저장소

    분개는 await 없이 한 번에 상태에 반영되므로 부분 기록이 보이지 않음.

    사용 예시:
    ```python
    store = InMemoryPostingStore()
    ledger = Ledger(store)

    cash = await ledger.create_account(AccountType.ASSET, "Cash")
    ```
    """

    def __init__(self, state: MemoryState | None = None):
        self.state = state or MemoryState()
        self._write_lock = asyncio.Lock()
        self._snapshot = SnapshotGuard(self._write_lock)

    def snapshot(self) -> AsyncContextManager[None]:
        """읽기 스냅샷 (구간 동안 커밋 대기)"""
        return self._snapshot.hold()

    # -------------------------------------------------------------------------
    # 계정
    # -------------------------------------------------------------------------

    def _name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        return any(
            account.name == name and account.account_id != exclude_id
            for account in self.state.accounts.values()
        )

    async def add_account(self, account: Account) -> None:
        """계정 등록"""
        async with self._write_lock:
            if self._name_taken(account.name):
                raise DuplicateNameError(account.name)
            self.state.accounts[account.account_id] = account

    async def rename_account(self, account_id: str, name: str) -> Account:
        """계정 이름 변경"""
        async with self._write_lock:
            account = self.state.accounts.get(account_id)
            if account is None:
                raise UnknownAccountError(account_id)

            renamed = account.renamed(name)
            if self._name_taken(renamed.name, exclude_id=account_id):
                raise DuplicateNameError(renamed.name)

            self.state.accounts[account_id] = renamed
            return renamed

    async def get_account(self, account_id: str) -> Account | None:
        """ID로 계정 조회"""
        return self.state.accounts.get(account_id)

    async def get_account_by_name(self, name: str) -> Account | None:
        """이름으로 계정 조회"""
        for account in self.state.accounts.values():
            if account.name == name:
                return account
        return None

    async def list_accounts(self, account_type: AccountType | None = None) -> list[Account]:
        """계정 목록 조회 (이름순)"""
        accounts = [
            account
            for account in self.state.accounts.values()
            if account_type is None or account.account_type == account_type
        ]
        return sorted(accounts, key=lambda account: account.name)

    async def find_accounts_by_type(self, account_type: AccountType) -> AsyncIterator[Account]:
        """유형별 계정 스트림"""
        # 순회 중 계정이 추가되어도 안전하도록 스냅샷 사용
        for account in list(self.state.accounts.values()):
            if account.account_type == account_type:
                yield account

    # -------------------------------------------------------------------------
    # 분개
    # -------------------------------------------------------------------------

    async def find_postings(
        self,
        account_id: str,
        side: JournalSide,
        date_range: DateRange,
    ) -> AsyncIterator[PostingRecord]:
        """계정/방향/기간별 분개 항목 스트림"""
        for entry_id in list(self.state.entries_by_account.get(account_id, ())):
            entry = self.state.entries[entry_id]
            if not date_range.contains(entry.entry_date):
                continue
            for line in entry.lines:
                if line.account_id == account_id and line.side == side:
                    yield PostingRecord(
                        entry_id=entry.entry_id,
                        entry_date=entry.entry_date,
                        amount=line.amount,
                    )

    async def commit_entry(self, entry: JournalEntry) -> None:
        """분개 원자적 저장"""
        if not entry.is_balanced():
            raise ValueError(f"Unbalanced entry: {entry.entry_id}")

        async with self._write_lock:
            for line in entry.lines:
                if line.account_id not in self.state.accounts:
                    raise UnknownAccountError(line.account_id)

            # await 없이 한 번에 반영
            self.state.entries[entry.entry_id] = entry
            for account_id in dict.fromkeys(line.account_id for line in entry.lines):
                self.state.entries_by_account.setdefault(account_id, []).append(entry.entry_id)

        logger.debug(f"Saved journal entry: {entry.entry_id}")

    async def get_entry(self, entry_id: str) -> JournalEntry | None:
        """분개 단건 조회"""
        return self.state.entries.get(entry_id)
