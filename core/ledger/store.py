"""
Ledger 저장소

계정 및 복식부기 분개의 SQLite 저장과 조회.
IPostingStore Protocol 구현체.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, AsyncContextManager, AsyncIterator

from core.ledger.entry_builder import JournalEntry, JournalLine
from core.ledger.errors import DuplicateNameError, UnknownAccountError
from core.ledger.models import Account, PostingRecord
from core.ledger.types import AccountType, JournalSide
from core.utils.dates import DateRange
from core.utils.snapshot import SnapshotGuard

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


def _row_to_account(row: tuple[Any, ...]) -> Account:
    return Account(
        account_id=row[0],
        name=row[1],
        account_type=AccountType(row[2]),
        contra=bool(row[3]),
    )


def _date_filter(date_range: DateRange) -> tuple[str, list[str]]:
    """기간 조건절 생성 (바인딩 파라미터 사용)

    Returns:
        (SQL 조건절, 파라미터 목록)
    """
    clauses: list[str] = []
    params: list[str] = []
    if date_range.start is not None:
        clauses.append("je.entry_date >= ?")
        params.append(date_range.start.isoformat())
    if date_range.end is not None:
        clauses.append("je.entry_date <= ?")
        params.append(date_range.end.isoformat())
    sql = "".join(f" AND {clause}" for clause in clauses)
    return sql, params


class LedgerStore:
    """Ledger 저장소

    계정과 분개를 저장하고 조회하는 클래스.
    잔액은 저장하지 않고 조회 시 분개 항목에서 계산됨.

    쓰기는 asyncio.Lock으로 직렬화되며, 하나의 DB 트랜잭션 안에서
    journal_line을 먼저, journal_entry 헤더를 마지막에 기록함.
    잔액 조회는 두 테이블을 JOIN하므로 기록 중인 분개는 보이지 않음.
    여러 번의 조회가 필요한 잔액/시산표 계산은 snapshot() 안에서 수행되어
    조회 도중 다른 분개가 커밋되지 않음.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self._write_lock = asyncio.Lock()
        self._snapshot = SnapshotGuard(self._write_lock)

    def snapshot(self) -> AsyncContextManager[None]:
        """읽기 스냅샷 (구간 동안 커밋 대기)"""
        return self._snapshot.hold()

    # -------------------------------------------------------------------------
    # 계정
    # -------------------------------------------------------------------------

    async def add_account(self, account: Account) -> None:
        """계정 등록

        Args:
            account: 등록할 계정

        Raises:
            DuplicateNameError: 이름이 이미 사용 중인 경우
        """
        async with self._write_lock:
            if await self.get_account_by_name(account.name) is not None:
                raise DuplicateNameError(account.name)

            try:
                async with self.db.transaction():
                    await self.db.execute(
                        """
                        INSERT INTO account (account_id, name, account_type, contra)
                        VALUES (?, ?, ?, ?)
                        """,
                        (
                            account.account_id,
                            account.name,
                            account.account_type.value,
                            int(account.contra),
                        ),
                    )
            except sqlite3.IntegrityError as e:
                # 다른 연결이 같은 이름을 먼저 등록한 경우
                raise DuplicateNameError(account.name) from e

        logger.debug(f"Saved account: {account.account_id} ({account.name})")

    async def rename_account(self, account_id: str, name: str) -> Account:
        """계정 이름 변경

        Args:
            account_id: 계정 ID
            name: 새 이름

        Returns:
            변경된 계정

        Raises:
            UnknownAccountError: 계정이 없는 경우
            DuplicateNameError: 새 이름을 다른 계정이 사용 중인 경우
        """
        async with self._write_lock:
            account = await self.get_account(account_id)
            if account is None:
                raise UnknownAccountError(account_id)

            renamed = account.renamed(name)
            existing = await self.get_account_by_name(renamed.name)
            if existing is not None and existing.account_id != account_id:
                raise DuplicateNameError(renamed.name)

            try:
                async with self.db.transaction():
                    await self.db.execute(
                        """
                        UPDATE account
                        SET name = ?, updated_at = datetime('now')
                        WHERE account_id = ?
                        """,
                        (renamed.name, account_id),
                    )
            except sqlite3.IntegrityError as e:
                raise DuplicateNameError(renamed.name) from e

        return renamed

    async def get_account(self, account_id: str) -> Account | None:
        """계정 조회

        Args:
            account_id: 계정 ID

        Returns:
            계정 (없으면 None)
        """
        row = await self.db.fetchone(
            """
            SELECT account_id, name, account_type, contra
            FROM account
            WHERE account_id = ?
            """,
            (account_id,),
        )
        return _row_to_account(row) if row else None

    async def get_account_by_name(self, name: str) -> Account | None:
        """이름으로 계정 조회"""
        row = await self.db.fetchone(
            """
            SELECT account_id, name, account_type, contra
            FROM account
            WHERE name = ?
            """,
            (name,),
        )
        return _row_to_account(row) if row else None

    async def list_accounts(self, account_type: AccountType | None = None) -> list[Account]:
        """계정 목록 조회

        Args:
            account_type: 계정 유형 필터 (None이면 전체)

        Returns:
            이름순 계정 목록
        """
        if account_type is None:
            rows = await self.db.fetchall(
                """
                SELECT account_id, name, account_type, contra
                FROM account
                ORDER BY name
                """
            )
        else:
            rows = await self.db.fetchall(
                """
                SELECT account_id, name, account_type, contra
                FROM account
                WHERE account_type = ?
                ORDER BY name
                """,
                (account_type.value,),
            )
        return [_row_to_account(row) for row in rows]

    async def find_accounts_by_type(self, account_type: AccountType) -> AsyncIterator[Account]:
        """유형별 계정 스트림 (ix_account_type 인덱스 사용)"""
        async for row in self.db.iterate(
            """
            SELECT account_id, name, account_type, contra
            FROM account
            WHERE account_type = ?
            """,
            (account_type.value,),
        ):
            yield _row_to_account(row)

    # -------------------------------------------------------------------------
    # 분개
    # -------------------------------------------------------------------------

    async def find_postings(
        self,
        account_id: str,
        side: JournalSide,
        date_range: DateRange,
    ) -> AsyncIterator[PostingRecord]:
        """계정/방향/기간별 분개 항목 스트림

        금액은 TEXT로 저장되어 있으며 Decimal로 복원됨 (SQL SUM 미사용).
        """
        date_sql, date_params = _date_filter(date_range)

        async for row in self.db.iterate(
            f"""
            SELECT jl.entry_id, je.entry_date, jl.amount
            FROM journal_line jl
            JOIN journal_entry je ON je.entry_id = jl.entry_id
            WHERE jl.account_id = ? AND jl.side = ?{date_sql}
            ORDER BY je.entry_date, jl.line_id
            """,
            (account_id, side.value, *date_params),
        ):
            yield PostingRecord(
                entry_id=row[0],
                entry_date=date.fromisoformat(row[1]),
                amount=Decimal(row[2]),
            )

    async def commit_entry(self, entry: JournalEntry) -> None:
        """분개 원자적 저장

        Args:
            entry: 검증된 분개

        Raises:
            ValueError: 불균형 분개인 경우
        """
        if not entry.is_balanced():
            raise ValueError(f"Unbalanced entry: {entry.entry_id}")

        async with self._write_lock:
            async with self.db.transaction():
                # journal_line 먼저 저장 (헤더가 없으면 조회되지 않음)
                await self.db.executemany(
                    """
                    INSERT INTO journal_line (
                        entry_id, account_id, side, amount, memo, line_order
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            entry.entry_id,
                            line.account_id,
                            line.side.value,
                            str(line.amount),
                            line.memo,
                            i,
                        )
                        for i, line in enumerate(entry.lines)
                    ],
                )

                # journal_entry 헤더 저장 → 이 시점에 분개 전체가 보임
                await self.db.execute(
                    """
                    INSERT INTO journal_entry (entry_id, entry_date, description, memo)
                    VALUES (?, ?, ?, ?)
                    """,
                    (
                        entry.entry_id,
                        entry.entry_date.isoformat(),
                        entry.description,
                        entry.memo,
                    ),
                )

        logger.debug(f"Saved journal entry: {entry.entry_id}")

    async def get_entry(self, entry_id: str) -> JournalEntry | None:
        """분개 단건 조회

        Args:
            entry_id: 분개 ID

        Returns:
            분개 (없으면 None)
        """
        row = await self.db.fetchone(
            """
            SELECT entry_id, entry_date, description, memo
            FROM journal_entry
            WHERE entry_id = ?
            """,
            (entry_id,),
        )

        if not row:
            return None

        lines = await self.db.fetchall(
            """
            SELECT account_id, side, amount, memo
            FROM journal_line
            WHERE entry_id = ?
            ORDER BY line_order
            """,
            (entry_id,),
        )

        return JournalEntry(
            entry_id=row[0],
            entry_date=date.fromisoformat(row[1]),
            description=row[2],
            memo=row[3],
            lines=tuple(
                JournalLine(
                    account_id=line[0],
                    side=JournalSide(line[1]),
                    amount=Decimal(line[2]),
                    memo=line[3],
                )
                for line in lines
            ),
        )
