"""
복식부기 스키마 초기화

Ledger 시작 시 자동으로 테이블과 인덱스 생성.
CREATE IF NOT EXISTS 패턴으로 여러 번 호출해도 안전하게 동작.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


async def init_ledger_schema(db: "SQLiteAdapter") -> None:
    """Ledger 스키마 초기화 (테이블 + 인덱스)

    이미 존재하는 경우 안전하게 건너뜀 (IF NOT EXISTS).

    Args:
        db: SQLiteAdapter 인스턴스
    """
    await _create_ledger_tables(db)
    await _create_ledger_indexes(db)
    await db.commit()
    logger.info("Ledger 스키마 초기화 완료")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """Ledger 테이블 생성"""

    # account 테이블 (이름은 유형과 무관하게 유일)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS account (
            account_id       TEXT PRIMARY KEY,
            name             TEXT NOT NULL UNIQUE,
            account_type     TEXT NOT NULL CHECK (
                account_type IN ('ASSET', 'LIABILITY', 'EQUITY', 'REVENUE', 'EXPENSE')
            ),
            contra           INTEGER NOT NULL DEFAULT 0,
            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # journal_entry 테이블 (entry_date: YYYY-MM-DD, 문자열 비교 = 날짜 비교)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS journal_entry (
            entry_id         TEXT PRIMARY KEY,
            entry_date       TEXT NOT NULL,
            description      TEXT NOT NULL,
            memo             TEXT,
            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # journal_line 테이블
    # entry_id FK는 DEFERRED: 항목을 먼저 쓰고 헤더를 마지막에 씀
    await db.execute("""
        CREATE TABLE IF NOT EXISTS journal_line (
            line_id          INTEGER PRIMARY KEY AUTOINCREMENT,
            entry_id         TEXT NOT NULL,
            account_id       TEXT NOT NULL,
            side             TEXT NOT NULL CHECK (side IN ('DEBIT', 'CREDIT')),
            amount           TEXT NOT NULL,
            memo             TEXT,
            line_order       INTEGER NOT NULL DEFAULT 0,
            FOREIGN KEY (entry_id) REFERENCES journal_entry(entry_id)
                DEFERRABLE INITIALLY DEFERRED,
            FOREIGN KEY (account_id) REFERENCES account(account_id)
        )
    """)


async def _create_ledger_indexes(db: "SQLiteAdapter") -> None:
    """인덱스 생성"""

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_account_type
        ON account(account_type)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_journal_line_account_side
        ON journal_line(account_id, side)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_journal_line_entry
        ON journal_line(entry_id)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_journal_entry_date
        ON journal_entry(entry_date)
    """)
