"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 저장소 교체 가능.
모든 Posting 저장소 구현체는 이 Protocol을 준수해야 함.
"""

from typing import AsyncContextManager, AsyncIterator, Protocol, runtime_checkable

from core.ledger.entry_builder import JournalEntry
from core.ledger.models import Account, PostingRecord
from core.ledger.types import AccountType, JournalSide
from core.utils.dates import DateRange


@runtime_checkable
class IPostingStore(Protocol):
    """Posting 저장소 인터페이스

    계정과 분개의 영속화를 담당하는 외부 협력자.
    엔진은 이 Protocol을 통해서만 데이터를 읽고 씀.
    금액은 반드시 Decimal 타입 사용.
    """

    # -------------------------------------------------------------------------
    # 계정
    # -------------------------------------------------------------------------

    async def add_account(self, account: Account) -> None:
        """계정 등록

        Raises:
            DuplicateNameError: 이름이 이미 사용 중인 경우
        """
        ...

    async def rename_account(self, account_id: str, name: str) -> Account:
        """계정 이름 변경 (유일성 재검사)

        Raises:
            UnknownAccountError: 계정이 없는 경우
            DuplicateNameError: 새 이름이 이미 사용 중인 경우
        """
        ...

    async def get_account(self, account_id: str) -> Account | None:
        """ID로 계정 조회"""
        ...

    async def get_account_by_name(self, name: str) -> Account | None:
        """이름으로 계정 조회"""
        ...

    async def list_accounts(self, account_type: AccountType | None = None) -> list[Account]:
        """계정 목록 조회 (이름순)"""
        ...

    def find_accounts_by_type(self, account_type: AccountType) -> AsyncIterator[Account]:
        """유형별 계정 스트림

        호출할 때마다 처음부터 다시 순회하는 유한 시퀀스.
        대형 원장에서도 전체를 메모리에 올리지 않음.
        """
        ...

    # -------------------------------------------------------------------------
    # 분개
    # -------------------------------------------------------------------------

    def find_postings(
        self,
        account_id: str,
        side: JournalSide,
        date_range: DateRange,
    ) -> AsyncIterator[PostingRecord]:
        """계정/방향/기간별 분개 항목 스트림

        Args:
            account_id: 계정 ID
            side: DEBIT 또는 CREDIT
            date_range: 거래일 포함 구간 (UNBOUNDED면 전체)
        """
        ...

    async def commit_entry(self, entry: JournalEntry) -> None:
        """분개 원자적 저장

        모든 항목이 함께 보이거나 전혀 보이지 않아야 함.
        """
        ...

    async def get_entry(self, entry_id: str) -> JournalEntry | None:
        """분개 단건 조회"""
        ...

    # -------------------------------------------------------------------------
    # 스냅샷
    # -------------------------------------------------------------------------

    def snapshot(self) -> AsyncContextManager[None]:
        """읽기 스냅샷

        구간 안의 모든 조회가 같은 커밋 상태를 보아야 함
        (구간 도중 commit_entry가 반영되지 않음).
        같은 태스크 안에서 중첩 가능해야 함.
        """
        ...
