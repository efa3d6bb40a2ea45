"""
Ledger 도메인 모델

계정(Account)과 조회 결과(PostingRecord) 정의
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from uuid import uuid4

from core.ledger.errors import InvalidAccountTypeError
from core.ledger.types import AccountType, JournalSide, normal_side


def coerce_account_type(value: AccountType | str) -> AccountType:
    """계정 유형 변환

    "asset", "ASSET", AccountType.ASSET 모두 허용.
    5대 유형이 아니면 (추상 기반 "ACCOUNT" 포함) 에러.

    Raises:
        InvalidAccountTypeError: 유효하지 않은 유형
    """
    if isinstance(value, AccountType):
        return value
    if isinstance(value, str):
        try:
            return AccountType(value.strip().upper())
        except ValueError:
            pass
    raise InvalidAccountTypeError(value)


@dataclass(frozen=True)
class Account:
    """원장 계정

    유형(account_type)은 생성 후 변경 불가.
    이름 변경만 허용되며, 이름 유일성은 저장소가 보장.
    """

    account_id: str
    name: str
    account_type: AccountType
    contra: bool = False

    @property
    def normal_side(self) -> JournalSide:
        """정상 잔액 방향 (contra 반영)"""
        return normal_side(self.account_type, self.contra)

    @classmethod
    def create(
        cls,
        account_type: AccountType | str,
        name: str,
        contra: bool = False,
    ) -> "Account":
        """새 계정 생성 (ID 자동 발급)

        Raises:
            InvalidAccountTypeError: 5대 유형이 아닌 경우
            ValueError: 이름이 비어 있는 경우
        """
        account_type = coerce_account_type(account_type)
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            raise ValueError("Account name must not be empty")

        return cls(
            account_id=str(uuid4()),
            name=name,
            account_type=account_type,
            contra=bool(contra),
        )

    def renamed(self, name: str) -> "Account":
        """이름만 바꾼 사본"""
        name = name.strip()
        if not name:
            raise ValueError("Account name must not be empty")
        return replace(self, name=name)


@dataclass(frozen=True)
class PostingRecord:
    """저장소 조회 결과 - 분개 항목 1건

    잔액 계산에 필요한 최소 정보 (거래일, 금액).
    """

    entry_id: str
    entry_date: date
    amount: Decimal
