"""
복식부기 타입 정의

AccountType, JournalSide 등 Ledger 시스템에서 사용하는 Enum 및
계정 유형별 정상 잔액(normal balance) 테이블 정의
"""

from enum import Enum


class AccountType(str, Enum):
    """계정 유형

    복식부기의 5대 계정 유형.
    str을 상속하여 JSON/DB 직렬화 가능.
    추상 기반 유형은 존재하지 않음 (5개 중 하나만 가능).
    """

    ASSET = "ASSET"  # 자산
    LIABILITY = "LIABILITY"  # 부채
    EQUITY = "EQUITY"  # 자본
    REVENUE = "REVENUE"  # 수익
    EXPENSE = "EXPENSE"  # 비용


class JournalSide(str, Enum):
    """분개 방향 (차변/대변)"""

    DEBIT = "DEBIT"  # 차변 (자산 증가, 비용 증가)
    CREDIT = "CREDIT"  # 대변 (부채/자본/수익 증가)

    @property
    def opposite(self) -> "JournalSide":
        """반대 방향"""
        return JournalSide.CREDIT if self is JournalSide.DEBIT else JournalSide.DEBIT


# 계정 유형별 정상 잔액 방향
#
#   TYPE        | NORMAL BALANCE
#   ------------+---------------
#   ASSET       | DEBIT
#   LIABILITY   | CREDIT
#   EQUITY      | CREDIT
#   REVENUE     | CREDIT
#   EXPENSE     | DEBIT
NORMAL_BALANCE: dict[AccountType, JournalSide] = {
    AccountType.ASSET: JournalSide.DEBIT,
    AccountType.LIABILITY: JournalSide.CREDIT,
    AccountType.EQUITY: JournalSide.CREDIT,
    AccountType.REVENUE: JournalSide.CREDIT,
    AccountType.EXPENSE: JournalSide.DEBIT,
}


def normal_side(account_type: AccountType, contra: bool = False) -> JournalSide:
    """계정의 정상 잔액 방향

    Contra 계정은 유형의 정상 잔액 방향이 반전됨.
    예: 감가상각누계액(contra ASSET)은 CREDIT 정상 잔액.

    Args:
        account_type: 계정 유형
        contra: Contra 계정 여부

    Returns:
        잔액이 증가하는 방향
    """
    side = NORMAL_BALANCE[account_type]
    return side.opposite if contra else side


# 시산표 계산 순서 (Asset − (Liability + Equity + Revenue − Expense))
TRIAL_BALANCE_ORDER: tuple[AccountType, ...] = (
    AccountType.ASSET,
    AccountType.LIABILITY,
    AccountType.EQUITY,
    AccountType.REVENUE,
    AccountType.EXPENSE,
)
