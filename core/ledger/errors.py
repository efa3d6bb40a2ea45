"""
Ledger 도메인 에러

계정 생성, 분개 기록 시 동기적으로 발생하는 검증 에러.
잔액 조회는 데이터 무결성을 이유로 에러를 발생시키지 않음.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Ledger 에러 기반 클래스"""
    pass


class DuplicateNameError(LedgerError):
    """이미 사용 중인 계정 이름

    호출자가 다른 이름을 선택하면 복구 가능.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Account name already in use: {name!r}")


class InvalidAccountTypeError(LedgerError):
    """5대 계정 유형이 아닌 유형으로 계정 생성 시도

    프로그래밍 오류. 재시도 대상 아님.
    """

    def __init__(self, account_type: object):
        self.account_type = account_type
        super().__init__(
            f"Invalid account type: {account_type!r}. "
            "Expected one of ASSET, LIABILITY, EQUITY, REVENUE, EXPENSE"
        )


class InvalidPostingError(LedgerError):
    """분개 구조 검증 실패 기반 클래스

    어떤 항목도 기록되지 않은 상태에서 발생 (부분 커밋 없음).
    """
    pass


class EmptyPostingsError(InvalidPostingError):
    """분개 항목이 없음"""

    def __init__(self) -> None:
        super().__init__("Transaction has no postings")


class NonPositiveAmountError(InvalidPostingError):
    """금액이 0 이하이거나 유효하지 않음"""

    def __init__(self, amount: object, account_id: str | None = None):
        self.amount = amount
        self.account_id = account_id
        super().__init__(f"Posting amount must be a positive decimal, got {amount!r}")


class InvalidSideError(InvalidPostingError):
    """DEBIT/CREDIT가 아닌 방향"""

    def __init__(self, side: object):
        self.side = side
        super().__init__(f"Posting side must be DEBIT or CREDIT, got {side!r}")


class InvalidPostingFormatError(InvalidPostingError):
    """지원하지 않는 분개 항목 형식"""

    def __init__(self, posting: object):
        self.posting = posting
        super().__init__(f"Unsupported posting format: {posting!r}")


class InvalidDescriptionError(InvalidPostingError):
    """적요가 문자열이 아님"""

    def __init__(self, description: object):
        self.description = description
        super().__init__(f"Transaction description must be a string, got {description!r}")


class UnknownAccountError(InvalidPostingError):
    """존재하지 않는 계정 참조"""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Unknown account: {account_id!r}")


class UnbalancedTransactionError(InvalidPostingError):
    """차변 합계 != 대변 합계"""

    def __init__(self, debit_total: Decimal, credit_total: Decimal):
        self.debit_total = debit_total
        self.credit_total = credit_total
        super().__init__(
            f"Unbalanced transaction: debits {debit_total} != credits {credit_total}"
        )


class UndefinedOperationError(LedgerError):
    """해당 대상에 정의되지 않은 연산"""
    pass


class RequiresWholeLedgerError(UndefinedOperationError):
    """시산표는 전체 원장 단위 개념 (계정 유형 단위로 요청 불가)"""

    def __init__(self, account_type: object):
        self.account_type = account_type
        super().__init__(
            f"Trial balance is defined for the whole ledger, not for {account_type}"
        )
