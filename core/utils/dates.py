"""
기간(날짜 범위) 유틸리티

잔액 계산에 쓰이는 [start, end] 포함 구간 정의.
구간은 불변 값으로 호출마다 인자로 전달됨 (인스턴스 상태로 보관하지 않음).
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta


def to_date(value: date | datetime | str) -> date:
    """date/datetime/ISO 문자열을 date로 변환

    Args:
        value: date, datetime 또는 "YYYY-MM-DD" 문자열

    Returns:
        date 객체

    Raises:
        ValueError: 문자열 형식이 잘못된 경우
        TypeError: 지원하지 않는 타입인 경우

    Example:
        >>> to_date("2024-01-31")
        datetime.date(2024, 1, 31)
    """
    # datetime은 date의 하위 클래스이므로 먼저 검사
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise TypeError(f"Unsupported date value: {value!r}")


def today() -> date:
    """오늘 날짜 (로컬 기준)"""
    return date.today()


@dataclass(frozen=True)
class DateRange:
    """거래일 기준 포함 구간 [start, end]

    start/end 중 None인 쪽은 무한대로 취급.
    둘 다 None이면 전체 기간 (필터링 없음).
    """

    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError(f"start {self.start} is after end {self.end}")

    @property
    def is_unbounded(self) -> bool:
        """전체 기간 여부"""
        return self.start is None and self.end is None

    def contains(self, value: date) -> bool:
        """날짜가 구간에 포함되는지 확인 (양 끝 포함)"""
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True

    @classmethod
    def of(
        cls,
        start_date: date | datetime | str | None = None,
        end_date: date | datetime | str | None = None,
        grace_days: int | None = None,
        reference_date: date | None = None,
    ) -> "DateRange":
        """호출 인자로부터 구간 생성

        grace_days가 설정된 경우, 시작일만 주어지고 종료일이 없으면
        종료일을 reference_date(기본: 오늘) + grace_days 로 채움.
        선일자(forward-dated) 분개를 유예 기간만큼 포함시키기 위한 옵션.

        Args:
            start_date: 시작일 (None이면 제한 없음)
            end_date: 종료일 (None이면 제한 없음)
            grace_days: 종료일 유예 일수 (None이면 사용 안 함)
            reference_date: 유예 계산 기준일 (테스트용)

        Returns:
            DateRange 인스턴스
        """
        start = to_date(start_date) if start_date is not None else None
        end = to_date(end_date) if end_date is not None else None

        if grace_days is not None and start is not None and end is None:
            base = reference_date if reference_date is not None else today()
            end = base + timedelta(days=grace_days)

        return cls(start=start, end=end)


# 전체 기간
UNBOUNDED = DateRange()
