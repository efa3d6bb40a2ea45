"""
설정 로더

ledger.yaml 로드 및 원장 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import PROJECT_ROOT, Defaults, Paths


@dataclass(frozen=True)
class LedgerSettings:
    """원장 설정 (ledger.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    db_path: Path
    end_date_grace_days: int | None = Defaults.END_DATE_GRACE_DAYS
    log_level: str = Defaults.LOG_LEVEL


class SettingsLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def _resolve_path(value: str | None) -> Path:
    """상대 경로는 프로젝트 루트 기준으로 해석"""
    if not value:
        return Paths.LEDGER_DB
    path = Path(value)
    return path if path.is_absolute() else PROJECT_ROOT / path


def load_settings(path: Path | None = None) -> LedgerSettings:
    """ledger.yaml 파일 로드

    파일 형식:
    ```yaml
    database:
      path: data/ledger.db
    balance:
      end_date_grace_days: null
    logging:
      level: INFO
    ```

    Args:
        path: ledger.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        LedgerSettings 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"ledger.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"ledger.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("ledger.yaml이 비어 있습니다")
    if not isinstance(data, dict):
        raise SettingsLoadError("ledger.yaml 최상위는 mapping이어야 합니다")

    database = data.get("database") or {}
    balance = data.get("balance") or {}
    logging_config = data.get("logging") or {}

    # 유예 기간 검증
    grace_days = balance.get("end_date_grace_days", Defaults.END_DATE_GRACE_DAYS)
    if grace_days is not None:
        if isinstance(grace_days, bool) or not isinstance(grace_days, int) or grace_days < 0:
            raise SettingsLoadError(
                f"balance.end_date_grace_days는 0 이상의 정수여야 합니다: {grace_days!r}"
            )

    # 로그 레벨 검증
    log_level = str(logging_config.get("level", Defaults.LOG_LEVEL)).upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise SettingsLoadError(f"유효하지 않은 로그 레벨입니다: '{log_level}'")

    return LedgerSettings(
        db_path=_resolve_path(database.get("path")),
        end_date_grace_days=grace_days,
        log_level=log_level,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    ledger.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: LedgerSettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            type(self)._settings = load_settings(settings_path)

    @property
    def db_path(self) -> Path:
        """원장 DB 경로"""
        assert self._settings is not None
        return self._settings.db_path

    @property
    def end_date_grace_days(self) -> int | None:
        """종료일 유예 일수"""
        assert self._settings is not None
        return self._settings.end_date_grace_days

    @property
    def log_level(self) -> str:
        """로그 레벨"""
        assert self._settings is not None
        return self._settings.log_level

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._settings = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: ledger.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
