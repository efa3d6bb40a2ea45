"""
core/logging.py 테스트
"""

import logging
from pathlib import Path

import pytest

from core.constants import Paths
from core.logging import NOISY_LOGGERS, get_log_file_path, setup_logging


class TestSetupLogging:
    """setup_logging 테스트"""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root_logger = logging.getLogger()
        handlers = list(root_logger.handlers)
        level = root_logger.level
        yield
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        for handler in handlers:
            root_logger.addHandler(handler)
        root_logger.setLevel(level)

    def test_creates_log_file(self, tmp_path: Path) -> None:
        """로그 파일 생성 및 핸들러 설정"""
        root_logger = setup_logging("test", log_dir=tmp_path / "logs")

        assert (tmp_path / "logs" / "test.log").exists()
        assert len(root_logger.handlers) == 2

    def test_levels(self, tmp_path: Path) -> None:
        """콘솔/파일 레벨 분리"""
        root_logger = setup_logging(
            "test",
            console_level=logging.WARNING,
            file_level=logging.DEBUG,
            log_dir=tmp_path,
        )

        levels = sorted(handler.level for handler in root_logger.handlers)
        assert levels == [logging.DEBUG, logging.WARNING]

    def test_no_duplicate_handlers(self, tmp_path: Path) -> None:
        """여러 번 호출해도 핸들러 중복 없음"""
        setup_logging("test", log_dir=tmp_path)
        root_logger = setup_logging("test", log_dir=tmp_path)

        assert len(root_logger.handlers) == 2

    def test_noisy_loggers_quieted(self, tmp_path: Path) -> None:
        """불필요한 로거는 WARNING"""
        setup_logging("test", log_dir=tmp_path)

        for logger_name in NOISY_LOGGERS:
            assert logging.getLogger(logger_name).level == logging.WARNING


class TestGetLogFilePath:
    """get_log_file_path 테스트"""

    def test_default_dir(self) -> None:
        """기본 디렉토리"""
        assert get_log_file_path() == Paths.LOGS_DIR / "ledger.log"

    def test_custom_dir(self, tmp_path: Path) -> None:
        """지정 디렉토리"""
        assert get_log_file_path("worker", tmp_path) == tmp_path / "worker.log"
