"""
pytest 공통 fixture 정의

원장 엔진 테스트용 임시 디렉토리, 설정 파일, 메모리 원장 fixture
"""

import tempfile
from pathlib import Path

import pytest

from adapters.memory.posting_store import InMemoryPostingStore
from core.ledger.service import Ledger


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 ledger.yaml 파일 생성"""
    settings_content = """# 테스트용 ledger.yaml
database:
  path: data/test_ledger.db

balance:
  end_date_grace_days: 15

logging:
  level: debug
"""
    settings_path = temp_dir / "ledger.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_minimal(temp_dir: Path) -> Path:
    """기본값만 사용하는 ledger.yaml 파일 생성"""
    settings_content = """database:
  path: {path}
""".format(path=(temp_dir / "minimal.db").as_posix())
    settings_path = temp_dir / "ledger_minimal.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def memory_store() -> InMemoryPostingStore:
    """메모리 Posting 저장소"""
    return InMemoryPostingStore()


@pytest.fixture
def ledger(memory_store: InMemoryPostingStore) -> Ledger:
    """메모리 저장소 기반 Ledger"""
    return Ledger(memory_store)
