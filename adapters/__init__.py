"""
어댑터 레이어

외부 저장소(SQLite, 메모리)와의 연동을 담당.
Protocol 기반 인터페이스로 저장소 교체 가능.
"""

from adapters.interfaces import IPostingStore

__all__ = [
    "IPostingStore",
]
