"""
메모리 어댑터

DB 없이 동작하는 IPostingStore 구현체 제공.
Protocol 준수하여 SQLite 구현체와 교체 가능.
"""

from adapters.memory.posting_store import InMemoryPostingStore, MemoryState

__all__ = [
    "InMemoryPostingStore",
    "MemoryState",
]
