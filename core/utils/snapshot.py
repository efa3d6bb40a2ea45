"""
읽기 스냅샷 가드

저장소의 쓰기 잠금을 읽기 구간 동안 점유하여,
여러 번의 조회가 모두 같은 커밋 상태를 보도록 함.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class SnapshotGuard:
    """쓰기 잠금 기반 읽기 스냅샷

    같은 태스크 안에서는 중첩 사용 가능 (잔액 → 유형 합계 → 시산표).
    스냅샷을 점유한 태스크는 같은 잠금으로 쓰기를 시도하면 안 됨.

    Args:
        lock: 저장소의 쓰기 잠금

    사용 예시:
    ```python
    guard = SnapshotGuard(self._write_lock)

    async with guard.hold():
        debits = await ...
        credits = await ...
    ```
    """

    def __init__(self, lock: asyncio.Lock):
        self._lock = lock
        self._owner: asyncio.Task | None = None

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[None]:
        """스냅샷 구간 (이 구간 동안 커밋 대기)"""
        task = asyncio.current_task()
        if task is not None and self._owner is task:
            yield
            return

        async with self._lock:
            self._owner = task
            try:
                yield
            finally:
                self._owner = None
