
import threading
from contextlib import contextmanager
from typing import Dict, Iterator
from src.context import RankingScope
from src.errors import RankingBusyError

class ScopeLocks:
    """
    ランキングスコープ (collection × ranking_name × user) ごとに
    挿入・削除セッションを直列化するロックのレジストリ。
    異なるスコープ同士は互いにブロックしない。
    """
    def __init__(self, timeout_seconds: float = 5.0):
        self.timeout_seconds = timeout_seconds
        self._locks: Dict[RankingScope, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, scope: RankingScope) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(scope)
            if lock is None:
                lock = threading.Lock()
                self._locks[scope] = lock
            return lock

    @contextmanager
    def hold(self, scope: RankingScope) -> Iterator[None]:
        lock = self._lock_for(scope)
        if not lock.acquire(timeout=self.timeout_seconds):
            raise RankingBusyError(scope, self.timeout_seconds)
        try:
            yield
        finally:
            lock.release()
