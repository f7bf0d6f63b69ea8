import threading
import time


class TTLCache:
    """In-memory keyed cache with a fixed time-to-live per entry.

    Created once at service start and injected into the orchestrator; nothing
    survives a restart. There is no size bound or LRU policy, the key space is
    bounded by state x district x query type. Entries are replaced wholesale
    under a lock, so racing writers never leave a torn entry (last set wins).
    """

    def __init__(self, ttl=600, clock=time.monotonic):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at < self.ttl:
                return value
            del self._entries[key]
            return None

    def set(self, key, value):
        entry = (self._clock(), value)
        with self._lock:
            self._entries[key] = entry

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)
