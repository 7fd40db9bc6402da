from __future__ import annotations

import threading


class ActiveDownloadRegistry:
    """Filenames with a download response currently in flight."""

    def __init__(self) -> None:
        self._names: set[str] = set()
        self._lock = threading.Lock()

    def claim(self, filename: str) -> bool:
        with self._lock:
            if filename in self._names:
                return False
            self._names.add(filename)
            return True

    def release(self, filename: str) -> None:
        with self._lock:
            self._names.discard(filename)

    def snapshot(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._names)

    def __contains__(self, filename: object) -> bool:
        with self._lock:
            return filename in self._names

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)


download_registry = ActiveDownloadRegistry()
