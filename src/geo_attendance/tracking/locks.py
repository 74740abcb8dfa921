"""
Per-employee mutual exclusion.

Check-in, check-out and pings for one employee are read-modify-write
sequences over the tracking state and the open session; they are serialised
per employee id so two concurrent check-ins cannot both succeed.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class EmployeeLocks:
    def __init__(self) -> None:
        self._locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def _get(self, employee_id: str) -> threading.RLock:
        lock = self._locks.get(employee_id)
        if lock is None:
            with self._registry_lock:
                lock = self._locks.get(employee_id)
                if lock is None:
                    lock = threading.RLock()
                    self._locks[employee_id] = lock
        return lock

    @contextmanager
    def hold(self, employee_id: str) -> Iterator[None]:
        lock = self._get(str(employee_id))
        with lock:
            yield
