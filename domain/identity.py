"""Entity identity generation"""
import threading

from domain.exceptions import IdSpaceExhaustedError

MAX_ID = 2**31 - 1


class IdGenerator:
    """Monotonic, thread-safe ID counter for one entity type.

    The first ID handed out is ``start + 1``. IDs that enter the system from
    outside (imports, snapshot loads) must be reported through
    :meth:`observe` so freshly created entities never collide with them.
    """

    def __init__(self, entity_type: str, start: int = 0, limit: int = MAX_ID):
        self.entity_type = entity_type
        self._limit = limit
        self._last = start
        self._lock = threading.Lock()

    @property
    def last_assigned(self) -> int:
        return self._last

    def next_id(self) -> int:
        with self._lock:
            if self._last >= self._limit:
                raise IdSpaceExhaustedError(f"{self.entity_type} ID limit exceeded.")
            self._last += 1
            return self._last

    def observe(self, used_id: int) -> None:
        with self._lock:
            if used_id > self._last:
                self._last = used_id

    def reset(self, value: int = 0) -> None:
        with self._lock:
            self._last = value


class IdGenerators:
    """One generator per entity type, built once and injected where needed"""

    def __init__(self):
        self.clients = IdGenerator("Client")
        self.owners = IdGenerator("Owner")
        self.accommodations = IdGenerator("Accommodation")
        self.rooms = IdGenerator("Room")
        self.reservations = IdGenerator("Reservation")
        self.payments = IdGenerator("Payment")
