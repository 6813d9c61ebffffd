from __future__ import annotations

import os
import threading
import time
from typing import Callable, Dict

# 2025-01-01T00:00:00Z
EPOCH_MS = 1_735_689_600_000
NODE_BITS = 10
SEQUENCE_BITS = 12
MAX_NODE_ID = (1 << NODE_BITS) - 1
SEQUENCE_MASK = (1 << SEQUENCE_BITS) - 1


class SnowflakeGenerator:
    """Time-ordered 63-bit ids: milliseconds since EPOCH_MS, node id, per-ms sequence."""

    def __init__(self, node_id: int = 1, clock: Callable[[], float] = time.time) -> None:
        if not 0 <= node_id <= MAX_NODE_ID:
            raise ValueError(f"node_id must be between 0 and {MAX_NODE_ID}")
        self.node_id = node_id
        self._clock = clock
        self._lock = threading.Lock()
        self._last_ms = -1
        self._sequence = 0

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _next_ms(self, after: int) -> int:
        now = self._now_ms()
        while now <= after:
            time.sleep(0.0001)
            now = self._now_ms()
        return now

    def next_id(self) -> int:
        with self._lock:
            now = self._now_ms()
            if now < self._last_ms:
                # clock went backwards
                now = self._next_ms(self._last_ms)
            if now == self._last_ms:
                self._sequence = (self._sequence + 1) & SEQUENCE_MASK
                if self._sequence == 0:
                    now = self._next_ms(now)
            else:
                self._sequence = 0
            self._last_ms = now
            return ((now - EPOCH_MS) << (NODE_BITS + SEQUENCE_BITS)) | (self.node_id << SEQUENCE_BITS) | self._sequence


_generators: Dict[int, SnowflakeGenerator] = {}
_generators_lock = threading.Lock()


def default_node_id() -> int:
    return int(os.getenv("ID_NODE", "1"))


def generate_id(node_id: int | None = None) -> int:
    node = default_node_id() if node_id is None else node_id
    with _generators_lock:
        generator = _generators.get(node)
        if generator is None:
            generator = _generators[node] = SnowflakeGenerator(node_id=node)
    return generator.next_id()
