# -*- coding: utf-8 -*-

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Tuple

IDENTITY_CHANGED = "identity-changed"
STORAGE_MUTATED = "storage-mutated"
FOCUS_REGAINED = "focus-regained"

SIGNALS = (IDENTITY_CHANGED, STORAGE_MUTATED, FOCUS_REGAINED)

Listener = Callable[..., None]


class SignalBus:
    """
    进程内的信号总线（替代浏览器的 storage 事件 + 自定义 auth:changed 事件）。

    - 只允许 SIGNALS 中的具名信号
    - publish 在派发过程中被再次调用时只入队，由最外层循环按顺序派发，
      监听者不会被重入调用
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {name: [] for name in SIGNALS}
        self._queue: Deque[Tuple[str, Dict[str, Any]]] = deque()
        self._dispatching = False
        self._lock = threading.RLock()

    def subscribe(self, signal: str, listener: Listener) -> Callable[[], None]:
        if signal not in self._listeners:
            raise ValueError(f"Unknown signal: {signal}")
        with self._lock:
            self._listeners[signal].append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners[signal]:
                    self._listeners[signal].remove(listener)

        return _unsubscribe

    def publish(self, signal: str, **payload: Any) -> None:
        if signal not in self._listeners:
            raise ValueError(f"Unknown signal: {signal}")
        with self._lock:
            self._queue.append((signal, payload))
            if self._dispatching:
                return
            self._dispatching = True
        try:
            while True:
                with self._lock:
                    if not self._queue:
                        break
                    name, data = self._queue.popleft()
                    listeners = list(self._listeners[name])
                for listener in listeners:
                    listener(**data)
        finally:
            with self._lock:
                self._dispatching = False
                self._queue.clear()
