# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

"""
Snapshot store abstraction over the Firebase Realtime Database and an
in-memory implementation for tests and local runs.

Both expose the same two capabilities: overwrite the value at a path, and
subscribe to a path to receive every new value (or an error) until the
returned subscription is closed.
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

import firebase_admin
from firebase_admin import db, exceptions

logger = logging.getLogger(__name__)

ValueCallback = Callable[[Any], None]
ErrorCallback = Callable[[Exception], None]


class Subscription(Protocol):
    def close(self) -> None:
        ...


class SnapshotStore(Protocol):
    """Defines the operations the refresh job and the views need from the store."""

    def set(self, path: str, value: dict) -> None:
        ...

    def get(self, path: str) -> Any:
        ...

    def listen(
        self, path: str, on_value: ValueCallback, on_error: ErrorCallback
    ) -> Subscription:
        ...


@dataclass
class _InMemorySubscription:
    store: "InMemorySnapshotStore"
    path: str
    on_value: ValueCallback
    on_error: ErrorCallback
    closed: bool = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.store._remove_listener(self)


@dataclass
class InMemorySnapshotStore:
    """Test double for the Realtime Database. Listeners fire synchronously."""

    values: dict = field(default_factory=dict)
    writes: list = field(default_factory=list)

    def __post_init__(self):
        self._listeners: list[_InMemorySubscription] = []
        self._lock = threading.Lock()

    def set(self, path: str, value: dict) -> None:
        stored = copy.deepcopy(value)
        with self._lock:
            self.values[path] = stored
            self.writes.append((path, copy.deepcopy(stored)))
        self._notify(path, stored)

    def delete(self, path: str) -> None:
        with self._lock:
            self.values.pop(path, None)
        self._notify(path, None)

    def get(self, path: str) -> Any:
        with self._lock:
            return copy.deepcopy(self.values.get(path))

    def listen(
        self, path: str, on_value: ValueCallback, on_error: ErrorCallback
    ) -> Subscription:
        subscription = _InMemorySubscription(self, path, on_value, on_error)
        with self._lock:
            self._listeners.append(subscription)
        # Like the Firebase SDKs, a new listener immediately receives the current value.
        on_value(self.get(path))
        return subscription

    def fail(self, path: str, error: Exception) -> None:
        """Reports `error` to every listener on `path`."""
        for subscription in self._listeners_for(path):
            subscription.on_error(error)

    def listener_count(self, path: str) -> int:
        return len(self._listeners_for(path))

    def _listeners_for(self, path: str) -> list[_InMemorySubscription]:
        with self._lock:
            return [s for s in self._listeners if s.path == path and not s.closed]

    def _notify(self, path: str, value: Any) -> None:
        for subscription in self._listeners_for(path):
            subscription.on_value(copy.deepcopy(value))

    def _remove_listener(self, subscription: _InMemorySubscription) -> None:
        with self._lock:
            if subscription in self._listeners:
                self._listeners.remove(subscription)


class _ClosedSubscription:
    def close(self) -> None:
        pass


def _get_or_initialize_app(database_url: Optional[str]) -> firebase_admin.App:
    try:
        return firebase_admin.get_app()
    except ValueError:
        options = {"databaseURL": database_url} if database_url else None
        return firebase_admin.initialize_app(options=options)


@dataclass
class RealtimeDbSnapshotStore:
    """
    Snapshot store backed by the Firebase Realtime Database.

    Uses the default Firebase app when one is already initialized (as in
    Cloud Functions), otherwise initializes it with `database_url`.

    Only failures while opening a listener or re-reading a record reach
    `on_error`. The SDK runs the event stream on its own thread and that
    thread exits silently if the stream breaks later, so a view keeps its
    last value with no further updates until it is mounted again.
    """

    database_url: Optional[str] = None
    app: Optional[firebase_admin.App] = None

    def __post_init__(self):
        if self.app is None:
            self.app = _get_or_initialize_app(self.database_url)

    def _reference(self, path: str) -> db.Reference:
        return db.reference(path, app=self.app)

    def set(self, path: str, value: dict) -> None:
        self._reference(path).set(value)

    def get(self, path: str) -> Any:
        return self._reference(path).get()

    def listen(
        self, path: str, on_value: ValueCallback, on_error: ErrorCallback
    ) -> Subscription:
        reference = self._reference(path)

        def _on_event(event: db.Event) -> None:
            try:
                # Only a root "put" carries the whole record; anything else
                # is a partial update, so re-read the full value.
                if event.event_type == "put" and event.path == "/":
                    value = event.data
                else:
                    value = reference.get()
            except exceptions.FirebaseError as e:
                logger.error("Failed to read %s after change: %s", path, e)
                on_error(e)
                return
            on_value(value)

        try:
            return reference.listen(_on_event)
        except exceptions.FirebaseError as e:
            logger.error("Failed to listen to %s: %s", path, e)
            on_error(e)
            return _ClosedSubscription()
