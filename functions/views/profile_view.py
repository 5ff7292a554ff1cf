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
A store-backed view: holds the latest value of one store path for as long as
it is mounted, and renders it on demand with a shaping function.
"""

import threading
from typing import Any, Callable, Generic, Optional, TypeVar

from shared.constants import NO_DATA_MESSAGE
from shared.snapshot_store import SnapshotStore, Subscription
from shared.types import ViewStatus
import logging

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
OptionsT = TypeVar("OptionsT")


class ProfileView(Generic[OptionsT, ModelT]):
    """
    Subscribes to `path` on mount and releases the subscription on unmount.

    Each value delivered by the store replaces the view's state wholesale:
    - a record moves the view to READY,
    - no record (None) moves it to ERROR, or to READY with a None value
      when `absent_is_error` is False (the shape function renders it empty),
    - a listener error moves it to ERROR.
    Callbacks that arrive after unmount are ignored.

    Usable as a context manager to scope the subscription:

        with ProfileView(store, path, build_powerlifting_profile) as view:
            profile = view.render(options)
    """

    def __init__(
        self,
        store: SnapshotStore,
        path: str,
        shape: Callable[[Any, Optional[OptionsT]], ModelT],
        on_change: Optional[Callable[["ProfileView"], None]] = None,
        absent_is_error: bool = True,
    ):
        self.store = store
        self.path = path
        self._shape = shape
        self._on_change = on_change
        self._absent_is_error = absent_is_error
        self._lock = threading.Lock()
        self._subscription: Optional[Subscription] = None
        self._mounted = False
        self._status = ViewStatus.LOADING
        self._value: Any = None
        self._error: Optional[str] = None

    @property
    def status(self) -> ViewStatus:
        return self._status

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> "ProfileView":
        if self._mounted:
            return self
        with self._lock:
            self._mounted = True
            self._status = ViewStatus.LOADING
            self._value = None
            self._error = None
        self._subscription = self.store.listen(self.path, self._on_value, self._on_error)
        return self

    def unmount(self) -> None:
        with self._lock:
            self._mounted = False
            subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.close()

    def __enter__(self) -> "ProfileView":
        return self.mount()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    def _on_value(self, value: Any) -> None:
        with self._lock:
            if not self._mounted:
                return
            if value is None and self._absent_is_error:
                self._status = ViewStatus.ERROR
                self._value = None
                self._error = NO_DATA_MESSAGE
            else:
                self._status = ViewStatus.READY
                self._value = value
                self._error = None
        self._changed()

    def _on_error(self, error: Exception) -> None:
        with self._lock:
            if not self._mounted:
                return
            logger.error("Listener for %s failed: %s", self.path, error)
            self._status = ViewStatus.ERROR
            self._value = None
            self._error = str(error) or error.__class__.__name__
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    def render(self, options: Optional[OptionsT] = None) -> Optional[ModelT]:
        """The shaped model for the current value, or None unless READY."""
        with self._lock:
            if self._status != ViewStatus.READY:
                return None
            value = self._value
        return self._shape(value, options)
