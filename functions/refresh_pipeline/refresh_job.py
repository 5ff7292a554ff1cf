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

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from refresh_pipeline import fetch_utils
from shared.constants import (
    CLOSE_POWERLIFTING_API_URL,
    CLOSE_POWERLIFTING_USER,
    WCA_PERSON_API_URL,
)
from shared.firebase_constants import (
    CLOSEPOWERLIFTING_API_KEY_SECRET,
    POWERLIFTING_USER_DATA_PATH,
    SNAPSHOT_DATA_KEY,
    SNAPSHOT_LAST_UPDATED_KEY,
    SPEEDCUBING_WCA_DATA_PATH,
)
from shared.snapshot_store import SnapshotStore
from shared.types import AthleteSnapshot
import logging

logger = logging.getLogger(__name__)


class RefreshError(Exception):
    """Base class for refresh failures raised before the upstream call."""


class MissingCredentialError(RefreshError):
    pass


@dataclass(frozen=True)
class RefreshSource:
    """An upstream endpoint and the store path its response is cached at."""

    name: str
    url: str
    store_path: str
    secret_name: Optional[str] = None

    @property
    def requires_credential(self) -> bool:
        return self.secret_name is not None


def close_powerlifting_source(user: str = CLOSE_POWERLIFTING_USER) -> RefreshSource:
    return RefreshSource(
        name="close_powerlifting",
        url=CLOSE_POWERLIFTING_API_URL.format(user=user),
        store_path=POWERLIFTING_USER_DATA_PATH,
        secret_name=CLOSEPOWERLIFTING_API_KEY_SECRET,
    )


def wca_source(person_id: str) -> RefreshSource:
    return RefreshSource(
        name="wca",
        url=WCA_PERSON_API_URL.format(person_id=person_id),
        store_path=SPEEDCUBING_WCA_DATA_PATH,
    )


def utc_timestamp() -> str:
    """Current time as ISO-8601 UTC with millisecond precision, e.g. 2025-01-01T02:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def snapshot_to_record(snapshot: AthleteSnapshot) -> dict:
    # The upstream payload is opaque, so keys are not converted.
    return {
        SNAPSHOT_DATA_KEY: snapshot.data,
        SNAPSHOT_LAST_UPDATED_KEY: snapshot.last_updated,
    }


def refresh_snapshot(
    source: RefreshSource,
    store: SnapshotStore,
    api_key: Optional[str] = None,
    fetch: Optional[Callable[[str, Optional[str]], Any]] = None,
    now: Callable[[], str] = utc_timestamp,
) -> AthleteSnapshot:
    """
    Fetches `source` once and overwrites its store path with the response.

    - Raises `MissingCredentialError` without any network call when the
      source needs a credential and `api_key` is empty.
    - Any upstream or store error is re-raised for the caller to log; the
      store is only written after a successful fetch.

    Returns:
        AthleteSnapshot: The snapshot that was written.
    """
    try:
        if source.requires_credential and not api_key:
            raise MissingCredentialError(f"{source.secret_name} secret is not set")

        fetch = fetch or fetch_utils.fetch_json
        logger.info("Fetching %s data from %s", source.name, source.url)
        body = fetch(source.url, api_key if source.requires_credential else None)

        snapshot = AthleteSnapshot(data=body, last_updated=now())
        store.set(source.store_path, snapshot_to_record(snapshot))
        logger.info(
            "Stored %s snapshot at %s (lastUpdated=%s)",
            source.name,
            source.store_path,
            snapshot.last_updated,
        )
        return snapshot
    except Exception as e:
        # Callers log the failure with their own logger.
        logger.debug("Refreshing %s from %s failed: %s", source.name, source.url, e)
        raise
