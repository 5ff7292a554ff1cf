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

# Cloud functions that refresh the cached athlete snapshots in the Realtime Database.
#
# This file containing Python cloud functions must be named main.py.
# See https://cloud.google.com/run/docs/write-functions#python for more info.

# Standard library imports
from typing import Optional

# Third-party library imports
from firebase_admin import initialize_app
from firebase_functions import logger, options, scheduler_fn
from firebase_functions.params import SecretParam, StringParam

# Local application imports
from refresh_pipeline import refresh_job
from refresh_pipeline.refresh_job import RefreshSource
from shared.firebase_constants import (
    CLOSEPOWERLIFTING_API_KEY_SECRET,
    WCA_PERSON_ID_PARAM,
)
from shared.snapshot_store import RealtimeDbSnapshotStore, SnapshotStore

REFRESH_FUNCTION_TIMEOUT = 60

# 02:00 UTC on the 1st of every month.
CLOSE_POWERLIFTING_SCHEDULE = "0 2 1 * *"
# 03:00 UTC every Monday.
WCA_SCHEDULE = "0 3 * * 1"

CLOSEPOWERLIFTING_API_KEY = SecretParam(CLOSEPOWERLIFTING_API_KEY_SECRET)
WCA_PERSON_ID = StringParam(WCA_PERSON_ID_PARAM, default="")

initialize_app()


def _snapshot_store() -> SnapshotStore:
    return RealtimeDbSnapshotStore()


def _run_refresh(source: RefreshSource, api_key: Optional[str] = None) -> None:
    """
    Runs one refresh and lets any error escape, so the scheduler records
    the run as failed.
    """
    try:
        snapshot = refresh_job.refresh_snapshot(
            source, _snapshot_store(), api_key=api_key
        )
    except Exception as e:
        logger.error(
            f"Error fetching {source.name} data",
            error=str(e),
            url=source.url,
            store_path=source.store_path,
        )
        raise

    logger.info(
        f"Successfully fetched and stored {source.name} data",
        store_path=source.store_path,
        last_updated=snapshot.last_updated,
    )


@scheduler_fn.on_schedule(
    schedule=CLOSE_POWERLIFTING_SCHEDULE,
    secrets=[CLOSEPOWERLIFTING_API_KEY],
    timeout_sec=REFRESH_FUNCTION_TIMEOUT,
    memory=options.MemoryOption.MB_256,
    max_instances=1,
)
def fetch_close_powerlifting_data(event: scheduler_fn.ScheduledEvent) -> None:
    """
    Fetches the athlete from the Close Powerlifting API and overwrites
    the cached snapshot.
    """
    _run_refresh(
        refresh_job.close_powerlifting_source(),
        api_key=CLOSEPOWERLIFTING_API_KEY.value,
    )


@scheduler_fn.on_schedule(
    schedule=WCA_SCHEDULE,
    timeout_sec=REFRESH_FUNCTION_TIMEOUT,
    memory=options.MemoryOption.MB_256,
    max_instances=1,
)
def fetch_wca_data(event: scheduler_fn.ScheduledEvent) -> None:
    """Fetches the WCA person document and overwrites the cached snapshot."""
    person_id = WCA_PERSON_ID.value
    if not person_id:
        logger.error(f"{WCA_PERSON_ID_PARAM} is not set")
        raise refresh_job.RefreshError(f"{WCA_PERSON_ID_PARAM} is not set")

    _run_refresh(refresh_job.wca_source(person_id))
