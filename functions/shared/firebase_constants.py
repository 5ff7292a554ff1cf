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

# Realtime Database paths and secret names shared by the functions and the views.

POWERLIFTING_USER_DATA_PATH = "powerlifting/user_data"
SPEEDCUBING_WCA_DATA_PATH = "speedcubing/wca_data"

CLOSEPOWERLIFTING_API_KEY_SECRET = "CLOSEPOWERLIFTING_API_KEY"
WCA_PERSON_ID_PARAM = "WCA_PERSON_ID"

# Snapshot envelope keys, camelCase to match what the web client reads.
SNAPSHOT_DATA_KEY = "data"
SNAPSHOT_LAST_UPDATED_KEY = "lastUpdated"
