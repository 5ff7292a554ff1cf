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

from typing import Any, Optional

import requests

REQUEST_TIMEOUT = 30  # seconds


def fetch_json(url: str, bearer_token: Optional[str] = None) -> Any:
    """
    Fetches a JSON document with a single GET request.

    Args:
        url (str): The endpoint to fetch.
        bearer_token (Optional[str]): Sent as `Authorization: Bearer <token>` when given.

    Returns:
        Any: The decoded response body, raises error otherwise.
    """
    headers = {}
    if bearer_token:
        headers["Authorization"] = f"Bearer {bearer_token}"

    response = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()

    return response.json()
