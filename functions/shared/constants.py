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

CLOSE_POWERLIFTING_USER = "calvinle"
CLOSE_POWERLIFTING_API_URL = "https://closepowerlifting.com/api/users/{user}"

WCA_PERSON_API_URL = (
    "https://raw.githubusercontent.com/robiningelbrecht/wca-rest-api/master/api/persons/{person_id}.json"
)

# Competitions before this year belong to a different lifter under the same name upstream.
COMPETITION_CUTOFF_YEAR = 2018

LB_TO_KG = 0.453592

PLACEHOLDER = "—"
NO_DATA_MESSAGE = "No data found."

MAX_RECENT_COMPETITIONS = 5

POWERLIFTING_ABOUT = (
    "Powerlifting is a strength sport consisting of three lifts: squat, bench "
    "press and deadlift. Results are pulled from Close Powerlifting and "
    "refreshed monthly."
)
SPEEDCUBING_ABOUT = (
    "Speedcubing is the practice of solving Rubik's Cubes and other twisty "
    "puzzles as fast as possible. Results are pulled from the World Cube "
    "Association REST API."
)
