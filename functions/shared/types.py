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

from enum import StrEnum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class WeightUnit(StrEnum):
    LBS = "lbs"
    KG = "kg"


class ViewStatus(StrEnum):
    """Lifecycle of a mounted profile view."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class AthleteSnapshot:
    """The cached record written by a refresh run.

    `data` is the upstream response body, stored as-is.
    """

    data: Any = None
    last_updated: Optional[str] = None


@dataclass
class PersonalBest:
    squat: Any = None
    bench: Any = None
    deadlift: Any = None
    total: Any = None
    equip: Optional[str] = None


@dataclass
class CompetitionResult:
    competition: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None
    squat: Any = None
    bench: Any = None
    deadlift: Any = None
    total: Any = None
    dots: Any = None


@dataclass
class Athlete:
    name: Optional[str] = None
    personal_best: List[PersonalBest] = field(default_factory=list)
    competition_results: List[CompetitionResult] = field(default_factory=list)


@dataclass
class PersonalBestRow:
    squat: str
    bench: str
    deadlift: str
    total: str
    equip: str


@dataclass
class CompetitionRow:
    competition: str
    date: str
    location: str
    squat: str
    bench: str
    deadlift: str
    total: str
    dots: str


@dataclass
class PowerliftingProfile:
    name: str
    unit: WeightUnit
    personal_bests: List[PersonalBestRow]
    competitions: List[CompetitionRow]
    last_updated: Optional[str] = None
    about: Optional[str] = None


@dataclass
class EventBestRow:
    event_id: str
    event: str
    single: str
    average: str
    world_rank: Optional[int] = None
    country_rank: Optional[int] = None


@dataclass
class RoundRow:
    event_id: str
    event: str
    round: str
    position: Optional[int]
    single: str
    average: str
    note: Optional[str] = None


@dataclass
class CubingCompetition:
    competition_id: str
    name: str
    rounds: List[RoundRow]


@dataclass
class SpeedcubingProfile:
    name: str
    competition_count: Optional[int]
    medals: Dict[str, int]
    personal_bests: List[EventBestRow]
    competitions: List[CubingCompetition]
    last_updated: Optional[str] = None
    about: Optional[str] = None
