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
Shapes the cached WCA person document into personal-best and recent
competition rows for the speedcubing page.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from shared.constants import MAX_RECENT_COMPETITIONS, PLACEHOLDER, SPEEDCUBING_ABOUT
from shared.types import (
    CubingCompetition,
    EventBestRow,
    RoundRow,
    SpeedcubingProfile,
)
from views.powerlifting import parse_number, parse_snapshot

EVENT_NAMES = {
    "222": "2x2",
    "333": "3x3",
    "444": "4x4",
    "555": "5x5",
    "666": "6x6",
    "777": "7x7",
    "333bf": "3x3 Blindfolded",
    "333oh": "3x3 One-Handed",
    "333ft": "3x3 With Feet",
    "clock": "Clock",
    "minx": "Megaminx",
    "pyram": "Pyraminx",
    "skewb": "Skewb",
    "sq1": "Square-1",
    "magic": "Magic",
    "mmagic": "Master Magic",
}

DISCONTINUED_EVENTS = {
    "magic": "Magic was discontinued as an official WCA event in 2012.",
    "mmagic": "Master Magic was discontinued as an official WCA event in 2012.",
}

_YEAR = re.compile(r"\d{4}")


@dataclass
class SpeedcubingViewOptions:
    show_about: bool = False
    max_competitions: int = MAX_RECENT_COMPETITIONS


def format_time(centiseconds: Any) -> str:
    """Formats a WCA time in centiseconds as "12.34" or "1:05.00"."""
    value = parse_number(centiseconds)
    if not value or value <= 0:
        return PLACEHOLDER

    total_seconds = value / 100
    if total_seconds >= 60:
        minutes = int(total_seconds // 60)
        seconds = f"{total_seconds % 60:.2f}".rjust(5, "0")
        return f"{minutes}:{seconds}"
    return f"{total_seconds:.2f}"


def event_name(event_id: str) -> str:
    return EVENT_NAMES.get(event_id, event_id)


def format_competition_name(competition_id: str) -> str:
    """Splits CamelCase and digits: "MissouriChampionship2025" -> "Missouri Championship 2025"."""
    spaced = re.sub(r"([A-Z])", r" \1", competition_id)
    spaced = re.sub(r"(\d+)", r" \1", spaced)
    return re.sub(r"\s+", " ", spaced).strip()


def competition_year(competition_id: str) -> int:
    match = _YEAR.search(competition_id)
    return int(match.group(0)) if match else 0


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _rank(entry: dict, scope: str) -> Optional[int]:
    rank = _as_dict(entry.get("rank")).get(scope)
    return rank if isinstance(rank, int) else None


def personal_best_rows(person: dict) -> List[EventBestRow]:
    """One row per ranked single, joined with the average for the same event."""
    rank = _as_dict(person.get("rank"))
    singles = [s for s in _as_list(rank.get("singles")) if isinstance(s, dict)]
    averages = {
        a.get("eventId"): a.get("best")
        for a in _as_list(rank.get("averages"))
        if isinstance(a, dict)
    }

    rows = []
    for single in singles:
        event_id = str(single.get("eventId", ""))
        rows.append(
            EventBestRow(
                event_id=event_id,
                event=event_name(event_id),
                single=format_time(single.get("best")),
                average=format_time(averages.get(event_id)),
                world_rank=_rank(single, "world"),
                country_rank=_rank(single, "country"),
            )
        )
    return rows


def _round_rows(event_results: Dict[str, Any]) -> List[RoundRow]:
    rows = []
    for event_id, rounds in event_results.items():
        for result in _as_list(rounds):
            if not isinstance(result, dict):
                continue
            position = result.get("position")
            rows.append(
                RoundRow(
                    event_id=event_id,
                    event=event_name(event_id),
                    round=str(result.get("round") or PLACEHOLDER),
                    position=position if isinstance(position, int) else None,
                    single=format_time(result.get("best")),
                    average=format_time(result.get("average")),
                    note=DISCONTINUED_EVENTS.get(event_id),
                )
            )
    return rows


def recent_competitions(
    person: dict, limit: int = MAX_RECENT_COMPETITIONS
) -> List[CubingCompetition]:
    """
    The `limit` most recent competitions by the year in their id. Ids
    without results still count towards the limit and are skipped.
    """
    competition_ids = [c for c in _as_list(person.get("competitionIds")) if isinstance(c, str)]
    results = _as_dict(person.get("results"))
    ordered = sorted(competition_ids, key=competition_year, reverse=True)[:limit]

    competitions = []
    for competition_id in ordered:
        event_results = results.get(competition_id)
        if not isinstance(event_results, dict):
            continue
        competitions.append(
            CubingCompetition(
                competition_id=competition_id,
                name=format_competition_name(competition_id),
                rounds=_round_rows(event_results),
            )
        )
    return competitions


def build_speedcubing_profile(
    value: Any, options: Optional[SpeedcubingViewOptions] = None
) -> SpeedcubingProfile:
    options = options or SpeedcubingViewOptions()
    snapshot = parse_snapshot(value)
    person = _as_dict(snapshot.data)

    medals = _as_dict(person.get("medals"))
    count = person.get("numberOfCompetitions")

    return SpeedcubingProfile(
        name=str(person.get("name") or PLACEHOLDER),
        competition_count=count if isinstance(count, int) and count > 0 else None,
        medals={
            medal: medals.get(medal) if isinstance(medals.get(medal), int) else 0
            for medal in ("gold", "silver", "bronze")
        },
        personal_bests=personal_best_rows(person),
        competitions=recent_competitions(person, options.max_competitions),
        last_updated=snapshot.last_updated,
        about=SPEEDCUBING_ABOUT if options.show_about else None,
    )
