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
Shapes the cached Close Powerlifting snapshot into display rows.

Nothing here raises on malformed upstream data: missing levels become an
empty athlete, bad numbers become a placeholder dash.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional, Type, TypeVar

from dacite import Config, from_dict

from shared.constants import (
    COMPETITION_CUTOFF_YEAR,
    LB_TO_KG,
    PLACEHOLDER,
    POWERLIFTING_ABOUT,
)
from shared.firebase_constants import SNAPSHOT_DATA_KEY, SNAPSHOT_LAST_UPDATED_KEY
from shared.types import (
    Athlete,
    AthleteSnapshot,
    CompetitionResult,
    CompetitionRow,
    PersonalBest,
    PersonalBestRow,
    PowerliftingProfile,
    WeightUnit,
)

T = TypeVar("T")

EPOCH = datetime(1970, 1, 1)
DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))")
_DACITE_CONFIG = Config(check_types=False)


@dataclass
class PowerliftingViewOptions:
    unit: WeightUnit = WeightUnit.LBS
    raw_only: bool = True
    show_about: bool = False


def parse_snapshot(value: Any) -> AthleteSnapshot:
    if not isinstance(value, dict):
        return AthleteSnapshot()
    return AthleteSnapshot(
        data=value.get(SNAPSHOT_DATA_KEY),
        last_updated=value.get(SNAPSHOT_LAST_UPDATED_KEY),
    )


def _parse_records(data_class: Type[T], records: Any) -> List[T]:
    if not isinstance(records, list):
        return []
    return [
        from_dict(data_class=data_class, data=record, config=_DACITE_CONFIG)
        for record in records
        if isinstance(record, dict)
    ]


def extract_athlete(snapshot: AthleteSnapshot) -> Optional[Athlete]:
    """
    Returns the first athlete under `data.data`, or None when any level of
    that path is missing or has an unexpected shape (including `data.data`
    being an object instead of a list).
    """
    payload = snapshot.data
    if not isinstance(payload, dict):
        return None
    athletes = payload.get("data")
    if not isinstance(athletes, list) or not athletes:
        return None
    record = athletes[0]
    if not isinstance(record, dict):
        return None

    name = record.get("name")
    return Athlete(
        name=str(name) if name not in (None, "") else None,
        personal_best=_parse_records(PersonalBest, record.get("personal_best")),
        competition_results=_parse_records(
            CompetitionResult, record.get("competition_results")
        ),
    )


def parse_number(value: Any) -> Optional[float]:
    """Lenient numeric parse: accepts numbers and strings with a leading number ("300", "300.5 lbs")."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match:
            return float(match.group(1))
    return None


def parse_date(value: Any) -> datetime:
    """Parses a competition date, falling back to the epoch when it can't be read."""
    if not isinstance(value, str) or not value.strip():
        return EPOCH
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
        for date_format in DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, date_format)
                break
            except ValueError:
                continue
    if parsed is None:
        return EPOCH
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def competitions_since(
    results: List[CompetitionResult], cutoff_year: int = COMPETITION_CUTOFF_YEAR
) -> List[CompetitionResult]:
    """Keeps results dated in or after `cutoff_year`, most recent first."""
    kept = [r for r in results if parse_date(r.date).year >= cutoff_year]
    return sorted(kept, key=lambda r: parse_date(r.date), reverse=True)


def raw_personal_bests(bests: List[PersonalBest]) -> List[PersonalBest]:
    return [pb for pb in bests if pb.equip is not None and "raw" in str(pb.equip).lower()]


def convert_weight(value: Any, unit: WeightUnit) -> Optional[float]:
    """
    Converts a weight reported in pounds to `unit`.

    Returns None for missing, non-numeric and zero values.
    """
    pounds = parse_number(value)
    if not pounds:
        return None
    if unit == WeightUnit.KG:
        return pounds * LB_TO_KG
    return pounds


def format_weight(value: Any, unit: WeightUnit) -> str:
    converted = convert_weight(value, unit)
    if converted is None:
        return PLACEHOLDER
    return f"{converted:.1f} {unit}"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def competition_total(result: CompetitionResult) -> Optional[float]:
    """
    The reported total, or squat + bench + deadlift when the total is
    missing. Non-numeric lifts count as zero; a zero sum is None.
    """
    if not _is_blank(result.total):
        return parse_number(result.total)
    computed = sum(
        parse_number(lift) or 0.0
        for lift in (result.squat, result.bench, result.deadlift)
    )
    return computed or None


def format_dots(dots: Any) -> str:
    if _is_blank(dots):
        return PLACEHOLDER
    return str(dots)


def _text(value: Any) -> str:
    return PLACEHOLDER if _is_blank(value) else str(value)


def personal_best_row(pb: PersonalBest, unit: WeightUnit) -> PersonalBestRow:
    return PersonalBestRow(
        squat=format_weight(pb.squat, unit),
        bench=format_weight(pb.bench, unit),
        deadlift=format_weight(pb.deadlift, unit),
        total=format_weight(pb.total, unit),
        equip=_text(pb.equip),
    )


def competition_row(result: CompetitionResult, unit: WeightUnit) -> CompetitionRow:
    return CompetitionRow(
        competition=_text(result.competition),
        date=_text(result.date),
        location=_text(result.location),
        squat=format_weight(result.squat, unit),
        bench=format_weight(result.bench, unit),
        deadlift=format_weight(result.deadlift, unit),
        total=format_weight(competition_total(result), unit),
        dots=format_dots(result.dots),
    )


def build_powerlifting_profile(
    value: Any, options: Optional[PowerliftingViewOptions] = None
) -> PowerliftingProfile:
    """Shapes a raw store value into the rows shown on the powerlifting page."""
    options = options or PowerliftingViewOptions()
    snapshot = parse_snapshot(value)
    athlete = extract_athlete(snapshot) or Athlete()

    bests = athlete.personal_best
    if options.raw_only:
        bests = raw_personal_bests(bests)

    return PowerliftingProfile(
        name=athlete.name or PLACEHOLDER,
        unit=options.unit,
        personal_bests=[personal_best_row(pb, options.unit) for pb in bests],
        competitions=[
            competition_row(result, options.unit)
            for result in competitions_since(athlete.competition_results)
        ],
        last_updated=snapshot.last_updated,
        about=POWERLIFTING_ABOUT if options.show_about else None,
    )
