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

import unittest
from datetime import datetime

from shared.constants import PLACEHOLDER, POWERLIFTING_ABOUT
from shared.types import AthleteSnapshot, CompetitionResult, PersonalBest, WeightUnit
from views import powerlifting
from views.powerlifting import PowerliftingViewOptions, build_powerlifting_profile

ATHLETE = {
    "name": "Calvin Le",
    "personal_best": [
        {"squat": "300", "bench": "200", "deadlift": "400", "total": "900", "equip": "Raw"},
        {"squat": "350", "bench": "250", "deadlift": "450", "total": "1050", "equip": "Equipped"},
        {"squat": 310, "bench": 205, "deadlift": 405, "total": 920, "equip": "raw/wraps"},
    ],
    "competition_results": [
        {
            "competition": "Spring Open",
            "date": "2019-04-13",
            "location": "Kansas City, MO",
            "squat": "300",
            "bench": "200",
            "deadlift": "400",
            "total": "",
            "dots": "310.25",
        },
        {
            "competition": "Someone Else's Meet",
            "date": "2012-06-01",
            "squat": "500",
            "bench": "400",
            "deadlift": "600",
            "total": "1500",
            "dots": "450.1",
        },
        {
            "competition": "Winter Classic",
            "date": "2023-12-02",
            "squat": "320",
            "bench": "215",
            "deadlift": "415",
            "total": "950",
        },
        {"competition": "Unknown Date", "date": "sometime", "total": "800"},
        {
            "competition": "New Year Bash",
            "date": "2018-01-01",
            "squat": "",
            "bench": None,
            "deadlift": "n/a",
        },
    ],
}


def _snapshot(athlete) -> dict:
    return {"data": {"data": [athlete]}, "lastUpdated": "2025-01-01T02:00:00.000Z"}


class ExtractAthleteTest(unittest.TestCase):

    def test_missing_path_renders_empty_athlete(self):
        malformed = [
            None,
            "not a record",
            {},
            {"data": None},
            {"data": "oops"},
            {"data": {}},
            {"data": {"data": None}},
            {"data": {"data": []}},
            {"data": {"data": ["Calvin"]}},
            # Object instead of list under data.data is treated as absent.
            {"data": {"data": {"0": ATHLETE}}},
        ]
        for value in malformed:
            with self.subTest(value=value):
                snapshot = powerlifting.parse_snapshot(value)
                self.assertIsNone(powerlifting.extract_athlete(snapshot))

                profile = build_powerlifting_profile(value)
                self.assertEqual(profile.name, PLACEHOLDER)
                self.assertEqual(profile.personal_bests, [])
                self.assertEqual(profile.competitions, [])

    def test_extracts_first_athlete(self):
        snapshot = AthleteSnapshot(data={"data": [ATHLETE, {"name": "Second"}]})

        athlete = powerlifting.extract_athlete(snapshot)

        self.assertEqual(athlete.name, "Calvin Le")
        self.assertEqual(len(athlete.personal_best), 3)
        self.assertEqual(athlete.personal_best[0].equip, "Raw")
        self.assertEqual(athlete.competition_results[0].dots, "310.25")

    def test_skips_non_dict_records_and_missing_fields(self):
        record = {
            "name": "Calvin Le",
            "personal_best": ["bad", {"squat": "300", "extra": 1}],
            "competition_results": "not a list",
        }
        athlete = powerlifting.extract_athlete(AthleteSnapshot(data={"data": [record]}))

        self.assertEqual(athlete.personal_best, [PersonalBest(squat="300")])
        self.assertEqual(athlete.competition_results, [])


class CompetitionFilterTest(unittest.TestCase):

    def test_filters_before_cutoff_and_sorts_descending(self):
        profile = build_powerlifting_profile(_snapshot(ATHLETE))

        self.assertEqual(
            [row.competition for row in profile.competitions],
            ["Winter Classic", "Spring Open", "New Year Bash"],
        )

    def test_unparseable_dates_fall_back_to_epoch(self):
        self.assertEqual(powerlifting.parse_date("sometime"), powerlifting.EPOCH)
        self.assertEqual(powerlifting.parse_date(None), powerlifting.EPOCH)
        self.assertEqual(powerlifting.parse_date(20190413), powerlifting.EPOCH)

    def test_parses_common_date_formats(self):
        self.assertEqual(powerlifting.parse_date("2023-12-02"), datetime(2023, 12, 2))
        self.assertEqual(
            powerlifting.parse_date("2023-12-02T15:00:00Z"), datetime(2023, 12, 2, 15)
        )
        self.assertEqual(powerlifting.parse_date("12/02/2023"), datetime(2023, 12, 2))
        self.assertEqual(powerlifting.parse_date("December 2, 2023"), datetime(2023, 12, 2))

    def test_custom_cutoff(self):
        results = [
            CompetitionResult(competition="a", date="2012-06-01"),
            CompetitionResult(competition="b", date="2020-06-01"),
        ]
        kept = powerlifting.competitions_since(results, cutoff_year=2010)
        self.assertEqual([r.competition for r in kept], ["b", "a"])


class TotalFallbackTest(unittest.TestCase):

    def test_empty_total_is_sum_of_lifts(self):
        profile = build_powerlifting_profile(_snapshot(ATHLETE))
        spring_open = profile.competitions[1]

        self.assertEqual(spring_open.total, "900.0 lbs")

    def test_reported_total_is_kept(self):
        profile = build_powerlifting_profile(_snapshot(ATHLETE))
        self.assertEqual(profile.competitions[0].total, "950.0 lbs")

    def test_zero_sum_renders_placeholder(self):
        profile = build_powerlifting_profile(_snapshot(ATHLETE))
        new_year = profile.competitions[2]

        self.assertEqual(new_year.total, PLACEHOLDER)
        self.assertEqual(new_year.squat, PLACEHOLDER)

    def test_non_numeric_lift_counts_as_zero(self):
        result = CompetitionResult(squat="DQ", bench="200", deadlift=400, total=None)
        self.assertEqual(powerlifting.competition_total(result), 600.0)


class UnitConversionTest(unittest.TestCase):

    def test_kilograms(self):
        profile = build_powerlifting_profile(
            _snapshot(ATHLETE), PowerliftingViewOptions(unit=WeightUnit.KG)
        )

        self.assertEqual(profile.unit, WeightUnit.KG)
        self.assertEqual(profile.personal_bests[0].squat, "136.1 kg")
        self.assertEqual(profile.competitions[1].total, "408.2 kg")

    def test_pounds(self):
        self.assertEqual(powerlifting.format_weight("300", WeightUnit.LBS), "300.0 lbs")
        self.assertEqual(powerlifting.format_weight(302.5, WeightUnit.LBS), "302.5 lbs")

    def test_invalid_inputs_render_placeholder(self):
        for value in (None, "", "abc", 0, "0", True):
            for unit in WeightUnit:
                with self.subTest(value=value, unit=unit):
                    self.assertEqual(powerlifting.format_weight(value, unit), PLACEHOLDER)

    def test_parse_number(self):
        self.assertEqual(powerlifting.parse_number("300.5 lbs"), 300.5)
        self.assertEqual(powerlifting.parse_number(" 42"), 42.0)
        self.assertIsNone(powerlifting.parse_number("lbs"))
        self.assertIsNone(powerlifting.parse_number([300]))


class EquipFilterTest(unittest.TestCase):

    def test_raw_only_excludes_equipped(self):
        profile = build_powerlifting_profile(_snapshot(ATHLETE))

        self.assertEqual([row.equip for row in profile.personal_bests], ["Raw", "raw/wraps"])

    def test_raw_only_disabled_keeps_all(self):
        profile = build_powerlifting_profile(
            _snapshot(ATHLETE), PowerliftingViewOptions(raw_only=False)
        )
        self.assertEqual(len(profile.personal_bests), 3)

    def test_missing_equip_is_excluded(self):
        bests = [PersonalBest(squat="300"), PersonalBest(squat="310", equip="RAW")]
        self.assertEqual(powerlifting.raw_personal_bests(bests), [bests[1]])


class ProfileTest(unittest.TestCase):

    def test_profile_fields(self):
        profile = build_powerlifting_profile(_snapshot(ATHLETE))

        self.assertEqual(profile.name, "Calvin Le")
        self.assertEqual(profile.last_updated, "2025-01-01T02:00:00.000Z")
        self.assertIsNone(profile.about)
        self.assertEqual(profile.competitions[1].dots, "310.25")
        self.assertEqual(profile.competitions[0].dots, PLACEHOLDER)
        self.assertEqual(profile.competitions[1].location, "Kansas City, MO")
        self.assertEqual(profile.personal_bests[0].total, "900.0 lbs")

    def test_show_about(self):
        profile = build_powerlifting_profile(
            _snapshot(ATHLETE), PowerliftingViewOptions(show_about=True)
        )
        self.assertEqual(profile.about, POWERLIFTING_ABOUT)


if __name__ == "__main__":
    unittest.main()
