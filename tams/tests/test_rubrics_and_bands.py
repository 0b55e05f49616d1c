"""Rubric lookups and presentation helpers."""

from __future__ import annotations

from decimal import Decimal

from django.test import SimpleTestCase

from tams.services.scoring import ci_badge, ci_band, describe_rubric, format_ci, resolve_meaning, round_ci, urgency_badge


class ResolveMeaningTests(SimpleTestCase):
    def test_exact_key_match(self):
        self.assertEqual(resolve_meaning({"3": "Deformed"}, "3"), "Deformed")

    def test_code_is_trimmed_and_upper_cased(self):
        self.assertEqual(resolve_meaning({"X": "Not present"}, "  x - none"), "Not present")

    def test_integer_keys_are_matched(self):
        self.assertEqual(resolve_meaning({2: "Dented"}, "2"), "Dented")
        self.assertEqual(resolve_meaning({"2": "Dented"}, 2), "Dented")

    def test_missing_entry_is_empty(self):
        self.assertEqual(resolve_meaning({"1": "Minor"}, "4"), "")
        self.assertEqual(resolve_meaning(None, "4"), "")
        self.assertEqual(resolve_meaning({"1": "Minor"}, None), "")
        self.assertEqual(resolve_meaning({"1": "Minor"}, "   "), "")

    def test_serialised_rubric_is_parsed(self):
        self.assertEqual(resolve_meaning('{"1": "Minor", "2": "Moderate"}', "2"), "Moderate")

    def test_unparseable_rubric_is_returned_unchanged(self):
        self.assertEqual(resolve_meaning("see field manual", "2"), "see field manual")

    def test_non_mapping_rubric_is_empty(self):
        self.assertEqual(resolve_meaning("[1, 2]", "1"), "")

    def test_describe_rubric(self):
        self.assertEqual(describe_rubric({"1": "Good", "2": "Fair"}), "1: Good; 2: Fair")
        self.assertEqual(describe_rubric(None), "Not configured")
        self.assertEqual(describe_rubric({}), "Not configured")


class CiBandTests(SimpleTestCase):
    def test_band_floors(self):
        self.assertEqual(ci_band(80), "Excellent")
        self.assertEqual(ci_band(Decimal("79.99")), "Good")
        self.assertEqual(ci_band(60), "Good")
        self.assertEqual(ci_band(40), "Fair")
        self.assertEqual(ci_band(Decimal("39.5")), "Poor")
        self.assertIsNone(ci_band(None))

    def test_null_ci_renders_not_scored(self):
        self.assertEqual(ci_badge(None), {"label": "Not Scored", "color": "muted"})
        self.assertEqual(format_ci(None), "—")

    def test_rounding_happens_half_up(self):
        self.assertEqual(round_ci(Decimal("81.5")), 82)
        self.assertEqual(round_ci(Decimal("64.4999")), 64)
        self.assertEqual(format_ci(Decimal("99.5")), "100")
        self.assertIsNone(round_ci(None))

    def test_badge_colours(self):
        self.assertEqual(ci_badge(Decimal("85"))["color"], "success")
        self.assertEqual(ci_badge(Decimal("10")), {"label": "Poor", "color": "destructive"})


class UrgencyBadgeTests(SimpleTestCase):
    def test_code_badge(self):
        self.assertEqual(
            urgency_badge("4"), {"code": "4", "label": "Immediate", "color": "destructive"}
        )
        self.assertEqual(urgency_badge("r")["label"], "Record Only")

    def test_legacy_text_labels(self):
        self.assertEqual(urgency_badge("Critical")["code"], "4")
        self.assertEqual(urgency_badge("record only")["code"], "R")

    def test_unknown_value(self):
        self.assertEqual(urgency_badge("soon"), {"code": "", "label": "soon", "color": "muted"})
        self.assertEqual(urgency_badge(None)["label"], "Unknown")
