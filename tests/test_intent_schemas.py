"""
Tests for Intent Schemas - normalization of the classifier's output.

This module tests:
- "null" sentinel handling in branches and sub-fields
- Branch completeness and priority order
- Wire-name aliases (openApp, webSearch, generalResponse, appName)
"""

import pytest

from nexus.ai.intent.schemas import (
    INTENT_PRIORITY,
    ClassifiedIntent,
    IntentKind,
    MusicIntent,
    is_null_sentinel,
    normalize_field,
)


class TestNormalizeField:
    """Tests for sub-field normalization."""

    @pytest.mark.parametrize("value", [None, "", "   ", "null", "NULL", "Null", " null "])
    def test_unpopulated_values_become_none(self, value):
        assert normalize_field(value) is None

    def test_real_value_is_kept_untouched(self):
        assert normalize_field(" 555 123 4567 ") == " 555 123 4567 "

    def test_numbers_become_strings(self):
        assert normalize_field(5551234567) == "5551234567"

    def test_sentinel_detection_ignores_other_words(self):
        assert is_null_sentinel("nullable") is False
        assert is_null_sentinel("none") is False
        assert is_null_sentinel(None) is False


class TestBranchCompleteness:
    """Tests for required-field checks on individual branches."""

    def test_music_needs_platform_and_query(self):
        assert MusicIntent(platform="Spotify", query="Daft Punk").is_complete
        assert not MusicIntent(platform="Spotify").is_complete
        assert not MusicIntent(platform="null", query="Daft Punk").is_complete

    def test_extra_keys_are_ignored(self):
        branch = MusicIntent.model_validate({"platform": "Tidal", "query": "x", "mood": "happy"})
        assert branch.is_complete


class TestClassifiedIntent:
    """Tests for the full classifier record."""

    def test_parses_wire_names(self):
        intent = ClassifiedIntent.model_validate({
            "openApp": {"appName": "Instagram"},
            "webSearch": {"query": "weather"},
            "generalResponse": "Hi!",
        })

        assert intent.open_app.app_name == "Instagram"
        assert intent.web_search.query == "weather"
        assert intent.general_response == "Hi!"

    def test_all_null_is_unrecognized(self):
        intent = ClassifiedIntent.model_validate({
            "music": None,
            "youtube": None,
            "call": None,
            "website": None,
            "map": None,
            "openApp": None,
            "webSearch": None,
            "generalResponse": None,
        })

        assert intent.populated_branches() == []
        assert intent.primary_kind == IntentKind.UNRECOGNIZED

    def test_empty_object_is_unrecognized(self):
        assert ClassifiedIntent.model_validate({}).primary_kind == IntentKind.UNRECOGNIZED

    def test_branch_sent_as_null_string_is_absent(self):
        intent = ClassifiedIntent.model_validate({"youtube": "null", "call": {"number": "911"}})

        assert intent.youtube is None
        assert intent.primary_kind == IntentKind.CALL

    def test_sub_field_sentinel_skips_branch(self):
        intent = ClassifiedIntent.model_validate({
            "youtube": {"query": "NULL"},
            "map": {"query": "coffee near me"},
        })

        assert not intent.is_populated(IntentKind.YOUTUBE)
        assert intent.primary_kind == IntentKind.MAP

    def test_general_response_sentinel_is_absent(self):
        intent = ClassifiedIntent.model_validate({"generalResponse": "Null"})

        assert intent.general_response is None
        assert intent.primary_kind == IntentKind.UNRECOGNIZED

    def test_blank_general_response_still_selects_branch(self):
        intent = ClassifiedIntent.model_validate({"generalResponse": ""})

        assert intent.primary_kind == IntentKind.GENERAL_RESPONSE

    def test_priority_order_with_several_branches(self):
        intent = ClassifiedIntent.model_validate({
            "generalResponse": "Sure!",
            "openApp": {"appName": "facebook"},
            "website": {"url": "facebook.com"},
            "youtube": {"query": "cats"},
        })

        assert intent.populated_branches() == [
            IntentKind.YOUTUBE,
            IntentKind.OPEN_APP,
            IntentKind.WEBSITE,
            IntentKind.GENERAL_RESPONSE,
        ]
        assert intent.primary_kind == IntentKind.YOUTUBE

    def test_priority_constant_matches_resolution_order(self):
        assert [kind.value for kind in INTENT_PRIORITY] == [
            "youtube", "music", "call", "openApp", "website", "map", "webSearch", "generalResponse",
        ]

    @pytest.mark.parametrize(
        "noise",
        [
            {"map": ""},
            {"youtube": "none"},
            {"music": []},
            {"website": 5},
            {"openApp": {"appName": ["facebook"]}},
            {"generalResponse": 42},
        ],
        ids=["blank-string", "word", "list", "number", "non-string-field", "non-string-response"],
    )
    def test_malformed_branch_is_skipped(self, noise):
        intent = ClassifiedIntent.model_validate({"call": {"number": "555-123-4567"}, **noise})

        assert intent.populated_branches() == [IntentKind.CALL]
        assert intent.primary_kind == IntentKind.CALL

    def test_malformed_higher_priority_branch_falls_through(self):
        intent = ClassifiedIntent.model_validate({"youtube": "", "music": {"platform": "Spotify", "query": "Jazz"}})

        assert intent.youtube is None
        assert intent.primary_kind == IntentKind.MUSIC
