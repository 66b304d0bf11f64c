"""
Tests for metadata serialization.
"""

import json
import logging

from simple_analytics.metadata import metadata_to_json_string


class _Plan:
    def __str__(self):
        return "premium"


class _Unprintable:
    def __str__(self):
        raise RuntimeError("no string form")


class TestMetadataToJsonString:
    """Test metadata encoding to JSON text."""

    def test_missing_or_empty_metadata(self):
        assert metadata_to_json_string(None) is None
        assert metadata_to_json_string({}) is None

    def test_round_trips_string_values(self):
        result = metadata_to_json_string({"plan": "premium"})
        assert isinstance(result, str)
        assert json.loads(result) == {"plan": "premium"}

    def test_compact_output(self):
        assert metadata_to_json_string({"source": "ad"}) == '{"source":"ad"}'

    def test_keys_are_sorted(self):
        assert metadata_to_json_string({"b": "2", "a": "1"}) == '{"a":"1","b":"2"}'

    def test_scalars_keep_json_types(self):
        result = json.loads(metadata_to_json_string({"count": 3, "ratio": 0.5, "beta": True}))
        assert result == {"count": 3, "ratio": 0.5, "beta": True}

    def test_other_values_use_their_string_form(self):
        assert json.loads(metadata_to_json_string({"plan": _Plan()})) == {"plan": "premium"}

    def test_non_ascii_is_kept_readable(self):
        assert metadata_to_json_string({"city": "Zürich"}) == '{"city":"Zürich"}'

    def test_non_string_keys_give_none(self, caplog):
        with caplog.at_level(logging.WARNING, logger="simple_analytics.metadata"):
            assert metadata_to_json_string({1: "one"}) is None
        assert "Error serializing metadata" in caplog.text

    def test_non_finite_numbers_give_none(self):
        assert metadata_to_json_string({"score": float("nan")}) is None

    def test_value_with_failing_string_form_gives_none(self):
        assert metadata_to_json_string({"plan": _Unprintable()}) is None

    def test_too_deep_nesting_gives_none(self):
        nested = []
        for _ in range(100000):
            nested = [nested]
        assert metadata_to_json_string({"deep": nested}) is None
