"""Tests for lattice payload flattening.

Covers word ordering across segments, word groups and candidate words,
the empty-lattice case, and the single fallback string returned for any
malformed payload.
"""

import json

import pytest

from src.core.exceptions import TranscriptionParseError
from src.services.transcription.lattice import (
    PARSE_ERROR_TEXT,
    extract_readable_text,
    parse_lattice,
)


class TestExtractReadableText:
    """Well-formed payloads are flattened in document order."""

    def test_concatenates_all_words(self, lattice_json):
        assert extract_readable_text(lattice_json) == "Hello world. Bye."

    def test_no_separator_inserted(self, build_lattice):
        """Fragments are joined as-is; spacing comes from the vendor."""
        raw = json.dumps(build_lattice([[["a"], ["b"], ["c"]]]))
        assert extract_readable_text(raw) == "abc"

    def test_empty_lattice(self):
        assert extract_readable_text(json.dumps({"lattice2": []})) == ""

    def test_empty_word_groups(self, build_lattice):
        assert extract_readable_text(json.dumps(build_lattice([[]]))) == ""

    def test_only_first_result_is_read(self, build_lattice):
        """Alternative recognition results after rt[0] are ignored."""
        doc = build_lattice([[["first"]]])
        doc["lattice2"][0]["json_1best"]["st"]["rt"].append({"unexpected": True})
        assert extract_readable_text(json.dumps(doc)) == "first"

    def test_extra_keys_ignored(self, build_lattice):
        doc = build_lattice([[["x"]]])
        doc["lattice2"][0]["json_1best"]["st"]["bg"] = "0"
        doc["lattice2"][0]["json_1best"]["st"]["rt"][0]["ws"][0]["cw"][0]["wp"] = "n"
        assert extract_readable_text(json.dumps(doc)) == "x"

    def test_accepts_bytes(self, lattice_json):
        assert extract_readable_text(lattice_json.encode()) == "Hello world. Bye."


class TestMalformedPayloads:
    """Every malformed payload yields exactly the fallback string."""

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "",
            None,
            "null",
            "[]",
            json.dumps({}),
            json.dumps({"lattice2": {}}),
            json.dumps({"lattice2": [{}]}),
            json.dumps({"lattice2": [{"json_1best": {"st": {"rt": []}}}]}),
            json.dumps({"lattice2": [{"json_1best": {"st": {"rt": [{}]}}}]}),
            json.dumps({"lattice2": [{"json_1best": {"st": {"rt": [{"ws": [{}]}]}}}]}),
            json.dumps({"lattice2": [{"json_1best": "{\"st\": {}}"}]}),
        ],
    )
    def test_fallback_text(self, raw):
        assert extract_readable_text(raw) == PARSE_ERROR_TEXT

    def test_missing_word_text(self, build_lattice):
        doc = build_lattice([[["ok"]]])
        del doc["lattice2"][0]["json_1best"]["st"]["rt"][0]["ws"][0]["cw"][0]["w"]
        assert extract_readable_text(json.dumps(doc)) == PARSE_ERROR_TEXT

    def test_non_string_word(self, build_lattice):
        doc = build_lattice([[["ok"]]])
        doc["lattice2"][0]["json_1best"]["st"]["rt"][0]["ws"][0]["cw"][0]["w"] = 7
        assert extract_readable_text(json.dumps(doc)) == PARSE_ERROR_TEXT

    def test_malformed_later_segment_discards_everything(self, build_lattice):
        """No partial transcript is returned."""
        doc = build_lattice([[["kept?"]], [["x"]]])
        del doc["lattice2"][1]["json_1best"]
        assert extract_readable_text(json.dumps(doc)) == PARSE_ERROR_TEXT


class TestParseLattice:
    """The strict parser reports which stage failed."""

    def test_returns_text(self, lattice_json):
        assert parse_lattice(lattice_json) == "Hello world. Bye."

    def test_json_stage(self):
        with pytest.raises(TranscriptionParseError) as exc_info:
            parse_lattice("{broken")
        assert exc_info.value.stage == "json"

    def test_non_string_input_is_json_stage(self):
        with pytest.raises(TranscriptionParseError) as exc_info:
            parse_lattice({"lattice2": []})
        assert exc_info.value.stage == "json"

    def test_schema_stage_names_location(self):
        with pytest.raises(TranscriptionParseError) as exc_info:
            parse_lattice(json.dumps({"lattice2": [{"json_1best": {}}]}))
        assert exc_info.value.stage == "schema"
        assert "lattice2.0.json_1best.st" in exc_info.value.detail
