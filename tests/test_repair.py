"""Unit tests for strict-then-repaired JSON parsing."""

import logging

from marketlens.parsing import ParseError, ParsedJson, extract_json, parse_with_repair
from marketlens.parsing.repair import repair_json_text


class TestRepairJsonText:
    """Tests for the repair sequence."""

    def test_trailing_commas_removed(self) -> None:
        assert repair_json_text('{"a": [1, 2,], "b": 3,}') == '{"a": [1, 2], "b": 3}'

    def test_trailing_comma_before_newline(self) -> None:
        assert repair_json_text('{"a": 1,\n}') == '{"a": 1}'

    def test_newlines_flattened(self) -> None:
        assert repair_json_text('{"a": "x\r\ny"}') == '{"a": "x y"}'


class TestParseWithRepair:
    """Tests for parse_with_repair."""

    def test_valid_json_not_altered(self) -> None:
        """Strictly valid input parses to exactly what json.loads gives."""
        text = '{"a": "x, }", "b": [1, 2], "c": "line"}'
        result = parse_with_repair(text)
        assert result == ParsedJson({"a": "x, }", "b": [1, 2], "c": "line"})

    def test_trailing_comma_repaired(self) -> None:
        assert parse_with_repair('{"a":1,}') == ParsedJson({"a": 1})

    def test_literal_newline_in_string_repaired(self) -> None:
        result = parse_with_repair('{"summary": "first line\nsecond line"}')
        assert isinstance(result, ParsedJson)
        assert result.value == {"summary": "first line second line"}

    def test_invalid_json_returns_parse_error(self, caplog) -> None:
        """Unrepairable text becomes ParseError carrying the raw text, logged as a warning."""
        with caplog.at_level(logging.WARNING, logger="marketlens.parsing.repair"):
            result = parse_with_repair("definitely not json")
        assert isinstance(result, ParseError)
        assert result.error == "Invalid JSON"
        assert result.raw == "definitely not json"
        assert "definitely not json" in caplog.text

    def test_deeply_nested_input_does_not_raise(self) -> None:
        """Nesting beyond the recursion limit is a ParseError, not an exception."""
        result = parse_with_repair("[" * 200000)
        assert isinstance(result, ParseError)
        assert result.raw == "[" * 200000

    def test_none_is_parse_error(self) -> None:
        assert parse_with_repair(None) == ParseError(raw="")

    def test_decoded_value_passes_through(self) -> None:
        assert parse_with_repair({"a": 1}) == ParsedJson({"a": 1})

    def test_parse_error_to_dict(self) -> None:
        assert ParseError(raw="x").to_dict() == {"error": "Invalid JSON", "raw": "x"}


class TestExtractJson:
    """Tests for the unwrap -> parse glue."""

    def test_fenced_array_wrapped_object(self) -> None:
        result = extract_json('```json\n[{"name": "Acme"}]\n```')
        assert result == ParsedJson({"name": "Acme"})

    def test_prose_and_trailing_comma(self) -> None:
        result = extract_json('Result:\n{"name": "Acme", "services": ["a", "b",],}\nDone.')
        assert result == ParsedJson({"name": "Acme", "services": ["a", "b"]})

    def test_decoded_list(self) -> None:
        assert extract_json([{"a": 1}]) == ParsedJson({"a": 1})

    def test_deeply_nested_object_text(self) -> None:
        result = extract_json('{"a": ' * 100000 + "1" + "}" * 100000)
        assert isinstance(result, ParseError)

    def test_empty_text_is_parse_error(self) -> None:
        result = extract_json("")
        assert isinstance(result, ParseError)
        assert result.raw == ""

    def test_unwrapping_converges(self) -> None:
        """Wrapped and unwrapped forms of the same record parse identically."""
        assert extract_json('[{"a": 1}]') == extract_json('{"a": 1}')
