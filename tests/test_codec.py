"""Tests for the JSON interchange codec."""

import json

import pytest

from tagcache import deserialize, deserialize_all, serialize


class TestSerialize:
    def test_serializes_json(self) -> None:
        assert serialize({"id": "asdf-123"}) == '{"id": "asdf-123"}'
        assert serialize(None) == "null"
        assert serialize("a") == '"a"'

    def test_rejects_unsupported_types(self) -> None:
        with pytest.raises(TypeError):
            serialize({1, 2})  # type: ignore[arg-type]


class TestDeserialize:
    def test_absent_is_none(self) -> None:
        assert deserialize(None) is None

    def test_empty_string_is_not_absent(self) -> None:
        """An empty stored string is invalid JSON, not a missing entry."""
        with pytest.raises(json.JSONDecodeError):
            deserialize("")

    def test_decodes_bytes(self) -> None:
        assert deserialize(b'{"a": [1, 2]}') == {"a": [1, 2]}


class TestDeserializeAll:
    def test_all_valid(self) -> None:
        assert deserialize_all(['"a"', None, "[1]"]) == ["a", None, [1]]

    def test_one_invalid_degrades_everything(self) -> None:
        assert deserialize_all(['"a"', None, "oops"]) == ['"a"', None, "oops"]

    def test_raw_bytes_are_decoded(self) -> None:
        assert deserialize_all([b"oops", b'"a"']) == ["oops", '"a"']

    def test_undecodable_bytes(self) -> None:
        assert deserialize_all([b"\xff"]) == ["\ufffd"]
