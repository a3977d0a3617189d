"""Tests for input/output helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from notifykit.io import parse_assignments, read_input, write_output


class TestReadInput:
    def test_none(self) -> None:
        assert read_input(None) == {}

    def test_inline_json(self) -> None:
        assert read_input('{"message": "hi"}') == {"message": "hi"}

    def test_file(self, tmp_path: Path) -> None:
        path = tmp_path / "input.json"
        path.write_text('{"title": "Build 42"}')
        assert read_input(str(path)) == {"title": "Build 42"}

    def test_not_an_object(self) -> None:
        with pytest.raises(ValueError, match="must be a JSON object"):
            read_input("[1, 2]")

    def test_invalid_json(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            read_input("{not json")


class TestParseAssignments:
    def test_pairs(self) -> None:
        assert parse_assignments(["message=Build ok", "left_ear_position=3"]) == {
            "message": "Build ok",
            "left_ear_position": "3",
        }

    def test_value_may_contain_equals(self) -> None:
        assert parse_assignments(["body=a=b"]) == {"body": "a=b"}

    def test_empty_value(self) -> None:
        assert parse_assignments(["body="]) == {"body": ""}

    @pytest.mark.parametrize("item", ["message", "=value"])
    def test_invalid(self, item: str) -> None:
        with pytest.raises(ValueError, match="Expected key=value"):
            parse_assignments([item])


def test_write_output(tmp_path: Path) -> None:
    path = tmp_path / "out" / "result.json"

    write_output(path, {"success": True})

    assert json.loads(path.read_text()) == {"success": True}
