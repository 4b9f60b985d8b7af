"""Unit tests for the command builder."""

from __future__ import annotations

import datetime
import uuid

from middle.core.command import Command, build_command
from middle.core.enums import ParameterKind


class TestBuildCommand:
    def test_parameter_names_follow_argument_order(self) -> None:
        cmd = build_command("SELECT @0, @1, @2", 10, "x", 2.5)
        assert [p.name for p in cmd.parameters] == ["@0", "@1", "@2"]
        assert [p.value for p in cmd.parameters] == [10, "x", 2.5]

    def test_no_arguments(self) -> None:
        cmd = build_command("SELECT 1")
        assert cmd == Command("SELECT 1", ())

    def test_none_is_sql_null(self) -> None:
        (param,) = build_command("SELECT @0", None).parameters
        assert param.kind is ParameterKind.NULL
        assert param.value is None
        assert param.size is None

    def test_uuid_bound_as_canonical_string(self) -> None:
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        (param,) = build_command("SELECT @0", value).parameters
        assert param.value == "12345678-1234-5678-1234-567812345678"
        assert isinstance(param.value, str)
        assert param.kind is ParameterKind.STRING
        assert param.size == 4000

    def test_short_string_is_bounded(self) -> None:
        (param,) = build_command("SELECT @0", "a" * 4000).parameters
        assert param.kind is ParameterKind.STRING
        assert param.size == 4000

    def test_long_string_is_unbounded_and_not_truncated(self) -> None:
        text = "b" * 5000
        (param,) = build_command("SELECT @0", text).parameters
        assert param.kind is ParameterKind.TEXT
        assert param.size == -1
        assert param.value == text

    def test_length_counts_utf16_code_units(self) -> None:
        # 2500 emoji are 5000 UTF-16 code units
        text = "\U0001F600" * 2500
        (param,) = build_command("SELECT @0", text).parameters
        assert param.kind is ParameterKind.TEXT
        assert param.size == -1
        assert param.value == text

    def test_bmp_string_at_limit_is_bounded(self) -> None:
        (param,) = build_command("SELECT @0", "é" * 4000).parameters
        assert param.kind is ParameterKind.STRING

    def test_astral_string_at_limit_is_bounded(self) -> None:
        (param,) = build_command("SELECT @0", "\U0001F600" * 2000).parameters
        assert param.kind is ParameterKind.STRING

    def test_other_types_are_inferred(self) -> None:
        today = datetime.date(2024, 1, 31)
        params = build_command("SELECT @0, @1, @2", 5, today, b"\x00").parameters
        assert all(p.kind is ParameterKind.INFERRED for p in params)
        assert params[1].value is today

    def test_commands_do_not_share_parameters(self) -> None:
        first = build_command("SELECT @0", 1)
        second = build_command("SELECT @0", 2)
        assert first.parameters[0].name == second.parameters[0].name == "@0"
        assert first.parameters[0].value == 1
        assert second.parameters[0].value == 2
