# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 Boxed Contributors
"""
Unit tests for the direct builder.
"""

import logging
from dataclasses import dataclass, field

import pytest

from boxed import Boxed
from boxed.builder import (
    BuilderSurfaceError,
    FieldNotSetError,
    IncompleteBuildError,
    UnknownFieldError,
)
from boxed.runtime_config import BuilderFlags, RuntimeConfig


@dataclass
class Student:
    name: str
    location: str
    age: int | None = None


@dataclass
class University:
    state: str
    students: list[Student] = field(default_factory=list)


@pytest.mark.unit
class TestBuilder:
    def test_set_and_get_value(self):
        assert Boxed(Student).builder().set_name("nickbar01234").get_name() == "nickbar01234"

    def test_set_and_validate_raises_but_keeps_value(self):
        def non_negative(shape):
            if shape["age"] is None or shape["age"] < 0:
                raise ValueError("age must be non-negative")

        builder = Boxed(Student).builder()
        with pytest.raises(ValueError, match="non-negative"):
            builder.set_age(-1, non_negative)
        assert builder.get_age() == -1

    def test_validator_sees_value_after_write(self):
        seen = {}
        Boxed(Student).builder().set_name("a").set_location("b", validate=lambda shape: seen.update(shape))
        assert seen == {"name": "a", "location": "b"}

    def test_set_value_with_function(self):
        location = (
            Boxed(Student)
            .builder()
            .set_name("nickbar01234")
            .set_location(lambda shape: "Tufts" if shape["name"] == "nickbar01234" else "")
            .get_location()
        )
        assert location == "Tufts"

    def test_derive_view_is_read_only(self):
        def sneaky(shape):
            shape["name"] = "changed"

        with pytest.raises(TypeError):
            Boxed(Student).builder().set_name("a").set_location(sneaky)

    def test_build_partial_from(self):
        student = Boxed(Student).builder().from_({"name": "nickbar01234", "location": "Vietnam"}).build()
        assert student == Student(name="nickbar01234", location="Vietnam", age=None)

    def test_build_full_from(self):
        uni = Boxed(University).builder().from_({"state": "MA", "students": []}).build()
        assert uni == University(state="MA", students=[])

    def test_from_value_object(self):
        original = Student(name="a", location="b", age=3)
        copy = Boxed(Student).builder().from_(original).build()
        assert copy == original
        assert copy is not original

    def test_from_only_first(self):
        builder = Boxed(Student).builder().set_name("a")
        with pytest.raises(BuilderSurfaceError):
            builder.from_({"location": "b"})

    def test_from_rejects_unknown_fields(self):
        with pytest.raises(UnknownFieldError, match="nickname"):
            Boxed(Student).builder().from_({"name": "a", "nickname": "x"})

    def test_build_requires_required_fields(self):
        with pytest.raises(IncompleteBuildError) as exc_info:
            Boxed(Student).builder().set_name("a").build()
        assert exc_info.value.missing == ("location",)
        assert exc_info.value.to_log_dict()["missing"] == ["location"]

    def test_default_factory_is_fresh_per_build(self):
        builder = Boxed(University).builder().set_state("MA")
        first = builder.build()
        second = builder.build()
        assert first.students == [] and second.students == []
        assert first.students is not second.students

    def test_get_unset_optional_returns_default(self):
        assert Boxed(Student).builder().get_age() is None

    def test_get_unset_required_raises(self):
        with pytest.raises(FieldNotSetError):
            Boxed(Student).builder().get_name()

    def test_unknown_setter_is_attribute_error(self):
        builder = Boxed(Student).builder()
        with pytest.raises(UnknownFieldError):
            builder.set_nickname("x")
        assert not hasattr(builder, "set_nickname")
        assert hasattr(builder, "set_name")

    def test_values_is_a_copy(self):
        builder = Boxed(Student).builder().set_name("a")
        snapshot = builder.values()
        snapshot["name"] = "b"
        assert builder.get_name() == "a"

    def test_dir_lists_surface(self):
        surface = dir(Boxed(Student).builder())
        assert "set_name" in surface
        assert "get_age" in surface
        assert "from_" in surface

    def test_log_writes(self, caplog):
        runtime = RuntimeConfig(builder=BuilderFlags(log_writes=True))
        with caplog.at_level(logging.DEBUG, logger="boxed.builder.core"):
            Boxed(Student, runtime=runtime).builder().set_name("Ada")
        assert any("Student.name = 'Ada'" in r.getMessage() for r in caplog.records)
