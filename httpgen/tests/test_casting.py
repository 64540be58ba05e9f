"""Tests for field shapes and the cast rules derived from them."""

from __future__ import annotations

import pytest

from httpgen.emitter.casting import PASSED, Step, apply_step, dump_step, load_step
from httpgen.model.ir import Parameter, Property, ReturnType
from httpgen.model.shape import ArrayShape, EnumShape, PrimitiveShape, TypeShape, shape_of


# ─── Shape classification ────────────────────────────────────────────────────

class TestShapeOf:
    def test_primitive(self, service):
        prop = Property(name="count", type_name="integer")
        assert shape_of(service, prop) == PrimitiveShape("integer")

    def test_type_reference(self, service):
        prop = Property(name="w", type_name="Widget", is_primitive=False)
        assert shape_of(service, prop) == TypeShape("Widget")

    def test_enum_reference(self, service):
        prop = Property(name="c", type_name="color", is_primitive=False)
        assert shape_of(service, prop) == EnumShape("color")

    def test_array_of_primitives(self, service):
        param = Parameter(name="ids", type_name="string", is_array=True)
        assert shape_of(service, param) == ArrayShape(PrimitiveShape("string"))

    def test_array_of_types(self, service):
        ret = ReturnType(type_name="Widget", is_array=True)
        assert shape_of(service, ret) == ArrayShape(TypeShape("Widget"))


# ─── Wire -> domain rules ────────────────────────────────────────────────────

class TestLoadStep:
    @pytest.mark.parametrize("primitive,func", [
        ("boolean", "cast_boolean"),
        ("date", "cast_date"),
        ("date-time", "cast_date_time"),
        ("double", "cast_double"),
        ("float", "cast_float"),
        ("number", "cast_number"),
        ("integer", "cast_integer"),
        ("long", "cast_long"),
    ])
    def test_converting_primitives(self, primitive, func):
        step = load_step(PrimitiveShape(primitive), {})
        assert step.func == func
        assert step.kind

    @pytest.mark.parametrize("primitive", ["string", "null", "untyped", "mystery"])
    def test_passthrough_primitives(self, primitive):
        assert load_step(PrimitiveShape(primitive), {}) == PASSED

    def test_type_reference_nests_fail_open_mapper(self):
        assert load_step(TypeShape("Widget"), {}).render() == "nested(map_dto_to_widget)"

    def test_enum_reference_nests_fail_open_mapper(self):
        assert load_step(EnumShape("color"), {}).render() == "nested(map_dto_to_color)"

    def test_array_wraps_item_rule(self):
        step = load_step(ArrayShape(PrimitiveShape("integer")), {})
        assert step.render() == "each(cast_integer)"

    def test_custom_caster_overrides_primitive(self):
        step = load_step(PrimitiveShape("date-time"), {"date-time": "app.casts.parse"})
        assert step.render() == "using(custom_date_time)"

    def test_custom_caster_overrides_named_type(self):
        step = load_step(ArrayShape(TypeShape("Money")), {"Money": "app.casts.money"})
        assert step.render() == "each(using(custom_money))"

    def test_unknown_shape_raises(self):
        with pytest.raises(TypeError, match="unknown field shape"):
            load_step("integer", {})  # type: ignore[arg-type]


# ─── Domain -> wire rules ────────────────────────────────────────────────────

class TestDumpStep:
    def test_date(self):
        assert dump_step(PrimitiveShape("date")).render() == "dump_date"

    def test_date_time(self):
        assert dump_step(PrimitiveShape("date-time")).render() == "dump_date_time"

    @pytest.mark.parametrize("primitive", ["integer", "boolean", "string", "double"])
    def test_other_primitives_pass_through(self, primitive):
        assert dump_step(PrimitiveShape(primitive)) == PASSED

    def test_type_reference(self):
        assert dump_step(TypeShape("Widget")).render() == "nested(map_widget_to_dto)"

    def test_array_of_enums(self):
        assert dump_step(ArrayShape(EnumShape("color"))).render() == "each(nested(map_color_to_dto))"

    def test_unknown_shape_raises(self):
        with pytest.raises(TypeError):
            dump_step(None)  # type: ignore[arg-type]


# ─── Rendering into client code ──────────────────────────────────────────────

class TestApplyStep:
    def test_passthrough_is_the_value(self):
        assert apply_step(PASSED, "data", "helpers.") == "data"

    def test_nested_mapper_called_directly(self):
        step = Step("nested", Step("map_dto_to_widget"))
        assert apply_step(step, "data", "helpers.") == "helpers.map_dto_to_widget(data)"

    def test_other_steps_unwrap_cast(self):
        step = Step("each", Step("nested", Step("map_dto_to_widget")))
        assert apply_step(step, "data", "helpers.") == (
            "helpers.each(helpers.nested(helpers.map_dto_to_widget))(data).value"
        )

    def test_walk_visits_inner_steps(self):
        step = Step("each", Step("cast_integer", kind="integer"))
        assert [s.func for s in step.walk()] == ["each", "cast_integer"]
