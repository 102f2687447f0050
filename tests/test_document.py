"""Tests for document model operations."""

import pytest

from core import Field, FieldKind, LogicKind, PageSettings, PageUnit, Template, TextAlign
from core.document import (
    add_image_field,
    add_text_field,
    find_field,
    generate_id,
    move_field,
    remove_field,
    render_order,
    resize_field,
    scale_text_field,
    update_field,
    update_settings,
    variable_keys,
)


class TestFieldValidation:
    def test_width_must_be_positive(self):
        with pytest.raises(ValueError):
            Field(id="a", kind=FieldKind.TEXT, x=0, y=0, width=0)

    def test_image_requires_height(self):
        with pytest.raises(ValueError):
            Field(id="a", kind=FieldKind.IMAGE, x=0, y=0, width=10)

    def test_image_opacity_range(self):
        with pytest.raises(ValueError):
            Field(id="a", kind=FieldKind.IMAGE, x=0, y=0, width=10, height=10, opacity=1.5)

    def test_text_height_is_optional(self, make_text):
        assert make_text().height is None


class TestAddFields:
    def test_add_text_defaults(self):
        fields = add_text_field(())
        assert len(fields) == 1
        added = fields[0]
        assert added.kind == FieldKind.TEXT
        assert added.logic_kind == LogicKind.STATIC
        assert (added.x, added.y, added.width) == (50, 50, 200)
        assert added.raw_value == "Text"
        assert added.font_size == 16
        assert added.font_family == "Arial"
        assert added.align == TextAlign.LEFT

    @pytest.mark.parametrize(
        "kind,width,raw",
        [
            (LogicKind.DATE, 200, "{{date}}"),
            (LogicKind.CURRENCY_ENG, 300, "1234.56"),
            (LogicKind.CURRENCY_CHI, 300, "1234.56"),
            (LogicKind.CURRENCY_NUM, 150, "1234.56"),
        ],
    )
    def test_per_kind_defaults(self, kind, width, raw):
        added = add_text_field((), kind)[0]
        assert added.width == width
        assert added.raw_value == raw

    def test_overrides(self):
        added = add_text_field((), LogicKind.VARIABLE, variable_key="payee", x=5)[0]
        assert added.variable_key == "payee"
        assert added.x == 5

    def test_ids_are_fresh(self):
        fields = add_text_field(add_text_field(()))
        assert fields[0].id != fields[1].id
        assert len(fields[0].id) == 9

    def test_input_not_mutated(self, make_text):
        original = (make_text(),)
        result = add_text_field(original)
        assert len(original) == 1
        assert result[0] is original[0]

    def test_add_image_scales_to_fit(self):
        image = add_image_field((), "data:x", 600, 300)[0]
        assert image.kind == FieldKind.IMAGE
        assert (image.width, image.height) == (300, 150)
        assert image.opacity == 0.5

    def test_add_small_image_keeps_size(self):
        image = add_image_field((), "data:x", 120, 80)[0]
        assert (image.width, image.height) == (120, 80)

    def test_generate_id_alphabet(self):
        assert all(c.isalnum() and not c.isupper() for c in generate_id())


class TestEditFields:
    def test_update(self, make_text):
        fields = (make_text(id="a"), make_text(id="b"))
        result = update_field(fields, "b", raw_value="hello")
        assert find_field(result, "b").raw_value == "hello"
        assert result[0] is fields[0]

    def test_update_rejects_resolved_text(self, make_text):
        with pytest.raises(ValueError):
            update_field((make_text(id="a"),), "a", resolved_text="x")

    def test_update_missing_is_noop(self, make_text):
        fields = (make_text(id="a"),)
        assert update_field(fields, "zzz", raw_value="x") is fields

    def test_move(self, make_text):
        result = move_field((make_text(id="a"),), "a", 120, 240)
        assert (result[0].x, result[0].y) == (120, 240)

    def test_resize_clamps_to_minimum(self, make_image):
        result = resize_field((make_image(id="i"),), "i", 1, 2)
        assert (result[0].width, result[0].height) == (5, 5)

    def test_resize_keeps_height_when_omitted(self, make_image):
        result = resize_field((make_image(id="i", height=80),), "i", 50)
        assert result[0].height == 80

    def test_scale_text(self, make_text):
        result = scale_text_field((make_text(id="a", width=100, font_size=10),), "a", 2)
        assert result[0].width == 200
        assert result[0].font_size == 20

    def test_scale_ignores_images(self, make_image):
        fields = (make_image(id="i"),)
        assert scale_text_field(fields, "i", 2) is fields

    def test_remove(self, make_text):
        fields = (make_text(id="a"), make_text(id="b"))
        assert [f.id for f in remove_field(fields, "a")] == ["b"]

    def test_remove_missing_is_noop(self, make_text):
        fields = (make_text(id="a"),)
        assert remove_field(fields, "missing") is fields


class TestOrdering:
    def test_images_render_beneath_text(self, make_text, make_image):
        fields = (make_text(id="t1"), make_image(id="i1"), make_text(id="t2"), make_image(id="i2"))
        assert [f.id for f in render_order(fields)] == ["i1", "i2", "t1", "t2"]

    def test_collection_order_is_preserved(self, make_text, make_image):
        fields = (make_text(id="t1"), make_image(id="i1"))
        render_order(fields)
        assert [f.id for f in fields] == ["t1", "i1"]

    def test_variable_keys(self, make_text):
        fields = (
            make_text(id="a", variable_key="amount"),
            make_text(id="b", variable_key="payee"),
            make_text(id="c", variable_key="amount"),
            make_text(id="d", variable_key="  "),
            make_text(id="e"),
        )
        assert variable_keys(fields) == ["amount", "payee"]


class TestPageSettings:
    def test_a4_pixels(self):
        settings = PageSettings()
        assert (settings.width, settings.height) == (794, 1123)

    def test_inches(self):
        settings = update_settings(PageSettings(), unit=PageUnit.IN, width_unit=8.5, height_unit=11)
        assert (settings.width, settings.height) == (816, 1056)


class TestSerialization:
    def test_template_round_trip(self, make_text, make_image):
        template = Template(
            id="t1",
            name="Cheque",
            owner_id="u1",
            fields=(
                make_text(id="a", logic_kind=LogicKind.CURRENCY_ENG, raw_value="5", variable_key="amount"),
                make_image(id="i"),
            ),
            is_public=True,
        )
        restored = Template.from_dict(template.to_dict())
        assert restored == template

    def test_wire_keys(self, make_text):
        data = make_text(id="a", raw_value="x", variable_key="k").to_dict()
        assert data["type"] == "text"
        assert data["rawValue"] == "x"
        assert data["variableKey"] == "k"
        assert data["logicType"] == "STATIC"

    def test_legacy_customer_name(self):
        field = Field.from_dict({"id": "a", "type": "text", "width": 100, "logicType": "CUSTOMER_NAME"})
        assert field.logic_kind == LogicKind.BOUND_NAME
