"""Shared fixtures."""

from datetime import date

import pytest

from core import Field, FieldKind, LogicKind


@pytest.fixture
def today() -> date:
    return date(2026, 10, 18)


@pytest.fixture
def make_text():
    """Factory for text fields with sensible defaults."""

    def _make_text(
        id: str = "f1",
        logic_kind: LogicKind = LogicKind.STATIC,
        raw_value: str = "",
        variable_key: str | None = None,
        **kwargs,
    ) -> Field:
        return Field(
            id=id,
            kind=FieldKind.TEXT,
            x=kwargs.pop("x", 10),
            y=kwargs.pop("y", 10),
            width=kwargs.pop("width", 200),
            raw_value=raw_value,
            variable_key=variable_key,
            logic_kind=logic_kind,
            **kwargs,
        )

    return _make_text


@pytest.fixture
def make_image():
    def _make_image(id: str = "img1", **kwargs) -> Field:
        return Field(
            id=id,
            kind=FieldKind.IMAGE,
            x=kwargs.pop("x", 0),
            y=kwargs.pop("y", 0),
            width=kwargs.pop("width", 100),
            height=kwargs.pop("height", 80),
            src=kwargs.pop("src", "data:image/png;base64,AAAA"),
            **kwargs,
        )

    return _make_image
