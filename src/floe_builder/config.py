"""Pydantic configuration models for floe-builder.

This module provides:
- ParamSpec: Declarative description of one buildable field
- BuilderOptions: Naming and placeholder options for generated builders
- UNSET: Placeholder passed for fields that were never set
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator

MUTUALLY_EXCLUSIVE = "isList and isMap are mutually exclusive"


class _Unset:
    """Type of the UNSET sentinel."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class ParamSpec(BaseModel):
    """Declarative description of one buildable field.

    Attributes may be given by field name or by their camelCase alias, so
    plain dicts such as ``{"name": "children", "isList": True,
    "itemName": "child"}`` validate directly.

    Attributes:
        name: Field name; also the suffix of the setter method (required).
        item_name: Suffix of the accumulator method for list and map fields.
        is_required: build() fails when the field was never set.
        is_nullable: A required field may be set to None.
        is_list: The field accumulates values through add<Item>(value).
        is_map: The field accumulates entries through add<Item>(key, value).

    Example:
        >>> spec = ParamSpec(name="children", isList=True, itemName="child")
        >>> spec.accumulator_name
        'child'
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: StrictStr = Field(
        ...,
        min_length=1,
        description="Field name, used for the setter method",
    )
    item_name: StrictStr | None = Field(
        default=None,
        alias="itemName",
        description="Singular name for the accumulator method of list/map fields",
    )
    is_required: bool = Field(
        default=False,
        alias="isRequired",
        description="Field must be set before build()",
    )
    is_nullable: bool = Field(
        default=False,
        alias="isNullable",
        description="A required field may hold None",
    )
    is_list: bool = Field(
        default=False,
        alias="isList",
        description="Field accumulates an ordered list",
    )
    is_map: bool = Field(
        default=False,
        alias="isMap",
        description="Field accumulates an insertion-ordered dict",
    )

    @field_validator("is_required", "is_nullable", "is_list", "is_map", mode="before")
    @classmethod
    def flags_are_truthy(cls, v: Any) -> bool:
        """Interpret flags by truthiness, so 1, "yes" or [] are accepted."""
        return bool(v)

    @model_validator(mode="after")
    def list_and_map_exclusive(self) -> ParamSpec:
        """Validate that a field is not both a list and a map."""
        if self.is_list and self.is_map:
            raise ValueError(MUTUALLY_EXCLUSIVE)
        return self

    @property
    def is_collection(self) -> bool:
        """Return True if the field gets an accumulator method."""
        return self.is_list or self.is_map

    @property
    def accumulator_name(self) -> str:
        """Return the suffix used for the accumulator method.

        Example:
            >>> ParamSpec(name="options", isMap=True).accumulator_name
            'options'
        """
        return self.item_name or self.name


class BuilderOptions(BaseModel):
    """Options controlling how builder classes are generated.

    Attributes:
        setter_prefix: Prefix of setter methods (default "set").
        accumulator_prefix: Prefix of accumulator methods (default "add").
        method_style: "camel" gives setName, "snake" gives set_name.
        class_name: Name of the generated class (default "<Target>Builder").
        missing: Positional placeholder for fields never set (default UNSET).

    Example:
        >>> options = BuilderOptions(method_style="snake")
        >>> options.method_name("set", "width")
        'set_width'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    setter_prefix: str = Field(
        default="set",
        min_length=1,
        description="Prefix of generated setter methods",
    )
    accumulator_prefix: str = Field(
        default="add",
        min_length=1,
        description="Prefix of generated accumulator methods",
    )
    method_style: Literal["camel", "snake"] = Field(
        default="camel",
        description="Naming style of generated methods",
    )
    class_name: str | None = Field(
        default=None,
        description="Name of the generated builder class",
    )
    missing: Any = Field(
        default=UNSET,
        description="Value passed to the target for fields that were never set",
    )

    @field_validator("setter_prefix", "accumulator_prefix", "class_name")
    @classmethod
    def must_be_identifier(cls, v: str | None) -> str | None:
        """Validate that prefixes and the class name are Python identifiers."""
        if v is not None and not v.isidentifier():
            msg = f"must be a valid Python identifier, got: {v!r}"
            raise ValueError(msg)
        return v

    def method_name(self, prefix: str, name: str) -> str:
        """Return the generated method name for a prefix and field name.

        Example:
            >>> BuilderOptions().method_name("add", "child")
            'addChild'
        """
        if self.method_style == "snake":
            return f"{prefix}_{name}"
        return prefix + name[:1].upper() + name[1:]

    def setter_name(self, spec: ParamSpec) -> str:
        """Return the setter method name for a parameter."""
        return self.method_name(self.setter_prefix, spec.name)

    def accumulator_name(self, spec: ParamSpec) -> str:
        """Return the accumulator method name for a list or map parameter."""
        return self.method_name(self.accumulator_prefix, spec.accumulator_name)
