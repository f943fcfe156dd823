"""floe-builder: fluent builder classes generated from parameter specifications.

This package provides create_builder(), which turns a declarative list of
parameter specifications and a target constructor into a Builder subclass
with:
- One set<Name>(value) method per parameter
- add<Item>(value) / add<Item>(key, value) accumulators for list and map parameters
- build(), which checks required and non-nullable parameters and calls the
  target with positionally ordered arguments

Specifications are checked eagerly: duplicate names and entries whose
generated method names collide raise ParamSpecError when the class is
created, instead of the later entry silently replacing the earlier one.

Example:
    >>> from floe_builder import create_builder
    >>> PointBuilder = create_builder(
    ...     [{"name": "x", "isRequired": True}, {"name": "y", "isRequired": True}],
    ...     Point,
    ... )
    >>> PointBuilder().setX(1).setY(2).build()
    Point(x=1, y=2)
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    # Factory function
    "create_builder",
    # Builder base class
    "Builder",
    # Configuration models
    "ParamSpec",
    "BuilderOptions",
    "UNSET",
    # Exceptions
    "FloeBuilderError",
    "ConfigurationError",
    "ParamSpecError",
    "MissingArgumentError",
    "NullArgumentError",
]


def __getattr__(name: str) -> object:
    """Lazy import of public API members."""
    if name == "create_builder":
        from floe_builder.factory import create_builder

        return create_builder
    if name == "Builder":
        from floe_builder.builder import Builder

        return Builder
    if name in ("ParamSpec", "BuilderOptions", "UNSET"):
        from floe_builder import config as config_module

        return getattr(config_module, name)
    if name in (
        "FloeBuilderError",
        "ConfigurationError",
        "ParamSpecError",
        "MissingArgumentError",
        "NullArgumentError",
    ):
        from floe_builder import errors as errors_module

        return getattr(errors_module, name)
    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
