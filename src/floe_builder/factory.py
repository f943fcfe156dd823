"""Builder class factory.

This module provides the create_builder() factory function, which turns a
sequence of parameter specifications and a target constructor into a new
Builder subclass with one setter per parameter and one accumulator per
list or map parameter.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from floe_builder.builder import Builder, target_name
from floe_builder.config import BuilderOptions, ParamSpec
from floe_builder.errors import ConfigurationError, ParamSpecError
from floe_builder.observability import builder_operation, get_logger

EXPECTED_SEQUENCE = "expected a sequence of parameter specifications"
EXPECTED_CONSTRUCTOR = "expected a constructor function"
RECORD_REQUIRED = "must be a structured record"
NAME_REQUIRED = "requires a string name"
ITEM_NAME_STRING = "itemName must be a string"


def create_builder(
    param_specs: Sequence[ParamSpec | Mapping[str, Any]],
    target: Callable[..., Any],
    *,
    options: BuilderOptions | Mapping[str, Any] | None = None,
) -> type[Builder]:
    """Create a builder class for a target constructor.

    Every argument is validated before any method is generated, so a failed
    call never yields a partially built class.

    Args:
        param_specs: Parameter specifications in positional order. Entries
            may be ParamSpec instances or mappings using either the field
            names (is_list) or their camelCase aliases (isList).
        target: Callable invoked by build() with one positional argument
            per specification.
        options: Method naming and placeholder options.

    Returns:
        A new Builder subclass.

    Raises:
        ConfigurationError: If param_specs is not a sequence, target is not
            callable, or options are invalid.
        ParamSpecError: If an entry is malformed or clashes with another.

    Example:
        >>> TreeBuilder = create_builder(
        ...     [
        ...         {"name": "label", "isRequired": True},
        ...         {"name": "children", "isList": True, "itemName": "child"},
        ...     ],
        ...     Tree,
        ... )
        >>> tree = TreeBuilder().setLabel("root").addChild(leaf).build()
    """
    logger = get_logger()
    param_count = len(param_specs) if _is_sequence(param_specs) else None

    with builder_operation("create", target=target_name(target), param_count=param_count):
        if not _is_sequence(param_specs):
            raise ConfigurationError(EXPECTED_SEQUENCE, argument="param_specs")
        if not callable(target):
            raise ConfigurationError(EXPECTED_CONSTRUCTOR, argument="target")
        builder_options = _resolve_options(options)

        specs = tuple(_to_param_spec(index, entry) for index, entry in enumerate(param_specs))
        class_name = builder_options.class_name or _default_class_name(target)
        methods = _synthesize_methods(specs, builder_options, class_name)

        namespace: dict[str, Any] = {
            "__slots__": (),
            "__module__": getattr(target, "__module__", None) or __name__,
            "__qualname__": class_name,
            "__doc__": f"Builder for {target_name(target)}.",
            "param_specs": specs,
            "target": staticmethod(target),
            "options": builder_options,
            **methods,
        }
        builder_cls = type(class_name, (Builder,), namespace)

        logger.info(
            "builder_created",
            builder=class_name,
            target=target_name(target),
            methods=sorted(methods),
        )
        return builder_cls


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _resolve_options(options: BuilderOptions | Mapping[str, Any] | None) -> BuilderOptions:
    if options is None:
        return BuilderOptions()
    if isinstance(options, BuilderOptions):
        return options
    if isinstance(options, Mapping):
        try:
            return BuilderOptions.model_validate(dict(options))
        except ValidationError as exc:
            msg = f"invalid builder options: {exc.errors()[0]['msg']}"
            raise ConfigurationError(msg, argument="options") from exc
    msg = f"expected BuilderOptions or a mapping, got {type(options).__name__}"
    raise ConfigurationError(msg, argument="options")


def _default_class_name(target: Any) -> str:
    name = getattr(target, "__name__", None)
    if isinstance(name, str) and name.isidentifier():
        return f"{name[:1].upper()}{name[1:]}Builder"
    return "Builder"


def _to_param_spec(index: int, entry: Any) -> ParamSpec:
    """Validate one specification entry into a ParamSpec.

    Raises:
        ParamSpecError: With a reason naming what is wrong with the entry.
    """
    if isinstance(entry, ParamSpec):
        return entry
    if not isinstance(entry, Mapping) or callable(entry):
        raise ParamSpecError(RECORD_REQUIRED, index=index)

    name = entry.get("name")
    param_name = name if isinstance(name, str) and name else None
    try:
        return ParamSpec.model_validate(dict(entry))
    except ValidationError as exc:
        raise ParamSpecError(_reason(exc), param_name=param_name, index=index) from exc


def _reason(exc: ValidationError) -> str:
    """Translate the first pydantic error into a ParamSpecError reason."""
    error = exc.errors()[0]
    field = error["loc"][0] if error["loc"] else None

    if field == "name":
        return NAME_REQUIRED
    if field in ("itemName", "item_name"):
        return ITEM_NAME_STRING
    if error["type"] == "extra_forbidden":
        return f"unknown attribute {field!r}"
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return f"{field}: {error['msg']}"


def _synthesize_methods(
    specs: tuple[ParamSpec, ...],
    options: BuilderOptions,
    class_name: str,
) -> dict[str, Callable[..., Any]]:
    """Generate the setter and accumulator methods for every specification.

    Raises:
        ParamSpecError: On duplicate parameter names or method name clashes.
    """
    methods: dict[str, Callable[..., Any]] = {}
    seen: set[str] = set()

    for index, spec in enumerate(specs):
        if spec.name in seen:
            raise ParamSpecError("duplicate parameter name", param_name=spec.name, index=index)
        seen.add(spec.name)

        generated = [(options.setter_name(spec), _make_setter(spec))]
        if spec.is_list:
            generated.append((options.accumulator_name(spec), _make_list_accumulator(spec)))
        elif spec.is_map:
            generated.append((options.accumulator_name(spec), _make_map_accumulator(spec)))

        for method_name, method in generated:
            if method_name in methods or hasattr(Builder, method_name):
                msg = f"method name {method_name!r} collides with another builder member"
                raise ParamSpecError(msg, param_name=spec.name, index=index)
            method.__name__ = method_name
            method.__qualname__ = f"{class_name}.{method_name}"
            methods[method_name] = method

    return methods


def _make_setter(spec: ParamSpec) -> Callable[..., Any]:
    name = spec.name

    def setter(self: Builder, value: Any) -> Builder:
        self._store(name, value)
        return self

    setter.__doc__ = f"Set {name}, replacing any previous value."
    return setter


def _make_list_accumulator(spec: ParamSpec) -> Callable[..., Any]:
    name = spec.name

    def accumulate(self: Builder, value: Any) -> Builder:
        self._collection(name, list).append(value)
        return self

    accumulate.__doc__ = f"Append one item to {name}."
    return accumulate


def _make_map_accumulator(spec: ParamSpec) -> Callable[..., Any]:
    name = spec.name

    def accumulate(self: Builder, key: Any, value: Any) -> Builder:
        self._collection(name, dict)[key] = value
        return self

    accumulate.__doc__ = f"Insert or replace one entry of {name}."
    return accumulate
