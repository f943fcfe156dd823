"""Base class of every generated builder.

Generated classes add the per-field setter and accumulator methods; the
value store, the required/nullable checks and the call into the target
live here.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from floe_builder.config import BuilderOptions, ParamSpec
from floe_builder.errors import MissingArgumentError, NullArgumentError
from floe_builder.observability import builder_operation


def target_name(target: Any) -> str:
    """Return a readable name for a target constructor.

    Example:
        >>> target_name(dict)
        'dict'
    """
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", None)
    if isinstance(name, str):
        return name
    return type(target).__name__


class Builder:
    """Fluent builder accumulating constructor arguments by name.

    Subclasses are produced by create_builder() and carry the parameter
    specifications, the target constructor and the generation options as
    class attributes. Each instance owns its own value store.

    Example:
        >>> PointBuilder = create_builder([{"name": "x"}, {"name": "y"}], Point)
        >>> PointBuilder().setY(2).setX(1).build()
        Point(x=1, y=2)
    """

    __slots__ = ("_values", "_owned")

    param_specs: ClassVar[tuple[ParamSpec, ...]] = ()
    target: ClassVar[Callable[..., Any]]
    options: ClassVar[BuilderOptions] = BuilderOptions()

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        # Fields whose list/dict was created by an accumulator, safe to mutate
        self._owned: set[str] = set()

    def __repr__(self) -> str:
        fields = ", ".join(self._values)
        return f"<{type(self).__name__} set=[{fields}]>"

    def values(self) -> Mapping[str, Any]:
        """Return a read-only snapshot of the values stored so far."""
        return MappingProxyType(dict(self._values))

    def _store(self, name: str, value: Any) -> None:
        self._values[name] = value
        self._owned.discard(name)

    def _collection(self, name: str, factory: Callable[..., Any]) -> Any:
        """Return the list or dict for a field, ready to be mutated.

        Absent or None fields start empty. A collection supplied through the
        setter is copied once so the caller's object is left untouched.
        """
        current = self._values.get(name)
        if current is None:
            current = factory()
        elif name not in self._owned:
            current = factory(current)
        self._values[name] = current
        self._owned.add(name)
        return current

    def _check_required(self) -> None:
        for spec in self.param_specs:
            if not spec.is_required:
                continue
            if spec.name not in self._values:
                raise MissingArgumentError(spec.name)
            if self._values[spec.name] is None and not spec.is_nullable:
                raise NullArgumentError(spec.name)

    def arguments(self) -> list[Any]:
        """Return the positional arguments in declaration order.

        Fields never set are filled with the builder's missing placeholder.
        """
        missing = self.options.missing
        return [self._values.get(spec.name, missing) for spec in self.param_specs]

    def build(self) -> Any:
        """Validate the stored values and call the target constructor.

        Returns:
            Whatever the target returns for the positional arguments.

        Raises:
            MissingArgumentError: If a required field was never set.
            NullArgumentError: If a required, non-nullable field is None.
        """
        cls = type(self)
        with builder_operation(
            "build",
            target=target_name(cls.target),
            param_count=len(cls.param_specs),
        ):
            self._check_required()
            args = self.arguments()
            # Collections handed to the target belong to it now
            self._owned.clear()
            return cls.target(*args)
