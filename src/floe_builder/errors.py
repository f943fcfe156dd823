"""Custom exceptions for floe-builder.

This module defines the exception hierarchy:
- FloeBuilderError (base)
- ConfigurationError
- ParamSpecError
- MissingArgumentError
- NullArgumentError

All errors subclass TypeError: they describe calls made with arguments of
the wrong shape, either to the factory or to the target constructor.
"""

from __future__ import annotations


class FloeBuilderError(TypeError):
    """Base exception for all floe-builder errors.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     Builder().build()
        ... except FloeBuilderError as e:
        ...     print(f"Builder error: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize FloeBuilderError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigurationError(FloeBuilderError):
    """The factory was called with malformed arguments.

    Raised when:
    - The parameter specifications are not a sequence
    - The target is not callable
    - The builder options cannot be validated

    No builder class is produced when this is raised.

    Example:
        >>> try:
        ...     create_builder({"name": "x"}, Point)
        ... except ConfigurationError as e:
        ...     print(e.argument)
        param_specs
    """

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            argument: Name of the offending factory argument.
        """
        details = {"argument": argument} if argument else {}
        super().__init__(message, details=details)
        self.argument = argument


class ParamSpecError(FloeBuilderError):
    """A single parameter specification is malformed.

    Raised at factory time for entries that are not records, lack a string
    name, carry a non-string itemName, combine isList with isMap, or clash
    with another entry. Duplicate names and entries whose generated method
    names coincide (``foo`` and ``Foo`` both give ``setFoo``) are rejected
    rather than letting the later entry win.

    Attributes:
        param_name: Name of the offending entry, or None if it has none.
        index: Position of the entry in the specification sequence.
        reason: Why the entry was rejected.

    Example:
        >>> try:
        ...     create_builder([{"name": "tags", "isList": True, "isMap": True}], Post)
        ... except ParamSpecError as e:
        ...     print(e.reason)
        isList and isMap are mutually exclusive
    """

    def __init__(
        self,
        reason: str,
        *,
        param_name: str | None = None,
        index: int | None = None,
    ) -> None:
        """Initialize ParamSpecError.

        Args:
            reason: Why the entry was rejected.
            param_name: Name of the offending entry, if known.
            index: Position of the entry in the specification sequence.
        """
        label = repr(param_name) if param_name else "<unnamed>"
        details = {"index": str(index)} if index is not None else {}
        super().__init__(f"Parameter spec {label}: {reason}", details=details)
        self.param_name = param_name
        self.index = index
        self.reason = reason


class MissingArgumentError(FloeBuilderError):
    """A required parameter was never set before build().

    Example:
        >>> try:
        ...     PointBuilder().build()
        ... except MissingArgumentError as e:
        ...     print(e.param_name)
        x
    """

    def __init__(self, param_name: str, message: str | None = None) -> None:
        """Initialize MissingArgumentError.

        Args:
            param_name: The required parameter that is missing.
            message: Optional custom error message.
        """
        msg = message or f"Required parameter {param_name} is missing"
        super().__init__(msg)
        self.param_name = param_name


class NullArgumentError(FloeBuilderError):
    """A required, non-nullable parameter was set to None.

    Example:
        >>> try:
        ...     PointBuilder().setX(None).build()
        ... except NullArgumentError as e:
        ...     print(e.param_name)
        x
    """

    def __init__(self, param_name: str, message: str | None = None) -> None:
        """Initialize NullArgumentError.

        Args:
            param_name: The non-nullable parameter that is None.
            message: Optional custom error message.
        """
        msg = message or f"Non-nullable parameter {param_name} is None"
        super().__init__(msg)
        self.param_name = param_name
