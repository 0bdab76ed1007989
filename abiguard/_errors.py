from collections.abc import Sequence

PathSegment = str | int


def format_path(path: Sequence[PathSegment]) -> str:
    """
    Renders a location inside a JSON value,
    e.g. ``("inputs", 0, "components", 1, "type")`` becomes ``inputs[0].components[1].type``.
    """
    rendered = ""
    for segment in path:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        elif rendered:
            rendered += "." + segment
        else:
            rendered = segment
    return rendered


class ABIValidationError(Exception):
    """
    Base class for the reasons a JSON value is not a valid contract ABI.

    The validators raise these internally; the public entry points
    report them either as a :py:class:`ValidationResult` or as an :py:class:`ABIParseError`.
    """

    path: tuple[PathSegment, ...]
    """The location of the offending value, relative to the validated object."""

    reason: str
    """A human-readable description of what is wrong at :py:attr:`path`."""

    def __init__(self, reason: str, path: Sequence[PathSegment] = ()):
        self.reason = reason
        self.path = tuple(path)
        location = format_path(self.path)
        super().__init__(f"{location}: {reason}" if location else reason)


class StructuralError(ABIValidationError):
    """The top-level value is not an array."""


class DefinitionError(ABIValidationError):
    """
    An ABI entry does not satisfy the rules of its kind
    (unknown ``type``, missing or mistyped field, invalid ``stateMutability``).
    """


class ParameterError(ABIValidationError):
    """
    A parameter (possibly nested inside a tuple) has a malformed
    ``name``, ``type``, ``indexed``, or ``components``.
    """


class NestingTooDeep(ParameterError):
    """Tuple components are nested deeper than the configured limit."""


class TypeGrammarError(ABIValidationError):
    """A leaf type string is not a recognized scalar or array type."""


class ABIParseError(ValueError):
    """
    Raised by the strict parsing functions when the value is not a valid contract ABI.

    The message names the index of the first invalid definition and echoes it.
    If the failure was caused by a specific entry, the underlying
    :py:class:`ABIValidationError` is available as ``__cause__``.
    """
