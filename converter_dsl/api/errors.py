"""
Error taxonomy for converter generation.

SpecError and its subclasses are fatal for one declaration only: the driver
records them and carries on with the rest of the batch. ArtifactCollisionError
is fatal for the whole build.
"""


class ConverterGenerationError(Exception):
    """Base class for every error raised by the generator."""


class SpecError(ConverterGenerationError):
    """
    A converter declaration cannot be turned into builder functions.

    Attributes:
        declaration: qualified name of the offending declaration (may be None
            when raised below the level that knows it)
        argument: annotation argument or construct at fault
        location: "file:line:col" of the declaration
    """

    def __init__(self, message: str, declaration: str = None, argument: str = None, location: str = None):
        self.message = message
        self.declaration = declaration
        self.argument = argument
        self.location = location
        super().__init__(message)

    def for_declaration(self, declaration: str, location: str = None) -> "SpecError":
        """Attach declaration context if it is not set yet, and return self."""
        if self.declaration is None:
            self.declaration = declaration
        if self.location is None:
            self.location = location
        return self

    def __str__(self) -> str:
        parts = []
        if self.location:
            parts.append(self.location)
        if self.declaration:
            parts.append(self.declaration)
        prefix = ": ".join(parts)
        suffix = f" (argument '{self.argument}')" if self.argument else ""
        return f"{prefix}: {self.message}{suffix}" if prefix else f"{self.message}{suffix}"


class MissingRequiredArgument(SpecError):
    """The converter annotation lacks `name` or `types` (or they are empty)."""


class InvalidArgument(SpecError):
    """An annotation argument has the wrong shape."""


class NoSupertype(SpecError):
    """The declaration has no supertype carrying a value-type argument."""


class UnresolvedValueType(SpecError):
    """The value-type argument is a type variable or a star projection."""


class IncompatibleVariants(SpecError):
    """The requested variants cannot be combined (LIST + CHOICE)."""


class ArtifactCollisionError(ConverterGenerationError):
    """Two declarations map to the same generated artifact."""

    def __init__(self, identity: str, first: str, second: str):
        self.identity = identity
        self.first = first
        self.second = second
        super().__init__(
            f"Artifact '{identity}' would be generated by both '{first}' and '{second}'."
        )
