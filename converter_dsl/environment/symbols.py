"""
Read-only symbol types handed out by the host environment.

The generator never sees textX nodes directly: it works with resolved type
references and converter descriptors, which are immutable for the whole run.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class TypeRef:
    """A resolved Kotlin type reference, e.g. `kotlin.collections.List<kotlin.String>?`."""
    qualified_name: str
    arguments: Tuple["TypeRef", ...] = ()
    nullable: bool = False
    is_type_variable: bool = False
    is_star: bool = False

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def is_resolved(self) -> bool:
        """False for type variables and star projections, anywhere in the tree."""
        if self.is_type_variable or self.is_star:
            return False
        return all(arg.is_resolved for arg in self.arguments)

    def render(self) -> str:
        """Kotlin spelling using simple names (imports provide the rest)."""
        if self.is_star:
            return "*"
        text = self.simple_name
        if self.arguments:
            text += "<" + ", ".join(arg.render() for arg in self.arguments) + ">"
        if self.nullable:
            text += "?"
        return text

    def import_paths(self) -> list[str]:
        """Qualified names this type needs imported, in order of appearance."""
        paths = []
        if not (self.is_star or self.is_type_variable):
            paths.append(self.qualified_name)
        for arg in self.arguments:
            for path in arg.import_paths():
                if path not in paths:
                    paths.append(path)
        return paths

    @classmethod
    def star(cls) -> "TypeRef":
        return cls(qualified_name="*", is_star=True)


@dataclass(frozen=True)
class EnumReference:
    """An enum entry or constant reference used as an annotation value."""
    path: str

    @property
    def entry(self) -> str:
        return self.path.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class ClassReference:
    """A `Foo::class` literal used as an annotation value."""
    qualified_name: str


@dataclass(frozen=True)
class AnnotationCall:
    """A nested annotation (or any other call) used as an annotation value."""
    callee: str
    arguments: Tuple[Any, ...] = ()


@dataclass(frozen=True, eq=False)
class DeclarationSymbol:
    """
    Opaque handle for an annotated declaration found by the environment.

    Only the environment looks inside `node`; the core uses the name and
    location for reporting.
    """
    qualified_name: str
    source_file: Optional[Path]
    location: str
    node: Any = field(repr=False)


@dataclass(frozen=True, eq=False)
class ConverterDescriptor:
    """A fully resolved converter declaration."""
    simple_name: str
    qualified_name: str
    package_name: str
    supertypes: Tuple[TypeRef, ...]
    source_file: Optional[Path]
    location: str
    symbol: DeclarationSymbol = field(repr=False)
