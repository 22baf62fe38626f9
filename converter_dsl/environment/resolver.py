"""
Host environment backed by parsed declaration sources.

The environment owns every textX model of the current run and answers the
narrow query interface the generator consumes:

    symbols_with_annotation(annotation) -> [DeclarationSymbol]
    unresolved_types(symbol)            -> [str]
    describe(symbol)                    -> ConverterDescriptor
    read_annotation_arguments(descriptor, annotation) -> {name: value}
    resolve_first_supertype_value_type(descriptor)    -> TypeRef | None

Simple names resolve the way kotlinc resolves them, restricted to what the
environment can see: type parameters, explicit imports, declarations in the
same package, star imports, the default kotlin.* imports and the configured
classpath index. Everything is indexed up front so the environment is
read-only (and thread-safe) once constructed.
"""

from pathlib import Path
from typing import Protocol
from textx import get_location

from converter_dsl.language import (
    build_model,
    build_model_str,
    collect_source_files,
    get_model_declarations,
    get_model_package,
)
from converter_dsl.validation.declaration_validators import import_binding
from converter_dsl.environment.symbols import (
    AnnotationCall,
    ClassReference,
    ConverterDescriptor,
    DeclarationSymbol,
    EnumReference,
    TypeRef,
)


# ------------------------------------------------------------------------------
# Default imports every Kotlin file gets

KOTLIN_DEFAULT_TYPES = {
    "kotlin": (
        "Any", "Unit", "Nothing", "String", "CharSequence", "Char", "Boolean",
        "Byte", "Short", "Int", "Long", "Float", "Double", "Number", "Array",
        "Enum", "Comparable", "Pair", "Triple", "Throwable", "Exception",
        "Suppress", "OptIn", "Deprecated", "PublishedApi", "UByte", "UShort",
        "UInt", "ULong",
    ),
    "kotlin.collections": (
        "Collection", "Iterable", "List", "MutableList", "Set", "MutableSet",
        "Map", "MutableMap",
    ),
    "kotlin.text": ("Regex",),
    "kotlin.ranges": ("IntRange", "LongRange", "CharRange"),
}

ARRAY_FACTORIES = {"arrayOf", "listOf", "setOf", "emptyArray", "emptyList", "emptySet"}


def _default_type_index() -> dict:
    index = {}
    for package, names in KOTLIN_DEFAULT_TYPES.items():
        for name in names:
            index[name] = f"{package}.{name}"
    return index


def _location_string(node, path=None) -> str:
    """Location as file:line:col, naming the file as it was registered."""
    loc = get_location(node)
    filename = str(path) if path is not None else (loc.get("filename") or "<string>")
    return f"{filename}:{loc.get('line')}:{loc.get('col')}"


class AnnotationArgumentError(ValueError):
    """An annotation argument is bound to the same parameter twice."""

    def __init__(self, argument, message: str):
        self.argument = argument
        super().__init__(message)


class SymbolEnvironment(Protocol):
    """Read-only query interface the generator consumes."""

    def symbols_with_annotation(self, annotation: str) -> list[DeclarationSymbol]: ...

    def unresolved_types(self, symbol: DeclarationSymbol) -> list[str]: ...

    def describe(self, symbol: DeclarationSymbol) -> ConverterDescriptor: ...

    def read_annotation_arguments(self, descriptor: ConverterDescriptor, annotation: str) -> dict: ...

    def resolve_first_supertype_value_type(self, descriptor: ConverterDescriptor): ...


class _SourceFile:
    """Per-file resolution scope."""

    def __init__(self, path, model):
        self.path = Path(path) if path else None
        self.model = model
        self.package = get_model_package(model)
        self.explicit = {}
        self.star_packages = []

        for imp in getattr(model, "imports", []) or []:
            bound = import_binding(imp)
            if bound is None:
                self.star_packages.append(imp.path[:-2])
            else:
                self.explicit[bound] = imp.path

    def qualify(self, simple_name: str) -> str:
        return f"{self.package}.{simple_name}" if self.package else simple_name


class SourceEnvironment:
    """
    Environment over a set of parsed declaration sources.

    Args:
        sources: iterable of (path or None, textX model) pairs
        known_types: fully-qualified names available on the classpath
        annotation_parameters: {annotation FQN: ordered parameter names},
            used to map positional annotation arguments
    """

    def __init__(self, sources, known_types=(), annotation_parameters=None):
        self._files = [_SourceFile(path, model) for path, model in sources]
        self._annotation_parameters = dict(annotation_parameters or {})
        self._defaults = _default_type_index()

        # Every name the environment can prove exists
        self._known = set(known_types)
        self._file_of = {}
        for source in self._files:
            for decl in get_model_declarations(source.model):
                self._known.add(source.qualify(decl.name))
                self._file_of[id(decl)] = source

    # --------------------------------------------------------------------------
    # Construction helpers

    @classmethod
    def from_paths(cls, paths, known_types=(), annotation_parameters=None):
        files = collect_source_files(paths)
        return cls(
            [(path, build_model(str(path))) for path in files],
            known_types=known_types,
            annotation_parameters=annotation_parameters,
        )

    @classmethod
    def from_strings(cls, sources: dict, known_types=(), annotation_parameters=None):
        """Build from {file name: source text}; mostly useful in tests."""
        return cls(
            [(Path(name), build_model_str(text, file_name=name)) for name, text in sources.items()],
            known_types=known_types,
            annotation_parameters=annotation_parameters,
        )

    @property
    def source_files(self) -> list:
        return [source.path for source in self._files]

    # --------------------------------------------------------------------------
    # Name resolution

    def _resolve_name(self, name: str, source: _SourceFile, type_params=()):
        """
        Resolve a (possibly dotted) name to a fully-qualified one.

        Returns None when the environment cannot see the type.
        """
        head, _, rest = name.partition(".")

        if not rest and name in type_params:
            return name

        resolved_head = self._resolve_simple(head, source)
        if resolved_head is not None:
            return f"{resolved_head}.{rest}" if rest else resolved_head

        # Fully-qualified usage, e.g. `kotlinx.datetime.DateTimePeriod`
        if rest and (name in self._known or head[:1].islower()):
            return name
        return None

    def _resolve_simple(self, simple: str, source: _SourceFile):
        if simple in source.explicit:
            return source.explicit[simple]

        same_package = source.qualify(simple)
        if same_package in self._known:
            return same_package

        for package in source.star_packages:
            candidate = f"{package}.{simple}"
            if candidate in self._known:
                return candidate

        return self._defaults.get(simple)

    def _resolve_type(self, ref, source: _SourceFile, type_params=()) -> TypeRef:
        """Turn a textX TypeReference into a TypeRef; raise LookupError if unresolvable."""
        if ref.name in type_params:
            return TypeRef(
                qualified_name=ref.name,
                nullable=bool(ref.nullable),
                is_type_variable=True,
            )

        qualified = self._resolve_name(ref.name, source, type_params)
        if qualified is None:
            raise LookupError(ref.name)

        arguments = []
        for arg in getattr(ref, "arguments", []) or []:
            if arg.star:
                arguments.append(TypeRef.star())
            else:
                arguments.append(self._resolve_type(arg.type, source, type_params))

        return TypeRef(
            qualified_name=qualified,
            arguments=tuple(arguments),
            nullable=bool(ref.nullable),
        )

    def _unresolved_in(self, ref, source, type_params) -> list[str]:
        missing = []
        if ref.name not in type_params and self._resolve_name(ref.name, source, type_params) is None:
            missing.append(ref.name)
        for arg in getattr(ref, "arguments", []) or []:
            if not arg.star:
                missing.extend(self._unresolved_in(arg.type, source, type_params))
        return missing

    @staticmethod
    def _type_params(decl) -> tuple:
        params = getattr(decl, "typeParameters", None)
        if params is None:
            return ()
        return tuple(p.name for p in params.parameters)

    # --------------------------------------------------------------------------
    # Query interface

    def symbols_with_annotation(self, annotation: str) -> list[DeclarationSymbol]:
        """Classes carrying `annotation`, in file then declaration order."""
        found = []
        for source in self._files:
            for decl in get_model_declarations(source.model):
                if decl.kind != "class":
                    continue
                if self._find_annotation(decl, source, annotation) is None:
                    continue
                found.append(DeclarationSymbol(
                    qualified_name=source.qualify(decl.name),
                    source_file=source.path,
                    location=_location_string(decl, source.path),
                    node=decl,
                ))
        return found

    def unresolved_types(self, symbol: DeclarationSymbol) -> list[str]:
        """Names the environment cannot resolve in this pass (empty means valid)."""
        decl = symbol.node
        source = self._file_of[id(decl)]
        type_params = self._type_params(decl)

        missing = []
        for annotation in getattr(decl, "annotations", []) or []:
            if self._resolve_name(annotation.type, source) is None:
                missing.append(annotation.type)
        if decl.typeParameters is not None:
            for param in decl.typeParameters.parameters:
                if param.bound is not None:
                    missing.extend(self._unresolved_in(param.bound, source, type_params))
        for supertype in getattr(decl, "supertypes", []) or []:
            missing.extend(self._unresolved_in(supertype.type, source, type_params))

        # Keep first-seen order, drop repeats
        return list(dict.fromkeys(missing))

    def describe(self, symbol: DeclarationSymbol) -> ConverterDescriptor:
        decl = symbol.node
        source = self._file_of[id(decl)]
        type_params = self._type_params(decl)

        supertypes = tuple(
            self._resolve_type(s.type, source, type_params)
            for s in getattr(decl, "supertypes", []) or []
        )
        return ConverterDescriptor(
            simple_name=decl.name,
            qualified_name=symbol.qualified_name,
            package_name=source.package,
            supertypes=supertypes,
            source_file=source.path,
            location=symbol.location,
            symbol=symbol,
        )

    def read_annotation_arguments(self, descriptor: ConverterDescriptor, annotation: str) -> dict:
        """
        Return the annotation's arguments keyed by parameter name.

        Positional arguments are mapped onto the annotation's declared
        parameter order; positions beyond it are keyed by their index.

        Raises:
            AnnotationArgumentError: a parameter is given both by position
                and by name
        """
        decl = descriptor.symbol.node
        source = self._file_of[id(decl)]
        usage = self._find_annotation(decl, source, annotation)
        if usage is None:
            return {}

        parameter_names = self._annotation_parameters.get(annotation, ())
        arguments = {}
        for index, argument in enumerate(getattr(usage, "arguments", []) or []):
            key = argument.key
            if not key:
                key = parameter_names[index] if index < len(parameter_names) else index
            if key in arguments:
                raise AnnotationArgumentError(
                    key, f"Parameter '{key}' is given both by position and by name"
                )
            arguments[key] = self._convert_value(argument.value, source)
        return arguments

    def resolve_first_supertype_value_type(self, descriptor: ConverterDescriptor):
        """First type argument of the first supertype, or None if there is none."""
        if not descriptor.supertypes:
            return None
        first = descriptor.supertypes[0]
        if not first.arguments:
            return None
        return first.arguments[0]

    # --------------------------------------------------------------------------
    # Annotation helpers

    def _find_annotation(self, decl, source, annotation: str):
        for usage in getattr(decl, "annotations", []) or []:
            if self._resolve_name(usage.type, source) == annotation:
                return usage
        return None

    def _convert_value(self, value, source):
        """Convert a textX annotation value into plain Python data."""
        cls = type(value).__name__

        if cls == "StringValue":
            return value.value
        if cls == "BooleanValue":
            return value.value == "true"
        if cls == "NumberValue":
            return value.value
        if cls == "ArrayValue":
            return [self._convert_value(item, source) for item in value.items]
        if cls == "ClassLiteral":
            qualified = self._resolve_name(value.type, source) or value.type
            return ClassReference(qualified)
        if cls == "CallValue":
            converted = [self._convert_value(arg.value, source) for arg in value.arguments]
            if value.callee in ARRAY_FACTORIES:
                return converted
            return AnnotationCall(value.callee, tuple(converted))
        if cls == "ReferenceValue":
            return EnumReference(value.path)

        raise TypeError(f"Unsupported annotation value: {cls}")
