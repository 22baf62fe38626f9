"""
Structured representation of a generated Kotlin builder function.

Synthesizers describe functions as data (doc comment, signature, parameters,
body lines) through FunctionBuilder; text only appears when the emitter calls
FunctionSpec.render().
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

INDENT = "    "


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str
    default: Optional[str] = None

    def render(self) -> str:
        text = f"{self.name}: {self.type}"
        if self.default is not None:
            text += f" = {self.default}"
        return text


@dataclass(frozen=True)
class DocComment:
    """KDoc block: summary sentence, @param tags and an optional @see."""
    summary: str
    params: Tuple[Tuple[str, str], ...] = ()
    see: Optional[str] = None

    def lines(self) -> list[str]:
        lines = [self.summary]
        tags = [f"@param {name} {text}" for name, text in self.params]
        if self.see:
            tags.append(f"@see {self.see}")
        if tags:
            lines.append("")
            lines.extend(tags)
        return lines

    def render(self) -> str:
        body = [f" * {line}" if line else " *" for line in self.lines()]
        return "\n".join(["/**", *body, " */"])


@dataclass(frozen=True)
class FunctionSpec:
    """
    One extension function on `receiver`, with an expression body.

    The first body line follows `=` on the signature line; the remaining
    lines are emitted verbatim.
    """
    name: str
    receiver: Optional[str]
    parameters: Tuple[Parameter, ...]
    return_type: str
    body: Tuple[str, ...]
    doc: Optional[DocComment] = None
    visibility: str = "public"

    @property
    def parameter_names(self) -> list[str]:
        return [p.name for p in self.parameters]

    def signature(self) -> str:
        qualified = f"{self.receiver}.{self.name}" if self.receiver else self.name
        if not self.parameters:
            return f"{self.visibility} fun {qualified}(): {self.return_type}"
        params = "\n".join(f"{INDENT}{p.render()}," for p in self.parameters)
        return f"{self.visibility} fun {qualified}(\n{params}\n): {self.return_type}"

    def render(self) -> str:
        parts = []
        if self.doc is not None:
            parts.append(self.doc.render())

        first, *rest = self.body
        parts.append(f"{self.signature()} = {first}")
        parts.extend(rest)
        return "\n".join(parts)


@dataclass
class FunctionBuilder:
    """
    Fluent builder for FunctionSpec.

        FunctionBuilder("duration", receiver="Arguments")
            .doc("Creates a duration converter.", see="DurationConverter")
            .argument("displayName", "String")
            .returns("SingleConverter<DateTimePeriod>")
            .line("arg(...)")
            .build()
    """
    name: str
    receiver: Optional[str] = None
    _parameters: list = field(default_factory=list)
    _body: list = field(default_factory=list)
    _return_type: str = "Unit"
    _doc: Optional[DocComment] = None

    def doc(self, summary: str, params=(), see: str = None) -> "FunctionBuilder":
        self._doc = DocComment(summary=summary, params=tuple(params), see=see)
        return self

    def argument(self, name: str, type_: str, default: str = None) -> "FunctionBuilder":
        if name in (p.name for p in self._parameters):
            raise ValueError(f"Parameter '{name}' declared twice on {self.name}")
        self._parameters.append(Parameter(name, type_, default))
        return self

    def returns(self, return_type: str) -> "FunctionBuilder":
        self._return_type = return_type
        return self

    def line(self, text: str, indent: int = 0) -> "FunctionBuilder":
        self._body.append(f"{INDENT * indent}{text}" if text else "")
        return self

    def build(self) -> FunctionSpec:
        if not self._body:
            raise ValueError(f"Function {self.name} has no body")
        return FunctionSpec(
            name=self.name,
            receiver=self.receiver,
            parameters=tuple(self._parameters),
            return_type=self._return_type,
            body=tuple(self._body),
            doc=self._doc,
        )
