"""Identifier casing helpers used to build function names."""


def to_capitalized(name: str) -> str:
    """Uppercase (titlecase) the first character only: "duration" -> "Duration"."""
    if not name:
        return name
    first = name[0]
    return (first.title() if first.islower() else first) + name[1:]


def to_lowered(name: str) -> str:
    """Lowercase the first character only: "Duration" -> "duration"."""
    if not name:
        return name
    first = name[0]
    return (first.lower() if first.isupper() else first) + name[1:]
