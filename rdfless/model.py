"""Input formats and the plain data record for parsed statements."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import PurePath


class InputFormat(enum.Enum):
    TURTLE = "turtle"
    TRIG = "trig"
    NTRIPLES = "ntriples"
    NQUADS = "nquads"


class SubjectType(enum.Enum):
    NAMED_NODE = "named_node"
    BLANK_NODE = "blank_node"


class ObjectType(enum.Enum):
    NAMED_NODE = "named_node"
    BLANK_NODE = "blank_node"
    LITERAL = "literal"


@dataclass
class OwnedTriple:
    """A statement with its terms as plain strings; ``graph`` is set for quads."""

    subject_type: SubjectType
    subject_value: str
    predicate: str
    object_type: ObjectType
    object_value: str
    object_datatype: str | None = None
    object_language: str | None = None
    graph: str | None = None


_EXTENSIONS = {
    "ttl": InputFormat.TURTLE,
    "trig": InputFormat.TRIG,
    "nt": InputFormat.NTRIPLES,
    "nq": InputFormat.NQUADS,
}


def detect_format_from_path(path: str | PurePath) -> InputFormat | None:
    """Guess the format from the file extension.

    Returns None when the file name has no extension; unknown extensions give Turtle.
    """
    name = PurePath(path).name
    if name in ("", ".", ".."):
        return None
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return _EXTENSIONS.get(ext.lower(), InputFormat.TURTLE)