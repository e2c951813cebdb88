"""Rendering of parsed statements as coloured, Turtle-like text."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import IO, Any

from rdfless.config import ColorConfig, Config
from rdfless.model import InputFormat, ObjectType, OwnedTriple, SubjectType
from rdfless.parser import parse

_XSD = "http://www.w3.org/2001/XMLSchema#"
_UNQUOTED_DATATYPES = frozenset(
    _XSD + name for name in ("integer", "decimal", "float", "double", "boolean")
)
_BASIC_DATATYPES = _UNQUOTED_DATATYPES | frozenset(
    _XSD + name for name in ("string", "date", "time", "dateTime")
)

Prefixes = Mapping[str, str]


@dataclass
class Args:
    """Options deciding how input is read and rendered."""

    expand_prefixes: bool = False
    compact: bool = False
    input_format: InputFormat | None = None

    def expand(self, config: Config) -> bool:
        """Whether prefixes are expanded; ``compact`` wins over ``expand_prefixes``."""
        if self.compact:
            return False
        if self.expand_prefixes:
            return True
        return config.output.expand

    def format(self) -> InputFormat | None:
        """The input format, or None to use the default."""
        return self.input_format


def _resolve_uri(uri: str, prefixes: Prefixes | None) -> str:
    if prefixes:
        for prefix, iri in prefixes.items():
            if uri.startswith(iri):
                return f"{prefix}:{uri[len(iri):]}"
    return f"<{uri}>"


def format_owned_subject(triple: OwnedTriple, prefixes: Prefixes | None, colors: ColorConfig) -> str:
    """The subject as plain text; colouring is left to the caller."""
    if triple.subject_type is SubjectType.BLANK_NODE:
        return f"_:{triple.subject_value}"
    return _resolve_uri(triple.subject_value, prefixes)


def format_owned_predicate(triple: OwnedTriple, prefixes: Prefixes | None, colors: ColorConfig) -> str:
    """The predicate, coloured."""
    return colors.get_color("predicate").paint(_resolve_uri(triple.predicate, prefixes))


def _literal_text(triple: OwnedTriple, prefixes: Prefixes | None) -> str:
    value = triple.object_value
    if triple.object_language is not None:
        return f'"{value}"@{triple.object_language}'
    datatype = triple.object_datatype
    if datatype is None:
        return f'"{value}"'
    if prefixes is not None and datatype in _BASIC_DATATYPES:
        return value if datatype in _UNQUOTED_DATATYPES else f'"{value}"'
    return f'"{value}"^^{_resolve_uri(datatype, prefixes)}'


def format_owned_object(triple: OwnedTriple, prefixes: Prefixes | None, colors: ColorConfig) -> str:
    """The object, coloured.

    With prefixes given (compact mode) common XSD literals drop their datatype,
    and numbers and booleans drop their quotes.
    """
    if triple.object_type is ObjectType.LITERAL:
        return colors.get_color("literal").paint(_literal_text(triple, prefixes))
    if triple.object_type is ObjectType.BLANK_NODE:
        text = f"_:{triple.object_value}"
    else:
        text = _resolve_uri(triple.object_value, prefixes)
    return colors.get_color("object").paint(text)


def print_triples(
    triples: Iterable[OwnedTriple],
    prefixes: Prefixes | None,
    colors: ColorConfig,
    out: IO[str] | None = None,
) -> None:
    """Write statements grouped by graph (default graph first) and by subject."""
    if out is None:
        out = sys.stdout

    groups: dict[str | None, list[OwnedTriple]] = {}
    for triple in triples:
        groups.setdefault(triple.graph, []).append(triple)

    subject_color = colors.get_color("subject")
    graph_color = colors.get_color("graph")

    for graph in sorted(groups, key=lambda name: (name is not None, name or "")):
        named = graph is not None
        if named:
            print(f"{graph_color.paint(_resolve_uri(graph, prefixes), bold=True)} {{", file=out)
        indent = "  " if named else ""

        current: str | None = None
        for triple in groups[graph]:
            subject = format_owned_subject(triple, prefixes, colors)
            predicate = format_owned_predicate(triple, prefixes, colors)
            obj = format_owned_object(triple, prefixes, colors)
            if subject != current:
                if current is not None:
                    print(file=out)
                print(f"{indent}{subject_color.paint(subject, bold=True)}", file=out)
                current = subject
            print(f"{indent}    {predicate} ;", file=out)
            print(f"{indent}        {obj} .", file=out)

        if named:
            print("}", file=out)
            print(file=out)


def print_prefixes(prefixes: Prefixes, colors: ColorConfig, out: IO[str] | None = None) -> None:
    """Write PREFIX declarations, followed by a blank line when there are any."""
    if out is None:
        out = sys.stdout
    color = colors.get_color("prefix")
    for prefix, iri in prefixes.items():
        print(f"{color.paint('PREFIX')} {color.paint(prefix)}: <{iri}> .", file=out)
    if prefixes:
        print(file=out)


def process_input(
    reader: IO[Any],
    args: Args,
    colors: ColorConfig,
    config: Config,
    out: IO[str] | None = None,
) -> None:
    """Parse everything ``reader`` yields and write it out; raises ParseError on bad input."""
    input_format = args.format() or InputFormat.TURTLE
    result = parse(reader.read(), input_format)
    if args.expand(config):
        print_triples(result.triples, None, colors, out)
    else:
        prefixes = dict(result.prefixes)
        print_prefixes(prefixes, colors, out)
        print_triples(result.triples, prefixes, colors, out)