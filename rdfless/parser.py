"""Parsers for Turtle, TriG, N-Triples and N-Quads documents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urljoin

from rdfless.model import InputFormat, ObjectType, OwnedTriple, SubjectType

_RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
_XSD = "http://www.w3.org/2001/XMLSchema#"
_RDF_TYPE = _RDF + "type"
_RDF_FIRST = _RDF + "first"
_RDF_REST = _RDF + "rest"
_RDF_NIL = _RDF + "nil"

_STRING_ESCAPES = {
    "t": "\t",
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "f": "\f",
    '"': '"',
    "'": "'",
    "\\": "\\",
}
_LOCAL_ESCAPES = set("_~.-!$&'()*+,;=/?#@%")
_IRI_FORBIDDEN = set('<>"{}|^`\\')

_NUMBER = re.compile(
    r"[+-]?(?:(?P<double>(?:\d+\.\d*|\.\d+|\d+)[eE][+-]?\d+)"
    r"|(?P<decimal>\d*\.\d+)|(?P<integer>\d+))"
)
_BOOLEAN = re.compile(r"(?:true|false)(?![\w\-:%])")
_LANG = re.compile(r"[A-Za-z]+(?:-[A-Za-z0-9]+)*")
_HEX = re.compile(r"[0-9A-Fa-f]+")
_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")
_PREFIX_NAME = re.compile(r"([^\s:<>]*):")
_KEYWORDS = {
    word: re.compile(rf"(?i:{word})(?=\s|<|\{{|$)") for word in ("PREFIX", "BASE", "GRAPH")
}


class ParseError(Exception):
    """Raised when a document is not well formed."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        where = f"line {line}, column {column}: " if line is not None else ""
        super().__init__(f"{where}{message}")


@dataclass
class ParseResult:
    """The statements of a document and the prefixes it declared."""

    triples: list[OwnedTriple] = field(default_factory=list)
    prefixes: dict[str, str] = field(default_factory=dict)

    def __iter__(self):
        return iter(self.triples)

    def __len__(self) -> int:
        return len(self.triples)


@dataclass(frozen=True)
class _Iri:
    value: str


@dataclass(frozen=True)
class _BlankNode:
    id: str


@dataclass(frozen=True)
class _Literal:
    value: str
    datatype: str | None = None
    language: str | None = None


def _is_name_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_-.:%" or ord(ch) > 127


def _graph_name(term) -> str:
    if isinstance(term, _BlankNode):
        return f"_:{term.id}"
    return term.value


class RdfParser:
    """Parses one document in the given format into owned statements."""

    def __init__(self, text: str | bytes, input_format: InputFormat = InputFormat.TURTLE,
                 base: str | None = None):
        if isinstance(text, bytes):
            try:
                text = text.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ParseError(f"input is not valid UTF-8: {exc}") from exc
        self._text = text
        self._format = input_format
        self._base = base
        self._pos = 0
        self._prefixes: dict[str, str] = {}
        self._triples: list[OwnedTriple] = []
        self._graph: str | None = None
        self._bnode_counter = 0
        self._parsed = False

    def parse(self) -> ParseResult:
        """Parse the whole document; raises ParseError on malformed input."""
        if not self._parsed:
            if self._format in (InputFormat.NTRIPLES, InputFormat.NQUADS):
                self._parse_line_based()
            else:
                self._parse_turtle_document()
            self._parsed = True
        return ParseResult(list(self._triples), dict(self._prefixes))

    # -- low-level helpers -------------------------------------------------

    def _error(self, message: str) -> ParseError:
        line = self._text.count("\n", 0, self._pos) + 1
        column = self._pos - (self._text.rfind("\n", 0, self._pos) + 1) + 1
        return ParseError(message, line, column)

    def _at_end(self) -> bool:
        return self._pos >= len(self._text)

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _skip_ws(self) -> None:
        text = self._text
        while self._pos < len(text):
            ch = text[self._pos]
            if ch in " \t\r\n":
                self._pos += 1
            elif ch == "#":
                newline = text.find("\n", self._pos)
                self._pos = len(text) if newline < 0 else newline + 1
            else:
                break

    def _expect(self, token: str) -> None:
        if not self._text.startswith(token, self._pos):
            found = self._peek() or "end of input"
            raise self._error(f"expected '{token}', found '{found}'")
        self._pos += len(token)

    def _keyword(self, word: str) -> bool:
        match = _KEYWORDS[word].match(self._text, self._pos)
        if match:
            self._pos = match.end()
            return True
        return False

    def _fresh_blank_node(self) -> _BlankNode:
        self._bnode_counter += 1
        return _BlankNode(f"anon{self._bnode_counter}")

    def _emit(self, subject, predicate: str, obj) -> None:
        if isinstance(subject, _BlankNode):
            subject_type, subject_value = SubjectType.BLANK_NODE, subject.id
        else:
            subject_type, subject_value = SubjectType.NAMED_NODE, subject.value
        datatype = language = None
        if isinstance(obj, _Literal):
            object_type, object_value = ObjectType.LITERAL, obj.value
            datatype, language = obj.datatype, obj.language
        elif isinstance(obj, _BlankNode):
            object_type, object_value = ObjectType.BLANK_NODE, obj.id
        else:
            object_type, object_value = ObjectType.NAMED_NODE, obj.value
        self._triples.append(
            OwnedTriple(
                subject_type=subject_type,
                subject_value=subject_value,
                predicate=predicate,
                object_type=object_type,
                object_value=object_value,
                object_datatype=datatype,
                object_language=language,
                graph=self._graph,
            )
        )

    # -- terms -------------------------------------------------------------

    def _unicode_escape(self) -> str:
        width = 4 if self._text[self._pos + 1] == "u" else 8
        digits = self._text[self._pos + 2 : self._pos + 2 + width]
        if len(digits) != width or not _HEX.fullmatch(digits):
            raise self._error("invalid unicode escape")
        self._pos += 2 + width
        try:
            return chr(int(digits, 16))
        except ValueError as exc:
            raise self._error("unicode escape out of range") from exc

    def _escape(self) -> str:
        nxt = self._text[self._pos + 1 : self._pos + 2]
        if nxt in ("u", "U"):
            return self._unicode_escape()
        if nxt and nxt in _STRING_ESCAPES:
            self._pos += 2
            return _STRING_ESCAPES[nxt]
        raise self._error(f"invalid escape sequence '\\{nxt}'")

    def _read_iri(self) -> str:
        self._expect("<")
        parts = []
        while True:
            if self._at_end():
                raise self._error("unterminated IRI")
            ch = self._text[self._pos]
            if ch == ">":
                self._pos += 1
                break
            if ch == "\\":
                if self._text[self._pos + 1 : self._pos + 2] not in ("u", "U"):
                    raise self._error("invalid escape in IRI")
                parts.append(self._unicode_escape())
                continue
            if ch in _IRI_FORBIDDEN or ord(ch) <= 0x20:
                raise self._error(f"invalid character {ch!r} in IRI")
            parts.append(ch)
            self._pos += 1
        iri = "".join(parts)
        if self._base is not None and not _SCHEME.match(iri):
            iri = urljoin(self._base, iri)
        return iri

    def _read_name(self) -> str:
        text = self._text
        parts: list[tuple[str, int]] = []
        while self._pos < len(text):
            ch = text[self._pos]
            if ch == "\\" and text[self._pos + 1 : self._pos + 2] in _LOCAL_ESCAPES:
                parts.append((text[self._pos + 1], 2))
                self._pos += 2
            elif _is_name_char(ch):
                parts.append((ch, 1))
                self._pos += 1
            else:
                break
        while parts and parts[-1] == (".", 1):
            parts.pop()
            self._pos -= 1
        return "".join(ch for ch, _ in parts)

    def _read_pname(self) -> str:
        start = self._pos
        name = self._read_name()
        if ":" not in name:
            self._pos = start
            found = self._peek() or "end of input"
            raise self._error(f"unexpected '{found}'")
        prefix, _, local = name.partition(":")
        if prefix not in self._prefixes:
            self._pos = start
            raise self._error(f"The prefix {prefix}: has not been declared")
        return self._prefixes[prefix] + local

    def _read_blank_node(self) -> _BlankNode:
        self._expect("_:")
        text = self._text
        start = self._pos
        while self._pos < len(text) and (
            text[self._pos].isalnum() or text[self._pos] in "_-." or ord(text[self._pos]) > 127
        ):
            self._pos += 1
        while self._pos > start and text[self._pos - 1] == ".":
            self._pos -= 1
        if self._pos == start:
            raise self._error("empty blank node label")
        return _BlankNode(text[start : self._pos])

    def _resource(self):
        if self._peek() == "<":
            return _Iri(self._read_iri())
        if self._text.startswith("_:", self._pos):
            return self._read_blank_node()
        return _Iri(self._read_pname())

    def _string_body(self, terminator: str, multiline: bool) -> str:
        parts = []
        while True:
            if self._at_end():
                raise self._error("unterminated string literal")
            if self._text.startswith(terminator, self._pos):
                self._pos += len(terminator)
                return "".join(parts)
            ch = self._text[self._pos]
            if ch == "\\":
                parts.append(self._escape())
                continue
            if not multiline and ch in "\r\n":
                raise self._error("line break in short string literal")
            parts.append(ch)
            self._pos += 1

    def _literal(self, strict: bool) -> _Literal:
        quote = self._peek()
        if strict and quote != '"':
            raise self._error("expected '\"'")
        if not strict and self._text.startswith(quote * 3, self._pos):
            self._pos += 3
            value = self._string_body(quote * 3, multiline=True)
        else:
            self._pos += 1
            value = self._string_body(quote, multiline=False)
        if self._peek() == "@":
            self._pos += 1
            match = _LANG.match(self._text, self._pos)
            if not match:
                raise self._error("invalid language tag")
            self._pos = match.end()
            return _Literal(value, language=match.group())
        if self._text.startswith("^^", self._pos):
            self._pos += 2
            if self._peek() == "<":
                datatype = self._read_iri()
            elif strict:
                raise self._error("expected '<'")
            else:
                datatype = self._read_pname()
            return _Literal(value, datatype=datatype)
        return _Literal(value)

    # -- N-Triples and N-Quads ----------------------------------------------

    def _nt_subject(self):
        if self._peek() == "<":
            return _Iri(self._read_iri())
        if self._text.startswith("_:", self._pos):
            return self._read_blank_node()
        raise self._error(f"unexpected '{self._peek() or 'end of input'}'")

    def _parse_line_based(self) -> None:
        quads = self._format is InputFormat.NQUADS
        while True:
            self._skip_ws()
            if self._at_end():
                return
            subject = self._nt_subject()
            self._skip_ws()
            if self._peek() != "<":
                raise self._error("expected a predicate IRI")
            predicate = self._read_iri()
            self._skip_ws()
            obj = self._literal(strict=True) if self._peek() == '"' else self._nt_subject()
            self._skip_ws()
            graph = None
            if quads and (self._peek() == "<" or self._text.startswith("_:", self._pos)):
                graph = _graph_name(self._nt_subject())
                self._skip_ws()
            self._expect(".")
            self._graph = graph
            self._emit(subject, predicate, obj)
        
    # -- Turtle and TriG ----------------------------------------------------

    def _parse_turtle_document(self) -> None:
        while True:
            self._skip_ws()
            if self._at_end():
                return
            self._statement()

    def _statement(self) -> None:
        trig = self._format is InputFormat.TRIG
        if self._text.startswith("@prefix", self._pos):
            self._pos += len("@prefix")
            self._prefix_directive()
            self._skip_ws()
            self._expect(".")
            return
        if self._text.startswith("@base", self._pos):
            self._pos += len("@base")
            self._base_directive()
            self._skip_ws()
            self._expect(".")
            return
        if self._keyword("PREFIX"):
            self._prefix_directive()
            return
        if self._keyword("BASE"):
            self._base_directive()
            return
        if trig:
            if self._keyword("GRAPH"):
                self._wrapped_graph(self._graph_label())
                return
            if self._peek() == "{":
                self._wrapped_graph(None)
                return
        subject, kind = self._subject()
        self._skip_ws()
        if trig and kind in ("simple", "anon") and self._peek() == "{":
            self._wrapped_graph(subject)
            return
        self._triples_rest(subject, kind)
        self._skip_ws()
        self._expect(".")

    def _prefix_directive(self) -> None:
        self._skip_ws()
        match = _PREFIX_NAME.match(self._text, self._pos)
        if not match or match.group(1).endswith("."):
            raise self._error("invalid prefix name")
        self._pos = match.end()
        self._skip_ws()
        self._prefixes[match.group(1)] = self._read_iri()

    def _base_directive(self) -> None:
        self._skip_ws()
        self._base = self._read_iri()

    def _graph_label(self):
        self._skip_ws()
        if self._peek() == "[":
            self._pos += 1
            self._skip_ws()
            self._expect("]")
            return self._fresh_blank_node()
        return self._resource()

    def _wrapped_graph(self, label) -> None:
        self._skip_ws()
        self._expect("{")
        previous = self._graph
        self._graph = None if label is None else _graph_name(label)
        while True:
            self._skip_ws()
            if self._peek() == "}":
                self._pos += 1
                break
            if self._at_end():
                raise self._error("unterminated graph block")
            subject, kind = self._subject()
            self._triples_rest(subject, kind)
            self._skip_ws()
            if self._peek() == ".":
                self._pos += 1
            elif self._peek() != "}":
                raise self._error("expected '.' or '}'")
        self._graph = previous

    def _subject(self):
        self._skip_ws()
        ch = self._peek()
        if ch == "[":
            self._pos += 1
            self._skip_ws()
            node = self._fresh_blank_node()
            if self._peek() == "]":
                self._pos += 1
                return node, "anon"
            self._predicate_object_list(node)
            self._skip_ws()
            self._expect("]")
            return node, "props"
        if ch == "(":
            return self._collection(), "collection"
        if not ch:
            raise self._error("unexpected end of input")
        return self._resource(), "simple"

    def _triples_rest(self, subject, kind: str) -> None:
        self._skip_ws()
        if kind == "props" and self._peek() in (".", "}"):
            return
        self._predicate_object_list(subject)

    def _predicate_object_list(self, subject) -> None:
        while True:
            self._skip_ws()
            predicate = self._verb()
            self._object_list(subject, predicate)
            self._skip_ws()
            if self._peek() != ";":
                return
            while self._peek() == ";":
                self._pos += 1
                self._skip_ws()
            if self._peek() in (".", "]", "}", ""):
                return

    def _verb(self) -> str:
        text = self._text
        if self._peek() == "a":
            nxt = text[self._pos + 1 : self._pos + 2]
            if not nxt or not _is_name_char(nxt):
                self._pos += 1
                return _RDF_TYPE
        if self._peek() == "<":
            return self._read_iri()
        if not self._peek():
            raise self._error("unexpected end of input")
        if text.startswith("_:", self._pos) or self._peek() in "[(\"'":
            raise self._error("a predicate must be an IRI")
        return self._read_pname()

    def _object_list(self, subject, predicate: str) -> None:
        while True:
            self._emit(subject, predicate, self._object())
            self._skip_ws()
            if self._peek() != ",":
                return
            self._pos += 1

    def _object(self):
        self._skip_ws()
        ch = self._peek()
        if not ch:
            raise self._error("unexpected end of input")
        if ch == "[":
            node, _ = self._subject()
            return node
        if ch == "(":
            return self._collection()
        if ch in "\"'":
            return self._literal(strict=False)
        if ch in "+-.0123456789":
            match = _NUMBER.match(self._text, self._pos)
            if match:
                self._pos = match.end()
                kind = next(k for k in ("double", "decimal", "integer") if match.group(k))
                return _Literal(match.group(), datatype=_XSD + kind)
        match = _BOOLEAN.match(self._text, self._pos)
        if match:
            self._pos = match.end()
            return _Literal(match.group(), datatype=_XSD + "boolean")
        return self._resource()

    def _collection(self):
        self._expect("(")
        items = []
        while True:
            self._skip_ws()
            if self._peek() == ")":
                self._pos += 1
                break
            if self._at_end():
                raise self._error("unterminated collection")
            items.append(self._object())
        if not items:
            return _Iri(_RDF_NIL)
        nodes = [self._fresh_blank_node() for _ in items]
        for node, item, rest in zip(nodes, items, [*nodes[1:], _Iri(_RDF_NIL)]):
            self._emit(node, _RDF_FIRST, item)
            self._emit(node, _RDF_REST, rest)
        return nodes[0]


def parse_turtle(text: str | bytes) -> ParseResult:
    """Parse a Turtle document."""
    return RdfParser(text, InputFormat.TURTLE).parse()


def parse_trig(text: str | bytes) -> ParseResult:
    """Parse a TriG document."""
    return RdfParser(text, InputFormat.TRIG).parse()


def parse_ntriples(text: str | bytes) -> ParseResult:
    """Parse an N-Triples document."""
    return RdfParser(text, InputFormat.NTRIPLES).parse()


def parse_nquads(text: str | bytes) -> ParseResult:
    """Parse an N-Quads document."""
    return RdfParser(text, InputFormat.NQUADS).parse()


def parse(text: str | bytes, input_format: InputFormat) -> ParseResult:
    """Parse a document in ``input_format``."""
    return RdfParser(text, input_format).parse()