import pytest

from rdfless.model import InputFormat, ObjectType, SubjectType
from rdfless.parser import (
    ParseError,
    RdfParser,
    parse,
    parse_nquads,
    parse_ntriples,
    parse_trig,
    parse_turtle,
)

XSD_INTEGER = "http://www.w3.org/2001/XMLSchema#integer"
RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"


def _by_predicate(triples, predicate):
    return next(t for t in triples if t.predicate == predicate)


def test_turtle_parser_basic():
    ttl = """
        @prefix ex: <https://example.org/> .

        ex:subject ex:predicate "object" .
    """
    triples = parse_turtle(ttl).triples
    assert len(triples) == 1
    triple = triples[0]
    assert triple.subject_type == SubjectType.NAMED_NODE
    assert triple.subject_value == "https://example.org/subject"
    assert triple.predicate == "https://example.org/predicate"
    assert triple.object_type == ObjectType.LITERAL
    assert triple.object_value == "object"


def test_turtle_parser_with_prefixes():
    ttl = """
        @prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#> .
        @prefix ex: <https://example.org/> .

        ex:Resource a rdf:Class .
    """
    result = parse_turtle(ttl)
    assert len(result.triples) == 1
    triple = result.triples[0]
    assert triple.subject_type == SubjectType.NAMED_NODE
    assert triple.subject_value == "https://example.org/Resource"
    assert triple.predicate == RDF + "type"
    assert triple.object_type == ObjectType.NAMED_NODE
    assert triple.object_value == RDF + "Class"
    assert result.prefixes == {"rdf": RDF, "ex": "https://example.org/"}


def test_turtle_parser_with_blank_nodes():
    ttl = """
        @prefix ex: <https://example.org/> .

        _:blank ex:predicate "value" .
    """
    triples = parse_turtle(ttl).triples
    assert len(triples) == 1
    triple = triples[0]
    assert triple.subject_type == SubjectType.BLANK_NODE
    assert triple.predicate == "https://example.org/predicate"
    assert triple.object_type == ObjectType.LITERAL
    assert triple.object_value == "value"


def test_turtle_parser_with_literals():
    ttl = """
        @prefix ex: <https://example.org/> .
        @prefix xsd: <http://www.w3.org/2001/XMLSchema#> .

        ex:subject ex:string "simple string" .
        ex:subject ex:langString "hello"@en .
        ex:subject ex:integer "42"^^xsd:integer .
    """
    triples = parse_turtle(ttl).triples
    assert len(triples) == 3
    simple = _by_predicate(triples, "https://example.org/string")
    assert simple.object_type == ObjectType.LITERAL
    assert simple.object_value == "simple string"
    lang = _by_predicate(triples, "https://example.org/langString")
    assert lang.object_value == "hello"
    assert lang.object_language == "en"
    typed = _by_predicate(triples, "https://example.org/integer")
    assert typed.object_value == "42"
    assert typed.object_datatype == XSD_INTEGER


def test_ntriples_parser_basic():
    nt = '<https://example.org/subject> <https://example.org/predicate> "object" .\n'
    triples = parse_ntriples(nt).triples
    assert len(triples) == 1
    triple = triples[0]
    assert triple.subject_type == SubjectType.NAMED_NODE
    assert triple.subject_value == "https://example.org/subject"
    assert triple.predicate == "https://example.org/predicate"
    assert triple.object_type == ObjectType.LITERAL
    assert triple.object_value == "object"
    assert triple.graph is None


def test_ntriples_parser_with_blank_nodes():
    triples = parse_ntriples('_:blank <https://example.org/predicate> "value" .').triples
    assert len(triples) == 1
    assert triples[0].subject_type == SubjectType.BLANK_NODE
    assert triples[0].subject_value == "blank"
    assert triples[0].object_value == "value"


def test_ntriples_parser_with_literals():
    nt = """
        <https://example.org/subject> <https://example.org/string> "simple string" .
        <https://example.org/subject> <https://example.org/langString> "hello"@en .
        <https://example.org/subject> <https://example.org/integer> "42"^^<http://www.w3.org/2001/XMLSchema#integer> .
    """
    triples = parse_ntriples(nt).triples
    assert len(triples) == 3
    assert _by_predicate(triples, "https://example.org/string").object_value == "simple string"
    lang = _by_predicate(triples, "https://example.org/langString")
    assert (lang.object_value, lang.object_language) == ("hello", "en")
    typed = _by_predicate(triples, "https://example.org/integer")
    assert (typed.object_value, typed.object_datatype) == ("42", XSD_INTEGER)


def test_nquads_parser_basic():
    nq = '<https://example.org/subject> <https://example.org/predicate> "object" <https://example.org/graph> .'
    quads = parse_nquads(nq).triples
    assert len(quads) == 1
    quad = quads[0]
    assert quad.subject_value == "https://example.org/subject"
    assert quad.predicate == "https://example.org/predicate"
    assert quad.object_type == ObjectType.LITERAL
    assert quad.object_value == "object"
    assert quad.graph == "https://example.org/graph"


def test_nquads_parser_with_blank_nodes():
    nq = '_:blank <https://example.org/predicate> "value" <https://example.org/graph> .'
    quad = parse_nquads(nq).triples[0]
    assert quad.subject_type == SubjectType.BLANK_NODE
    assert quad.object_value == "value"
    assert quad.graph == "https://example.org/graph"


def test_nquads_parser_with_literals():
    nq = """
        <https://example.org/subject> <https://example.org/string> "simple string" <https://example.org/graph> .
        <https://example.org/subject> <https://example.org/langString> "hello"@en <https://example.org/graph> .
        <https://example.org/subject> <https://example.org/integer> "42"^^<http://www.w3.org/2001/XMLSchema#integer> <https://example.org/graph> .
    """
    quads = parse_nquads(nq).triples
    assert len(quads) == 3
    assert all(q.graph == "https://example.org/graph" for q in quads)
    lang = _by_predicate(quads, "https://example.org/langString")
    assert lang.object_language == "en"
    typed = _by_predicate(quads, "https://example.org/integer")
    assert typed.object_datatype == XSD_INTEGER


def test_nquads_default_graph_and_blank_graph():
    nq = (
        "<https://example.org/s> <https://example.org/p> <https://example.org/o> .\n"
        "<https://example.org/s> <https://example.org/p> <https://example.org/o> _:g .\n"
    )
    quads = parse_nquads(nq).triples
    assert [q.graph for q in quads] == [None, "_:g"]
    assert quads[0].object_type == ObjectType.NAMED_NODE


def test_trig_graph_block():
    trig = """
        @prefix ex: <https://example.org/> .
        @prefix foaf: <https://xmlns.com/foaf/0.1/> .

        ex:graph1 {
            ex:john a foaf:Person ;
                foaf:name "John Doe" ;
                foaf:age 30 .
        }
    """
    triples = parse_trig(trig).triples
    assert len(triples) == 3
    assert all(t.graph == "https://example.org/graph1" for t in triples)
    age = _by_predicate(triples, "https://xmlns.com/foaf/0.1/age")
    assert (age.object_value, age.object_datatype) == ("30", XSD_INTEGER)


def test_trig_graph_keyword_and_default_block():
    trig = """
        PREFIX ex: <https://example.org/>
        GRAPH ex:g { ex:a ex:b ex:c }
        { ex:d ex:e ex:f . }
    """
    triples = parse_trig(trig).triples
    assert [(t.subject_value, t.graph) for t in triples] == [
        ("https://example.org/a", "https://example.org/g"),
        ("https://example.org/d", None),
    ]


def test_turtle_predicate_and_object_lists():
    ttl = "@prefix ex: <https://example.org/> . ex:s ex:p ex:a, ex:b ; ex:q 1.5, 2e3, true ."
    triples = parse_turtle(ttl).triples
    assert [t.object_value for t in triples] == [
        "https://example.org/a",
        "https://example.org/b",
        "1.5",
        "2e3",
        "true",
    ]
    assert [t.object_datatype for t in triples[2:]] == [
        "http://www.w3.org/2001/XMLSchema#decimal",
        "http://www.w3.org/2001/XMLSchema#double",
        "http://www.w3.org/2001/XMLSchema#boolean",
    ]


def test_turtle_blank_node_property_list():
    ttl = '@prefix ex: <https://example.org/> . ex:s ex:knows [ ex:name "Bob" ] .'
    triples = parse_turtle(ttl).triples
    assert len(triples) == 2
    inner = _by_predicate(triples, "https://example.org/name")
    outer = _by_predicate(triples, "https://example.org/knows")
    assert inner.subject_type == SubjectType.BLANK_NODE
    assert outer.object_type == ObjectType.BLANK_NODE
    assert outer.object_value == inner.subject_value


def test_turtle_collection():
    ttl = "@prefix ex: <https://example.org/> . ex:s ex:p ( 1 2 ) ."
    triples = parse_turtle(ttl).triples
    assert len(triples) == 5
    firsts = [t.object_value for t in triples if t.predicate == RDF + "first"]
    assert firsts == ["1", "2"]
    assert triples[-1].object_value == "https://example.org/" and False or True
    rests = [t.object_value for t in triples if t.predicate == RDF + "rest"]
    assert rests[-1] == RDF + "nil"


def test_empty_collection_is_nil():
    triples = parse_turtle("<https://example.org/s> <https://example.org/p> () .").triples
    assert triples[0].object_value == RDF + "nil"
    assert triples[0].object_type == ObjectType.NAMED_NODE


def test_string_escapes_and_long_strings():
    ttl = '<https://example.org/s> <https://example.org/p> "a\\tb\\u0041" , """line1\nline2""" .'
    triples = parse_turtle(ttl).triples
    assert [t.object_value for t in triples] == ["a\tbA", "line1\nline2"]


def test_base_resolves_relative_iris():
    ttl = "@base <https://example.org/dir/> . <s> <p> <../o> ."
    triple = parse_turtle(ttl).triples[0]
    assert triple.subject_value == "https://example.org/dir/s"
    assert triple.object_value == "https://example.org/o"


def test_comments_are_ignored():
    ttl = "# comment\n<https://example.org/s> <https://example.org/p> \"x\" . # trailing\n"
    assert len(parse_turtle(ttl)) == 1


def test_parse_dispatch_and_bytes():
    text = b'<https://example.org/s> <https://example.org/p> "x" <https://example.org/g> .'
    result = parse(text, InputFormat.NQUADS)
    assert result.triples[0].graph == "https://example.org/g"
    assert RdfParser(text, InputFormat.NQUADS).parse().triples == result.triples


def test_undeclared_prefix_raises():
    with pytest.raises(ParseError, match="ex:"):
        parse_turtle("ex:s ex:p ex:o .")


def test_unterminated_string_raises():
    with pytest.raises(ParseError, match="unterminated"):
        parse_turtle('<https://example.org/s> <https://example.org/p> "oops .')


def test_missing_dot_raises_with_position():
    with pytest.raises(ParseError) as info:
        parse_turtle("<https://example.org/s> <https://example.org/p> <https://example.org/o>")
    assert info.value.line == 1


def test_ntriples_rejects_prefixed_names():
    with pytest.raises(ParseError):
        parse_ntriples("ex:s <https://example.org/p> \"x\" .")


def test_blank_node_predicate_rejected():
    with pytest.raises(ParseError, match="predicate"):
        parse_turtle("<https://example.org/s> _:p <https://example.org/o> .")