import pytest

from rtrvsearch.query_parser import (
    AndNode,
    FieldNode,
    NodeType,
    NotNode,
    OrNode,
    PhraseNode,
    TermNode,
    extract_terms,
    parse_query,
)


def test_simple_term():
    node = parse_query("hello")
    assert isinstance(node, TermNode)
    assert node.node_type is NodeType.TERM
    assert node.term == "hello"


@pytest.mark.parametrize(
    "query, expected",
    [
        ("hello world", ["hello", "world"]),
        ("hello, world!", ["hello", "world"]),
        ("Hello WORLD", ["hello", "world"]),
        ("search AND engine", ["search", "engine"]),
        ("cat OR dog", ["cat", "dog"]),
        ("NOT spam", ["spam"]),
        ('"search engine"', ["search engine"]),
        ("", []),
        ("   \t\n  ", []),
        ("AND OR NOT", []),
        ("hello    world", ["hello", "world"]),
    ],
)
def test_extract_terms(query, expected):
    assert extract_terms(query) == expected


def test_boolean_and():
    node = parse_query("search AND engine")
    assert isinstance(node, AndNode)
    assert node.node_type is NodeType.AND
    assert node.children == [TermNode("search"), TermNode("engine")]


def test_boolean_or():
    node = parse_query("cat OR dog")
    assert isinstance(node, OrNode)
    assert node.node_type is NodeType.OR
    assert node.children == [TermNode("cat"), TermNode("dog")]


def test_boolean_not():
    node = parse_query("NOT spam")
    assert isinstance(node, NotNode)
    assert node.node_type is NodeType.NOT
    assert node.child == TermNode("spam")


def test_lowercase_operators_are_operators():
    node = parse_query("cat or dog")
    assert isinstance(node, OrNode)
    assert node.children == [TermNode("cat"), TermNode("dog")]


def test_phrase_query():
    node = parse_query('"search engine"')
    assert isinstance(node, PhraseNode)
    assert node.node_type is NodeType.PHRASE
    assert node.terms == ["search", "engine"]
    assert node.max_distance == 0

    node = parse_query('"the quick brown fox"')
    assert isinstance(node, PhraseNode)
    assert len(node.terms) == 4
    assert node.terms[0] == "the"
    assert node.terms[3] == "fox"


def test_unclosed_quote_falls_back_to_term():
    node = parse_query('"incomplete')
    assert isinstance(node, TermNode)
    assert node.term == '"incomplete'


@pytest.mark.parametrize("query", ['""', "(cat", "NOT", '"a b"~99999999999'])
def test_malformed_queries_fall_back_to_whole_string(query):
    node = parse_query(query)
    assert node == TermNode(query)


@pytest.mark.parametrize("query", ["", "123", "()", "   "])
def test_empty_queries_give_empty_term(query):
    assert parse_query(query) == TermNode("")


def test_fielded_query():
    node = parse_query("title:machine")
    assert isinstance(node, FieldNode)
    assert node.node_type is NodeType.FIELD
    assert node.field_name == "title"
    assert node.query == TermNode("machine")


def test_fielded_phrase_query():
    node = parse_query('content:"machine learning"')
    assert isinstance(node, FieldNode)
    assert node.field_name == "content"
    assert isinstance(node.query, PhraseNode)
    assert node.query.terms == ["machine", "learning"]


def test_proximity_query():
    node = parse_query('"machine learning"~5')
    assert isinstance(node, PhraseNode)
    assert node.terms == ["machine", "learning"]
    assert node.max_distance == 5


def test_tilde_without_number_keeps_zero_distance():
    node = parse_query('"machine learning"~')
    assert isinstance(node, PhraseNode)
    assert node.max_distance == 0


def test_nested_query():
    node = parse_query("(cat OR dog) AND animal")
    assert isinstance(node, AndNode)
    assert len(node.children) == 2
    left, right = node.children
    assert isinstance(left, OrNode)
    assert len(left.children) == 2
    assert right == TermNode("animal")


def test_implicit_and():
    node = parse_query("machine learning AI")
    assert isinstance(node, AndNode)
    assert len(node.children) == 3
    assert node.children[2] == TermNode("ai")


def test_complex_query():
    node = parse_query("(title:ai OR title:machine) AND content:learning NOT deprecated")
    assert isinstance(node, AndNode)
    assert len(node.children) == 3
    assert isinstance(node.children[0], OrNode)
    assert node.children[1] == FieldNode("content", TermNode("learning"))
    assert node.children[2] == NotNode(TermNode("deprecated"))
    assert str(node) == "AND(OR(title:ai, title:machine), content:learning, NOT(deprecated))"


def test_phrase_str():
    assert str(parse_query('"machine learning"')) == '"machine learning"'
    assert str(parse_query('"machine learning"~5')) == '"machine learning"~5'


def test_or_str():
    assert str(parse_query("cat OR dog OR bird")) == "OR(cat, dog, bird)"


def test_number_splits_from_word():
    node = parse_query("hello 123abc")
    assert node == TermNode("hello")