# rtrvsearch

rtrvsearch provides the text-processing parts of a small full-text search engine. It is plain Python and has no third-party dependencies.

- **`rtrvsearch.tokenizer`** splits text into tokens. Tokens are runs of ASCII letters, digits and apostrophes. The tokenizer lower-cases them, removes stop words and can apply a simple suffix stemmer.
- **`rtrvsearch.query_parser`** parses query strings into a tree. It handles `AND` / `OR` / `NOT`, implicit AND, parentheses, quoted phrases, proximity (`"a b"~5`) and fielded terms (`title:ai`). It can also pull out the plain search terms of a query.
- **`rtrvsearch.snippets`** picks the passages of a text that hold the most query terms and highlights the matching words.
- **`rtrvsearch.ranking`** provides TF-IDF, BM25 and a feature-weighted linear ranker, and a registry that looks rankers up by name.

## Installation

```
pip install rtrvsearch
```

## Tokenizing

```python
from rtrvsearch.tokenizer import Tokenizer, StemmerType, simple_stem

tok = Tokenizer()
tok.tokenize("The quick brown fox")            # ['quick', 'brown', 'fox']

for t in tok.tokenize_with_positions("Hello World"):
    print(t.text, t.position, t.start_offset, t.end_offset)
# hello 0 0 5
# world 1 6 11

stemming = Tokenizer(stemmer=StemmerType.SIMPLE)
stemming.tokenize("running walked quickly")     # ['runn', 'walk', 'quick']
simple_stem("cats")                             # 'cat'

Tokenizer(remove_stopwords=False).tokenize("the cat")   # ['the', 'cat']
Tokenizer(stop_words={"quick"}).tokenize("the quick fox")  # ['the', 'fox']
```

A `Tokenizer` has four settings: `lowercase`, `remove_stopwords`, `stemmer` and `stop_words`. By default `stop_words` is a copy of `DEFAULT_STOP_WORDS`. Positions count only the tokens that are kept, so they stay consecutive after stop words are removed.

## Parsing queries

```python
from rtrvsearch.query_parser import NodeType, parse_query, extract_terms

tree = parse_query("(cat OR dog) AND animal")
print(tree)                                     # AND(OR(cat, dog), animal)
tree.node_type is NodeType.AND                  # True

parse_query('"machine learning"~5')             # PhraseNode(terms=['machine', 'learning'], max_distance=5)
parse_query("title:machine")                    # FieldNode(field_name='title', query=TermNode(term='machine'))

extract_terms('"search engine" AND ranking')    # ['search engine', 'ranking']
```

The parser produces these node types: `TermNode`, `PhraseNode`, `AndNode`, `OrNode`, `NotNode` and `FieldNode`. Each one has a `node_type` and a readable `str()`. Words in the query are lower-cased. `AND`, `OR` and `NOT` are recognised in any case.

An empty query gives `TermNode("")`. `parse_query` does not raise on a malformed query such as `"incomplete`, which has no closing quote. It returns a single `TermNode` holding the raw query text. The internal parser signals such errors with `QueryParseError`, a subclass of `ValueError`.

## Snippets

```python
from rtrvsearch.snippets import SnippetOptions, generate_snippets, highlight_terms

highlight_terms("Machine learning rocks", ["machine"], "<b>", "</b>")
# '<b>Machine</b> learning rocks'

text = "Neural networks are everywhere. " * 20
generate_snippets(text, ["neural", "network"], SnippetOptions(max_snippet_length=60))
```

`SnippetOptions` has these defaults: `max_snippet_length=150`, `num_snippets=3`, `highlight_open="<b>"`, `highlight_close="</b>"`.

- If the text is no longer than one snippet, the whole text comes back highlighted.
- Otherwise the densest windows that do not overlap are returned in reading order. Their edges are moved to word boundaries, and `...` marks each side where text was left out.

## Ranking

```python
from rtrvsearch.ranking import (
    Query, IndexStats, RankableDocument, RankerRegistry, Bm25Ranker,
)

registry = RankerRegistry()
registry.names()                                # ['BM25', 'ML-Ranker', 'TF-IDF']
"BM25" in registry                              # True
ranker = registry.get("BM25")

doc = RankableDocument(id=1, fields={"title": "Intro", "content": "machine learning"}, term_count=2)
stats = IndexStats(total_docs=10, avg_doc_length=5.0, doc_frequency={"machine": 2})
ranker.score(Query(terms=["machine"]), doc, stats)
```

Term frequency is the number of times a query term occurs as a substring of the document's lower-cased text. A term missing from `doc_frequency` is treated as having document frequency 1.

`Bm25Ranker(k1=1.2, b=0.75)` takes its parameters at construction. `CustomMLRanker.extract_features` returns five features: BM25 score, TF-IDF score, term coverage, length ratio and title matches. The ranker weights them `(0.4, 0.2, 0.2, 0.05, 0.15)`.

To add your own ranker, subclass `Ranker`, give the subclass a `name`, and pass an instance to `registry.register(...)`. `registry.get(name)` falls back to the default ranker when the name is unknown. `registry.set_default(name)` changes that default and raises `KeyError` for a name that is not registered.

## What this package does not do

rtrvsearch is a library of building blocks, not a complete search engine. It does not include:

- an inverted index or a document store;
- fuzzy or typo-tolerant matching;
- query result caching;
- saving an index to disk;
- a server or command-line program.

The query tree from `parse_query` is not evaluated against documents. The rankers score only the documents and statistics you pass to them.