"""Tokenizing, query parsing, snippet extraction and relevance ranking for text search."""

__version__ = "0.1.0"
__all__ = ["query_parser", "ranking", "snippets", "tokenizer"]