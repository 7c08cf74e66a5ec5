"""Tokenization layer for slimxml.

Key Components:
    XMLTokenizer: state-machine tokenizer that builds the document tree
    ParserState: per-call mutable state threaded through the transitions
    LexState: the NORMAL / TAG / END_TAG lexical states
    split_start_tag / split_end_tag: tag lexeme splitting
"""

from .lexeme import StartTagLexeme, split_end_tag, split_start_tag
from .tokenizer import LexState, ParserState, XMLTokenizer

__all__ = [
    "LexState",
    "ParserState",
    "StartTagLexeme",
    "XMLTokenizer",
    "split_end_tag",
    "split_start_tag",
]
