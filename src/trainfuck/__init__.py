"""
TRAINFUCK

Brainfuck with TCP networking extensions.

Components:
- parse: source text to operation tree
- VM: tape machine executing the tree, with listener/connection slots
"""

from .parser import Parser, ParseError, UnmatchedOpenBracket, UnmatchedCloseBracket, parse
from .interpreter import VM, ExecError, NetworkError, TAPE_SIZE

__all__ = [
    'Parser',
    'ParseError',
    'UnmatchedOpenBracket',
    'UnmatchedCloseBracket',
    'parse',
    'VM',
    'ExecError',
    'NetworkError',
    'TAPE_SIZE',
]
