"""
Trainfuck Parser
Scans source text into an operation tree with resolved loops and
run-length collapsed commands
"""

from typing import List
from .ast_nodes import *

class ParseError(Exception):
    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"{message} at position {position}")

class UnmatchedOpenBracket(ParseError):
    def __init__(self, position: int):
        super().__init__("Unmatched '['", position)

class UnmatchedCloseBracket(ParseError):
    def __init__(self, position: int):
        super().__init__("Unmatched ']'", position)

class Parser:
    def __init__(self, source: str):
        self.source = source
        self.current = 0

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def peek(self) -> str:
        return self.source[self.current]

    def parse(self) -> List[Operation]:
        ops = []
        # Open loops as (position of '[', enclosing operation list)
        open_loops = []

        while not self.is_at_end():
            char = self.peek()

            if char in COUNTED:
                ops.append(self.counted(char))
            elif char in COMMANDS:
                ops.append(COMMANDS[char]())
                self.current += 1
            elif char == '[':
                open_loops.append((self.current, ops))
                ops = []
                self.current += 1
            elif char == ']':
                if not open_loops:
                    raise UnmatchedCloseBracket(self.current)
                _, enclosing = open_loops.pop()
                enclosing.append(Loop(ops))
                ops = enclosing
                self.current += 1
            else:
                # Everything else is a comment
                self.current += 1

        if open_loops:
            raise UnmatchedOpenBracket(open_loops[0][0])

        return ops

    def counted(self, char: str) -> Operation:
        start = self.current
        while not self.is_at_end() and self.peek() == char:
            self.current += 1
        run = self.current - start

        if char in '+-':
            return COUNTED[char](run % 256)
        return COUNTED[char](run)

def parse(source: str) -> List[Operation]:
    """Parse program text into a list of operations"""
    return Parser(source).parse()
