"""
Trainfuck Operation Nodes
Operation tree definitions produced by the parser and walked by the VM
"""

from abc import ABC
from typing import List, Dict, Type
from dataclasses import dataclass, field

class Operation(ABC):
    """Base class for all operations"""
    pass

# Counted tape operations
@dataclass
class MoveRight(Operation):
    count: int

@dataclass
class MoveLeft(Operation):
    count: int

@dataclass
class Increment(Operation):
    amount: int

@dataclass
class Decrement(Operation):
    amount: int

# Classic I/O
@dataclass
class Output(Operation):
    pass

@dataclass
class Input(Operation):
    pass

# Control flow
@dataclass
class Loop(Operation):
    body: List[Operation] = field(default_factory=list)

# Networking
@dataclass
class Connect(Operation):
    pass

@dataclass
class Listen(Operation):
    pass

@dataclass
class Accept(Operation):
    pass

@dataclass
class Receive(Operation):
    pass

@dataclass
class Send(Operation):
    pass

# Run-length collapsed commands
COUNTED: Dict[str, Type[Operation]] = {
    '>': MoveRight,
    '<': MoveLeft,
    '+': Increment,
    '-': Decrement,
}

# Single-character commands without payload
COMMANDS: Dict[str, Type[Operation]] = {
    '.': Output,
    ',': Input,
    '%': Connect,
    '$': Listen,
    '@': Accept,
    '`': Receive,
    "'": Send,
}

_SYMBOLS = {cls: char for char, cls in {**COUNTED, **COMMANDS}.items()}

def _run_length(node: Operation) -> int:
    if isinstance(node, (MoveRight, MoveLeft)):
        return node.count
    # 8-bit amounts: 0 came from a run of 256
    return node.amount or 256

def to_source(ops: List[Operation]) -> str:
    """Serialize an operation tree back to canonical program text"""
    parts = []
    # Pending siblings per nesting level, with the last node written there
    stack = [[iter(ops), None]]

    while stack:
        level = stack[-1]
        node = next(level[0], None)
        if node is None:
            stack.pop()
            if stack:
                parts.append(']')
            continue

        previous, level[1] = level[1], node
        if isinstance(node, Loop):
            parts.append('[')
            stack.append([iter(node.body), None])
        elif type(node) in COUNTED.values():
            if type(node) is type(previous):
                # keep adjacent runs from merging on re-parse
                parts.append(' ')
            parts.append(_SYMBOLS[type(node)] * _run_length(node))
        else:
            parts.append(_SYMBOLS[type(node)])
    return ''.join(parts)

def count_operations(ops: List[Operation]) -> int:
    total = 0
    pending = [ops]
    while pending:
        for node in pending.pop():
            total += 1
            if isinstance(node, Loop):
                pending.append(node.body)
    return total

def pretty_print_ast(ops: List[Operation]) -> str:
    """Pretty print an operation tree for debugging"""
    if not ops:
        return '[]'

    lines = ['[']
    stack = [iter(ops)]
    while stack:
        node = next(stack[-1], None)
        spaces = '  ' * len(stack)
        if node is None:
            stack.pop()
            if stack:
                lines.append(f'{spaces[2:]}]),')
            continue

        if isinstance(node, Loop):
            if node.body:
                lines.append(f'{spaces}Loop(body=[')
                stack.append(iter(node.body))
            else:
                lines.append(f'{spaces}Loop(body=[]),')
        else:
            lines.append(f'{spaces}{node!r},')
    lines.append(']')
    return '\n'.join(lines)
