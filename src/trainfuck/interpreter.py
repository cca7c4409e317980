"""
Trainfuck Virtual Machine
Walks the operation tree over a fixed byte tape, with optional listener
and connection slots for the networking commands
"""

import logging
import sys
from typing import List, Optional, BinaryIO
from .ast_nodes import *
from .network import read_address, format_peer, open_listener, open_connection

# Memory tape size, as in classic Brainfuck
TAPE_SIZE = 30000

logger = logging.getLogger("trainfuck.vm")

class ExecError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

class NetworkError(ExecError):
    pass

class VM:
    def __init__(self, input_stream: Optional[BinaryIO] = None,
                 output_stream: Optional[BinaryIO] = None,
                 debug: bool = False):
        self.tape = bytearray(TAPE_SIZE)
        self.pointer = 0

        # Networking state, at most one of each
        self.listener = None
        self.connection = None

        self.input = input_stream if input_stream is not None else sys.stdin.buffer
        self.output = output_stream if output_stream is not None else sys.stdout.buffer
        self.debug = debug

    def __enter__(self) -> 'VM':
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        """Release any open sockets"""
        if self.connection is not None:
            self.connection.close()
            self.connection = None
        if self.listener is not None:
            self.listener.close()
            self.listener = None

    def execute(self, ops: List[Operation]):
        # Frames of [body, next index, repeats while the cell is nonzero]
        frames = [[ops, 0, False]]

        while frames:
            frame = frames[-1]
            body, index, repeats = frame

            if index < len(body):
                frame[1] = index + 1
                node = body[index]
                if isinstance(node, Loop):
                    self.trace(node)
                    if self.cell != 0:
                        frames.append([node.body, 0, True])
                else:
                    self.visit(node)
            elif repeats and self.cell != 0:
                frame[1] = 0
            else:
                frames.pop()

    def trace(self, node: Operation):
        if self.debug:
            logger.debug("%s ptr=%d cell=%d", node.__class__.__name__, self.pointer, self.tape[self.pointer])

    def visit(self, node: Operation):
        self.trace(node)
        method_name = f'visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Operation):
        raise ExecError(f"No visit method for {node.__class__.__name__}")

    @property
    def cell(self) -> int:
        return self.tape[self.pointer]

    @cell.setter
    def cell(self, value: int):
        self.tape[self.pointer] = value & 0xFF

    # Tape operations
    def visit_MoveRight(self, node: MoveRight):
        self.pointer = (self.pointer + node.count) % TAPE_SIZE

    def visit_MoveLeft(self, node: MoveLeft):
        self.pointer = (self.pointer - node.count) % TAPE_SIZE

    def visit_Increment(self, node: Increment):
        self.cell = self.cell + node.amount

    def visit_Decrement(self, node: Decrement):
        self.cell = self.cell - node.amount

    def visit_Output(self, node: Output):
        try:
            self.output.write(bytes([self.cell]))
            self.output.flush()
        except (OSError, ValueError) as e:
            raise ExecError(f"I/O error: {e}") from e

    def visit_Input(self, node: Input):
        try:
            data = self.input.read(1)
        except (OSError, ValueError) as e:
            raise ExecError(f"I/O error: {e}") from e
        # End of stream reads as zero
        self.cell = data[0] if data else 0

    # Networking operations
    def visit_Listen(self, node: Listen):
        if self.listener is not None:
            self.listener.close()
            self.listener = None
            logger.info("Stopped listening")
            return

        host, port = read_address(self.tape, self.pointer)
        try:
            self.listener = open_listener(host, port)
        except OSError as e:
            raise NetworkError(f"Failed to bind: {e}") from e
        logger.info("Listening on %s:%d", host, port)

    def visit_Accept(self, node: Accept):
        if self.connection is not None:
            self.connection.close()
            self.connection = None
            logger.info("Connection closed")
            return

        if self.listener is None:
            return

        try:
            connection, peer = self.listener.accept()
        except OSError as e:
            raise NetworkError(f"Accept failed: {e}") from e
        logger.info("Accepted connection from %s", format_peer(peer))
        self.connection = connection

    def visit_Connect(self, node: Connect):
        if self.connection is not None:
            self.connection.close()
            self.connection = None
            logger.info("Connection closed")
            return

        host, port = read_address(self.tape, self.pointer)
        try:
            self.connection = open_connection(host, port)
        except OSError as e:
            raise NetworkError(f"Connect failed: {e}") from e
        logger.info("Connected to %s:%d", host, port)

    def visit_Receive(self, node: Receive):
        if self.connection is None:
            self.cell = 0
            return

        try:
            data = self.connection.recv(1)
        except OSError as e:
            # Receive faults are not fatal
            logger.warning("Receive error: %s", e)
            data = b''
        self.cell = data[0] if data else 0

    def visit_Send(self, node: Send):
        if self.connection is None:
            return

        try:
            self.connection.sendall(bytes([self.cell]))
        except OSError as e:
            raise NetworkError(f"Send failed: {e}") from e
