"""
Trainfuck Networking Helpers
Tape-encoded socket addresses and blocking TCP socket construction
"""

import socket
from typing import Tuple

# Cells used by an address: 4 octets followed by a big-endian port
ADDRESS_CELLS = 6

def read_address(tape: bytearray, pointer: int) -> Tuple[str, int]:
    """Decode the IPv4 address and port stored at the pointer.

    Cells [pointer, pointer+3] hold the address octets in network order and
    cells [pointer+4, pointer+5] the port, high byte first. Indices wrap at
    the end of the tape just like the pointer does.
    """
    size = len(tape)
    cells = [tape[(pointer + i) % size] for i in range(ADDRESS_CELLS)]
    host = '.'.join(str(octet) for octet in cells[:4])
    port = (cells[4] << 8) | cells[5]
    return host, port

def format_peer(address) -> str:
    return f"{address[0]}:{address[1]}"

def open_listener(host: str, port: int, backlog: int = 128) -> socket.socket:
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind((host, port))
        listener.listen(backlog)
    except OSError:
        listener.close()
        raise
    return listener

def open_connection(host: str, port: int) -> socket.socket:
    return socket.create_connection((host, port))
