"""
Trainfuck command line
Reads a source file, parses it and runs it on a fresh VM
"""

import sys
import argparse
import logging
from typing import List, Optional

from .ast_nodes import count_operations, pretty_print_ast
from .config import ConfigError, configure_logging, load_config
from .interpreter import VM, ExecError
from .parser import ParseError, parse

logger = logging.getLogger("trainfuck.cli")

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='trainfuck',
        description='Trainfuck interpreter - Brainfuck with networking extensions')
    parser.add_argument('file', help='Trainfuck source file to execute')
    parser.add_argument('-d', '--debug', action='store_true', help='Enable debug tracing')
    parser.add_argument('--config', help='Config file (json/toml)')
    parser.add_argument('--version', action='version', version='trainfuck 0.1.0')

    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (ConfigError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    debug = args.debug or bool(cfg.get('debug', False))
    configure_logging(debug)

    try:
        with open(args.file, 'r', encoding='utf-8') as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file {args.file}: {e}", file=sys.stderr)
        return 1

    logger.debug("Loaded %d bytes from %s", len(source.encode('utf-8')), args.file)

    try:
        ops = parse(source)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1

    if debug:
        logger.debug("Parsed %d operations", count_operations(ops))
        logger.debug("Operations: %s", pretty_print_ast(ops))

    with VM(debug=debug) as vm:
        try:
            vm.execute(ops)
        except ExecError as e:
            print(f"Runtime error: {e}", file=sys.stderr)
            return 1

    return 0

if __name__ == '__main__':
    sys.exit(main())
