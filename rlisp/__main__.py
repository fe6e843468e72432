"""
Command-line entry point: python -m rlisp [options] [INPUT]
"""

import argparse
import logging
import os
import sys

from rlisp.config import LISP_NAME, LISP_VERSION, get_log_level
from rlisp.errors import RLispError
from rlisp.interpreter import Interpreter
from rlisp import repl


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog=LISP_NAME,
        description="The RLisp language",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                      # Start the REPL
  %(prog)s program.rl           # Run a file
  %(prog)s -i program.rl        # Run a file, then start the REPL
  %(prog)s -l ./lib program.rl  # Use another standard library location
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {LISP_VERSION}')
    parser.add_argument('--lib', '-l', metavar='LIB_LOC',
                        help='Standard library location')
    parser.add_argument('--interactive', '-i', action='store_true',
                        help='Start the REPL after running INPUT')
    parser.add_argument('--log-level', default=get_log_level(),
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    parser.add_argument('input', nargs='?', metavar='INPUT',
                        help='Source file to run')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(name)s %(levelname)s: %(message)s'
    )

    if args.lib:
        os.environ['RLISP_LIB_PATH'] = args.lib

    try:
        interp = Interpreter()
        if args.input:
            interp.load(args.input)
    except RLispError as ex:
        print(f"ERROR:\n{ex}", file=sys.stderr)
        return 1

    if args.input is None or args.interactive:
        repl.run(interp)

    return 0


if __name__ == "__main__":
    sys.exit(main())
