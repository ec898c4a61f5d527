"""
tail.py: Display the last part of one or more files.

Mimics Unix 'tail' command:
  tail <file>...          - Show last 10 lines of each file
  tail -n 20 <file>       - Show last 20 lines
  tail -n +5 <file>       - Show everything from line 5 on
  tail -c 100 <file>      - Show last 100 bytes
  tail -q a.txt b.txt     - No '==> file <==' headers
"""

import argparse
import logging
import sys

from .common import print_error, setup_logging
from .config import load_config
from .emitter import tail_files
from .errors import InvalidCount
from .position import DEFAULT_LINES, position_from_args
from .version import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tail",
        description="Display the last part of a file.",
        epilog="""
Examples:
  tail app.log                # last 10 lines
  tail -n 50 app.log          # last 50 lines
  tail -n +100 app.log        # from line 100 to the end
  tail -c 512 app.log         # last 512 bytes
  tail -q a.log b.log         # several files, no headers

Notes:
  - A count of -K is the same as K (the last K units).
  - Set TAILKIT_CHUNK_SIZE to change the read size used while scanning.
""",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--version', '-V', action='version', version=f'{__version__}')
    parser.add_argument("files", nargs="+", metavar="FILE", help="Input files.")

    counts = parser.add_mutually_exclusive_group()
    counts.add_argument("-c", "--bytes", dest="bytes", metavar="BYTES",
                        help="Output the last BYTES bytes; or use -c +K to output "
                             "bytes starting with the Kth of each file.")
    counts.add_argument("-n", "--lines", dest="lines", metavar="LINES",
                        help=f"Output the last LINES lines, instead of the last {DEFAULT_LINES}; "
                             "or use -n +K to output starting with the Kth.")

    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Never print headers giving file names.")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    return parser


def main(args_list=None):
    if args_list is None:
        args_list = sys.argv[1:]

    args = build_parser().parse_args(args_list)

    try:
        config = load_config(args)
        setup_logging(config)
    except ValueError as e:
        print_error(str(e))
        return 1

    try:
        spec = position_from_args(args.lines, args.bytes)
    except InvalidCount as e:
        print_error(str(e))
        return 1

    failures = tail_files(args.files, spec, suppress_headers=config['QUIET'],
                          chunk_size=config['CHUNK_SIZE'])
    if failures:
        logging.info(f"{failures} of {len(args.files)} file(s) could not be read")
    return 0


if __name__ == "__main__":
    sys.exit(main())
