"""
outmatch - compare an output file with expected results

usage: outmatch [-adqv] [match-file]...
   or: outmatch [-dqv] -o output-file match-file

Each ``X.match`` file holds a copy of the output expected in file ``X``,
with tokens in place of the text that is allowed to vary.  Comparison is
line by line until every line has matched (exit code 0) or a mismatch is
found, in which case diagnostics are printed to stderr and the run
stops with a nonzero exit code.

    -a  match every ``X.match`` in the current directory against ``X``
    -o  take exactly two paths: the output file, then its match-file
    -d  debug: log each translated pattern and the remaining output
    -q  print nothing on mismatch, just exit with the result code
    -v  verbose: show every line as it is being matched

Setting OUTMATCH_DEBUG in the environment has the same effect as -d.
"""

# This work is licensed under the terms of the GNU GPL, version 2 or later.
# See the COPYING file in the top-level directory.

import argparse
import logging
import os
import signal
import sys
import traceback
from typing import (
    Any,
    Dict,
    List,
    NoReturn,
    Optional,
    Sequence,
)

from .error import (
    MatchError,
    MatchInterrupted,
    MismatchError,
    UsageError,
)
from .finder import (
    MatchPair,
    explicit_pair,
    find_all,
    pairs_from_args,
)
from .matcher import MatchOptions, check_pairs
from .tokens import describe_tokens


LOG = logging.getLogger(__name__)

EXIT_USAGE = 1
EXIT_FAIL = 2

USAGE = ('%(prog)s [-adqv] [match-file]...\n'
         '   or: %(prog)s [-dqv] -o output-file match-file')

SIGNALS = ('SIGHUP', 'SIGINT', 'SIGTERM')


class MatchArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports malformed arguments with exit code 1."""
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: {message}\n")


def build_parser(prog: Optional[str] = None) -> MatchArgumentParser:
    parser = MatchArgumentParser(
        prog=prog,
        usage=USAGE,
        description='Compare output files with expected results.',
        epilog='tokens:\n' + describe_tokens(),
        formatter_class=argparse.RawDescriptionHelpFormatter)
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('-a', '--all', action='store_true',
                      help='match all X.match files in the current '
                      'directory against X')
    mode.add_argument('-o', '--output', action='store_true',
                      help='paths are an output file and its match-file')
    parser.add_argument('-d', '--debug', action='store_true',
                        help='show lots of debug output')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help="don't print any output on mismatch")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='show every line as it is being matched')
    parser.add_argument('files', nargs='*', metavar='match-file',
                        help='match-file(s), or output-file and '
                        'match-file with -o')
    return parser


def select_pairs(args: argparse.Namespace) -> List[MatchPair]:
    """
    Turn parsed arguments into the pairs to process.

    :raise UsageError: The arguments do not name a valid set of pairs.
    """
    if args.all:
        if args.files:
            raise UsageError(
                "-a and filename arguments are mutually exclusive")
        return find_all()
    if args.output:
        return explicit_pair(args.files)
    return pairs_from_args(args.files)


def exception_summary(exc: BaseException) -> str:
    """
    Return "ExceptionType: Error Message", or just the type name if
    the message is empty.
    """
    name = type(exc).__qualname__
    smod = type(exc).__module__
    if smod not in ("__main__", "builtins"):
        name = smod + '.' + name

    error = str(exc)
    if error:
        return f"{name}: {error}"
    return name


def _on_signal(signum: int, _frame: Any) -> NoReturn:
    raise MatchInterrupted(f"caught {signal.Signals(signum).name}")


def install_signal_handlers() -> Dict[int, Any]:
    """
    Route termination signals into `MatchInterrupted`.

    :return: The previous handlers, for `restore_signal_handlers`.
    """
    previous: Dict[int, Any] = {}
    for name in SIGNALS:
        # SIGHUP does not exist everywhere.
        signum = getattr(signal, name, None)
        if signum is not None:
            previous[signum] = signal.signal(signum, _on_signal)
    return previous


def restore_signal_handlers(previous: Dict[int, Any]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def fail(prog: str, msg: str) -> int:
    sys.stderr.write(f"FAIL: {prog}: {msg}\n")
    return EXIT_FAIL


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    outmatch entry point.

    :return: 0 if every pair matched, 1 on usage errors, 2 on failure.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    debug = args.debug or bool(os.environ.get('OUTMATCH_DEBUG'))
    logging.basicConfig(format='%(message)s',
                        level=(logging.DEBUG if debug else logging.WARNING))
    LOG.debug("args: %r", args)

    try:
        pairs = select_pairs(args)
    except UsageError as err:
        sys.stderr.write(f"{parser.prog}: {err}\n")
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    options = MatchOptions(verbose=args.verbose, quiet=args.quiet)
    previous = install_signal_handlers()
    try:
        check_pairs(pairs, options)
    except MismatchError as err:
        if options.quiet:
            return EXIT_FAIL
        return fail(parser.prog, str(err))
    except MatchError as err:
        return fail(parser.prog, str(err))
    except Exception as err:  # pylint: disable=broad-except
        LOG.debug("%s", traceback.format_exc())
        return fail(parser.prog, exception_summary(err))
    finally:
        restore_signal_handlers(previous)

    return 0


if __name__ == '__main__':
    sys.exit(main())
