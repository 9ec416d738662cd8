"""
Line-by-line matching of output against a template

The whole output file is read into one buffer.  Each template line is
translated and must match a prefix of what is left of the buffer; the
matched prefix is then dropped.  Lines marked ``$(OPT)`` may fail to
match, in which case the buffer stays where it is and the next template
line is tried at the same position.  After the last template line the
buffer must be empty.

`match()` makes a single attempt.  `check_pair()` wraps it with the
failure diagnostics: on the first mismatch the complete output is
dumped and the attempt is repeated with tracing enabled, so the trace
shows exactly how far matching got.
"""

# This work is licensed under the terms of the GNU GPL, version 2 or later.
# See the COPYING file in the top-level directory.

import logging
import sys
from typing import (
    Iterable,
    List,
    NamedTuple,
    Optional,
    TextIO,
    Tuple,
)

from .error import (
    MatchFailure,
    MatchIOError,
    MismatchError,
    TrailingOutputError,
)
from .tokens import translate


LOG = logging.getLogger(__name__)

EOF_MARKER = '[EOF]'


class MatchOptions(NamedTuple):
    """Settings threaded through one run of the matcher."""
    #: Print every template line and output line as they are compared.
    verbose: bool = False
    #: Print nothing on mismatch; the error is still raised.
    quiet: bool = False
    #: Where diagnostics go.  `None` means `sys.stderr` at call time.
    stream: Optional[TextIO] = None

    @property
    def out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stderr


def _open(fname: str) -> TextIO:
    try:
        # Lines end at '\n' only; '\r' is compared like any other byte.
        return open(fname, encoding='utf-8', errors='surrogateescape',
                    newline='\n')
    except OSError as err:
        raise MatchIOError(fname, err.strerror or str(err)) from err


def read_file(fname: str) -> str:
    """Return the entire content of ``fname``."""
    with _open(fname) as f:
        return f.read()


def read_lines(fname: str) -> List[str]:
    """Return the lines of ``fname``, each with its newline."""
    with _open(fname) as f:
        return f.readlines()


def first_line(buffer: str) -> str:
    """Return the first line of ``buffer``, or `EOF_MARKER` if it is empty."""
    if not buffer.strip('\n'):
        return EOF_MARKER
    return buffer.split('\n', 1)[0]


def match(match_file: str, output_file: str,
          options: MatchOptions = MatchOptions()) -> None:
    """
    Match ``output_file`` against the template in ``match_file`` once.

    :raise MatchFailure: A non-optional template line did not match.
    :raise TrailingOutputError: Output remained after the last line.
    :raise MatchIOError: Either file could not be read.
    """
    output = read_file(output_file)
    template = read_lines(match_file)
    out = options.out
    line_pat = 0
    line_out = 0

    for raw in template:
        line_pat += 1
        line_out += 1
        pattern = translate(raw)

        if options.verbose:
            out.write('%s:%-3d %s%s:%-3d       %s\n' % (
                match_file, line_pat, raw,
                output_file, line_out, first_line(output)))

        LOG.debug(" => /%s/", pattern.source)
        LOG.debug(" [%s]", output)

        rest = pattern.consume(output)
        if rest is not None:
            output = rest
        elif pattern.optional:
            if options.verbose:
                out.write('%s:%-3d      [skipping optional line]\n' % (
                    output_file, line_out))
            line_out -= 1
        else:
            raise MatchFailure(match_file, line_pat)

    if output:
        raise TrailingOutputError(match_file, line_pat, output)


def check_pair(match_file: str, output_file: str,
               options: MatchOptions = MatchOptions()) -> None:
    """
    Match one pair, printing diagnostics if it fails.

    Unless tracing is already on or ``options.quiet`` is set, a failure
    dumps the complete output file; a line mismatch additionally repeats
    the match with tracing enabled.  The original error is re-raised.
    """
    try:
        match(match_file, output_file, options)
    except MismatchError as err:
        if options.verbose or options.quiet:
            raise

        out = options.out
        out.write(f'[MATCHING FAILED, COMPLETE FILE ({output_file}) BELOW]\n'
                  f'{read_file(output_file)}\n{EOF_MARKER}\n')

        if isinstance(err, MatchFailure):
            try:
                match(match_file, output_file,
                      options._replace(verbose=True))
            except MismatchError as trace_err:
                LOG.debug("traced run stopped: %s", trace_err)
        raise


def check_pairs(pairs: Iterable[Tuple[str, str]],
                options: MatchOptions = MatchOptions()) -> int:
    """
    Match every (match-file, output-file) pair, in sorted order.

    Stops at the first failing pair by letting its error propagate.

    :return: The number of pairs that matched.
    """
    pairs = sorted(pairs)
    out = options.out

    if options.verbose:
        out.write("Files to be processed:\n")

    count = 0
    for match_file, output_file in pairs:
        if options.verbose:
            out.write(f'        match-file "{match_file}" '
                      f'output-file "{output_file}"\n')
        check_pair(match_file, output_file, options)
        count += 1
    return count
