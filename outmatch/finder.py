"""
Collect (match-file, output-file) pairs to check.

A match-file named ``X.match`` describes the output stored in ``X``.
Every helper here verifies what it can before any matching starts, so
that a typo on the command line is reported as a usage error rather
than as a mismatch halfway through a batch.
"""

# This work is licensed under the terms of the GNU GPL, version 2 or later.
# See the COPYING file in the top-level directory.

import glob
import logging
import os
from typing import (
    List,
    NamedTuple,
    Optional,
    Sequence,
    Set,
)

from .error import UsageError


LOG = logging.getLogger(__name__)

SUFFIX = '.match'


class MatchPair(NamedTuple):
    match_file: str
    output_file: str


def output_for(match_file: str) -> Optional[str]:
    """Return the output file paired with ``match_file``, if it is one."""
    if not match_file.endswith(SUFFIX) or match_file == SUFFIX:
        return None
    return match_file[:-len(SUFFIX)]


def check_readable(fname: str) -> None:
    """Raise `UsageError` unless ``fname`` can be opened for reading."""
    try:
        with open(fname, 'rb'):
            pass
    except OSError as err:
        raise UsageError(f"{fname}: {err.strerror or err}") from err


def find_all(directory: str = '.') -> List[MatchPair]:
    """
    Find every ``X.match`` in ``directory`` that has a regular file ``X``.

    :raise UsageError: Nothing was found, or a file cannot be opened.
    """
    pairs: List[MatchPair] = []
    for path in glob.iglob(os.path.join(glob.escape(directory),
                                        '*' + SUFFIX)):
        ofile = output_for(path)
        if ofile is None or not os.path.isfile(ofile):
            LOG.debug("skipping %s: no output file", path)
            continue

        if directory == '.':
            path, ofile = os.path.relpath(path), os.path.relpath(ofile)

        check_readable(path)
        try:
            check_readable(ofile)
        except UsageError as err:
            raise UsageError(f"{path} found but cannot open {err}") from err
        pairs.append(MatchPair(path, ofile))

    if not pairs:
        raise UsageError("no files found to process")

    return sorted(pairs)


def pairs_from_args(paths: Sequence[str]) -> List[MatchPair]:
    """
    Build pairs from match-file arguments.

    All arguments are checked before any is used.

    :raise UsageError: No arguments, an argument without the ``.match``
                       suffix, or a file that cannot be opened.
    """
    if not paths:
        raise UsageError("no match-file arguments found")

    pairs: Set[MatchPair] = set()
    for mfile in paths:
        ofile = output_for(mfile)
        if ofile is None:
            raise UsageError(f"{mfile}: not a {SUFFIX} file")
        check_readable(mfile)
        check_readable(ofile)
        pairs.add(MatchPair(mfile, ofile))

    return sorted(pairs)


def explicit_pair(paths: Sequence[str]) -> List[MatchPair]:
    """
    Build the single pair given as ``output-file match-file``.

    The files are not checked here; a missing one fails when it is read.
    """
    if len(paths) != 2:
        raise UsageError("-o argument requires two paths")
    ofile, mfile = paths
    return [MatchPair(mfile, ofile)]
