"""
Template matching for test output.

This package checks that a program's textual output has an expected
shape.  The expectation is a ``.match`` file: a copy of the output in
which varying text is replaced by tokens such as ``$(N)`` (an integer)
or ``$(*)`` (anything), and lines that may be absent are marked with
``$(OPT)``.  See `tokens` for the token vocabulary and `matcher` for
the matching rules.  All errors raised by this package derive from
`MatchError`, see `error`.
"""

# This work is licensed under the terms of the GNU GPL, version 2 or later.
# See the COPYING file in the top-level directory.

import logging

from .error import (
    MatchError,
    MatchFailure,
    MatchInterrupted,
    MatchIOError,
    MismatchError,
    TrailingOutputError,
    UsageError,
)
from .finder import MatchPair
from .matcher import (
    MatchOptions,
    check_pair,
    check_pairs,
    match,
)
from .tokens import Pattern, translate


# Suppress logging unless an application engages it.
logging.getLogger('outmatch').addHandler(logging.NullHandler())


__all__ = (
    # Functions, most to least important
    'check_pairs',
    'check_pair',
    'match',
    'translate',

    # Classes
    'MatchOptions',
    'MatchPair',
    'Pattern',

    # Exceptions, most generic to most explicit
    'MatchError',
    'UsageError',
    'MatchIOError',
    'MatchInterrupted',
    'MismatchError',
    'MatchFailure',
    'TrailingOutputError',
)
