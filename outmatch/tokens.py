"""
Template line translation

A ``.match`` file holds a copy of the expected output in which the
parts that may legitimately vary are replaced by tokens of the form
``$(NAME)``.  `translate()` turns one template line into a `Pattern`:
the literal text is escaped, each token becomes a regular expression
fragment, and the result is applied anchored at the start of whatever
output has not been consumed yet.
"""

# This work is licensed under the terms of the GNU GPL, version 2 or later.
# See the COPYING file in the top-level directory.

import re
from typing import (
    NamedTuple,
    Optional,
    Tuple,
)

# Metacharacters escaped in template text.  ']' is literal on its own.
_META_RE = re.compile(r'([*+?|{}.\\^$\[()])')

_DD_FRAGMENT = (r'\d+\+\d+ records in' '\n'
                r'\d+\+\d+ records out' '\n'
                r'\d+ bytes \(\d+ .B\) copied, [.0-9e-]+[^,]*, [.0-9]+ .B.s')

# (name, regexp fragment, help text), applied in this order.
TOKENS: Tuple[Tuple[str, str, str], ...] = (
    ('FP', r'[-+]?\d*\.?\d+([eE][-+]?\d+)?', 'a floating point number'),
    ('N', r'\d+', 'an integer (one or more decimal digits)'),
    ('*', r'.*', 'any string'),
    ('S', r'[^\x00-\x1f\x7f-\x9f]+', 'a string of non-control characters'),
    ('X', r'[0-9a-fA-F]+', 'a hex number'),
    ('XX', r'0x[0-9a-fA-F]+', 'a hex number prefixed with 0x'),
    ('W', r'\s*[^\n]', 'whitespace followed by one character'),
    ('nW', r'\S*', 'non-whitespace'),
    ('DD', _DD_FRAGMENT, 'the summary printed by a "dd" run'),
)

OPT = 'OPT'


def escape(text: str) -> str:
    """
    Backslash-escape regular expression metacharacters in ``text``.

    >>> escape('a.b $(N)')
    'a\\\\.b \\\\$\\\\(N\\\\)'
    """
    return _META_RE.sub(r'\\\1', text)


def marker(name: str) -> str:
    """Return token ``name`` as it appears after `escape`."""
    return escape(f'$({name})')


class Pattern(NamedTuple):
    """A translated template line."""
    #: The template line as read, including its newline.
    raw: str
    #: Regular expression source produced from ``raw``.
    source: str
    #: ``source``, compiled.
    regex: 're.Pattern[str]'
    #: True if the line carried an ``$(OPT)`` marker.
    optional: bool

    def consume(self, buffer: str) -> Optional[str]:
        """
        Match this pattern against the front of ``buffer``.

        :return: The rest of ``buffer`` after the matched prefix, or
                 `None` if the pattern does not match there.
        """
        m = self.regex.match(buffer)
        if m is None:
            return None
        return buffer[m.end():]


def translate(line: str) -> Pattern:
    """
    Translate one template line into a `Pattern`.

    Escaping happens first, so tokens are located by their escaped
    spelling.  No fragment contains a marker, so substitutions never
    trigger each other.  Unknown ``$(...)`` forms stay literal.  Only
    the first ``$(OPT)`` is removed; it marks the whole line optional.
    """
    source = escape(line)
    for name, fragment, _ in TOKENS:
        source = source.replace(marker(name), fragment)

    optional = marker(OPT) in source
    if optional:
        source = source.replace(marker(OPT), '', 1)

    return Pattern(line, source, re.compile(source, re.ASCII), optional)


def describe_tokens() -> str:
    """Return a table of the supported tokens, for help output."""
    rows = [(f'$({name})', text) for name, _, text in TOKENS]
    rows.append((f'$({OPT})', 'line is optional (may be missing)'))
    return '\n'.join(f'  {tok:8}{text}' for tok, text in rows)
