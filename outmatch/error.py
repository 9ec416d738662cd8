"""
outmatch Error Classes

`MatchError` is the ancestor of every exception raised by this package.
Library code raises these and never prints or exits; only the command
line front end turns them into diagnostics and exit codes.

.. admonition:: Exception Hierarchy Reference

 |   `Exception`
 |    +-- `MatchError`
 |         +-- `UsageError`
 |         +-- `MatchIOError`
 |         +-- `MatchInterrupted`
 |         +-- `MismatchError`
 |              +-- `MatchFailure`
 |              +-- `TrailingOutputError`
"""

# This work is licensed under the terms of the GNU GPL, version 2 or later.
# See the COPYING file in the top-level directory.


class MatchError(Exception):
    """Abstract error class for all errors originating from this package."""


class UsageError(MatchError):
    """
    Malformed arguments, or a file named for a pair cannot be opened.

    Raised before any matching starts.
    """


class MatchIOError(MatchError):
    """
    A match-file or output-file could not be read.

    :param filename: The file that failed to open or read.
    :param reason: The system's description of the failure.
    """
    def __init__(self, filename: str, reason: str):
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


class MatchInterrupted(MatchError):
    """A termination signal arrived while matching."""


class MismatchError(MatchError):
    """
    Abstract error class for output that does not fit its template.

    :param match_file: The template that was being applied.
    :param line: The template line number where matching stopped.
    :param error_message: Human-readable description, without prefix.
    """
    def __init__(self, match_file: str, line: int, error_message: str):
        super().__init__(error_message)
        self.match_file = match_file
        self.line = line
        #: Human-readable error message, without any prefix.
        self.error_message = error_message


class MatchFailure(MismatchError):
    """A non-optional template line did not match the output."""
    def __init__(self, match_file: str, line: int):
        super().__init__(match_file, line,
                         f"{match_file}:{line} did not match pattern")


class TrailingOutputError(MismatchError):
    """
    Output was left over after the last template line was consumed.

    :param remainder: The unconsumed output.
    """
    def __init__(self, match_file: str, line: int, remainder: str):
        printable = remainder.replace('\n', '\\n')
        super().__init__(match_file, line,
                         f'line {line}: unexpected output: "{printable}"')
        self.remainder = remainder
