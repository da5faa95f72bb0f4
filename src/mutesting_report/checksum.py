"""Extract the mutant checksum from runner process output."""

from __future__ import annotations

from mutesting_report.errors import ChecksumOutOfRangeError

# 'PASS "<path>" with checksum <value>' -> <value> is the fifth token
CHECKSUM_TOKEN_INDEX = 4


def extract_checksum(process_output: str) -> str:
    """Return the checksum token of a runner output line.

    The output is split on single spaces and the token at
    ``CHECKSUM_TOKEN_INDEX`` is returned as an opaque string, with the
    runner's trailing newline stripped.  Output with too few tokens, or
    whose checksum token is blank, raises ``ChecksumOutOfRangeError``
    instead of yielding an empty checksum.
    """
    tokens = process_output.split(" ")
    if len(tokens) <= CHECKSUM_TOKEN_INDEX:
        raise ChecksumOutOfRangeError(process_output, CHECKSUM_TOKEN_INDEX)
    checksum = tokens[CHECKSUM_TOKEN_INDEX].rstrip()
    if not checksum:
        raise ChecksumOutOfRangeError(process_output, CHECKSUM_TOKEN_INDEX)
    return checksum
