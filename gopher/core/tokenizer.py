"""Quote-aware splitting of user-typed command lines."""

from .errors import UnbalancedQuotes

QUOTE = '"'
SPACE = ' '


def tokenize(line):
    """Split ``line`` into arguments.

    Runs of spaces separate arguments; a double quote opens a span that
    runs to the next double quote, and spaces inside it do not split.
    Quotes are delimiters only and are removed from every argument, so an
    argument can never contain a literal quote. Blank input yields ``[]``.

    Raises UnbalancedQuotes when a quoted span is never closed.
    """
    tokens = []
    pos = 0
    end = len(line)
    while pos < end:
        while pos < end and line[pos] == SPACE:
            pos += 1
        if pos >= end:
            break
        start = pos
        while pos < end and line[pos] != SPACE:
            if line[pos] == QUOTE:
                close = line.find(QUOTE, pos + 1)
                if close < 0:
                    raise UnbalancedQuotes(line)
                pos = close
            pos += 1
        tokens.append(line[start:pos].replace(QUOTE, ''))
    return tokens
