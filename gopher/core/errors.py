"""Exception hierarchy for the Gopher core."""


class GopherError(Exception):
    """Base class for recoverable errors raised by the core."""


class ParseError(GopherError):
    """Command line could not be split into arguments."""


class UnbalancedQuotes(ParseError):
    """A double-quoted span was opened but never closed."""

    def __init__(self, line):
        super().__init__('odd number of quotes')
        self.line = line


class SnapshotError(GopherError):
    """Directory enumeration or stat failed while building a snapshot."""

    def __init__(self, path, cause):
        super().__init__(f'{path}: {cause.strerror or cause}' if isinstance(cause, OSError) else f'{path}: {cause}')
        self.path = path
        self.cause = cause


class NameCollision(GopherError):
    """Target name already exists in the current directory."""

    def __init__(self, name):
        super().__init__(f'{name} already exists')
        self.name = name


class NameTooLong(GopherError):
    """A derived path or archive name exceeds its fixed limit."""

    def __init__(self, name, limit):
        super().__init__(f'Filename too long ({len(name)} >= {limit})')
        self.name = name
        self.limit = limit
