from whilelang.span import Span


class WhileError(Exception):
    """Base exception type for every error raised by the While toolchain."""


class LexError(WhileError):
    """An unrecognised character in the source.

    The lexer yields these as items rather than raising them, so a consumer
    can keep reading past a bad character if it wants to.
    """
    def __init__(self, message: str, span: Span):
        super().__init__(f"Lexing error: {message} (At {span.start}-{span.end})")
        self.message = message
        self.span = span


class ParseError(WhileError):
    """An unexpected token, malformed literal or premature end of input."""
    def __init__(self, message: str, span: Span):
        super().__init__(message)
        self.message = message
        self.span = span


class InterpretError(WhileError):
    """A runtime type mismatch or lookup failure while evaluating a program."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
