"""Character cursor over Lox source text. The scanner never touches the raw string directly: it reads through a Source,
which tracks where the current lexeme started, where the cursor is, and which line the cursor is on.
"""


class Source:
    """Rune-addressable view of a program with single-character lookahead."""
    NUL = "\0"  # returned by peek/peek_next past the end of input

    def __init__(self, src):
        self.src = src
        self.start = 0    # offset of the first character of the current lexeme
        self.current = 0  # offset of the next character to be consumed
        self.line = 1

    def __len__(self):
        return len(self.src)

    def at_end(self):
        return self.current >= len(self.src)

    def begin_lexeme(self):
        """Marks the cursor position as the start of a new lexeme."""
        self.start = self.current

    def advance(self):
        """Consumes and returns the current character."""
        char = self.src[self.current]
        self.current += 1
        return char

    def match(self, expected):
        """Consumes the current character only if it is expected."""
        if self.at_end() or self.src[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        if self.at_end():
            return Source.NUL
        return self.src[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.src):
            return Source.NUL
        return self.src[self.current + 1]

    def new_line(self):
        self.line += 1

    def lexeme(self, start_offset=0, end_offset=0):
        """Returns the current lexeme, optionally trimmed on either side (used to drop string quotes)."""
        return self.src[self.start + start_offset:self.current + end_offset]
