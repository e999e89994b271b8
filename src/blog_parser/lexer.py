from dataclasses import dataclass
from enum import Enum
from typing import Generator, List, Optional, Sequence

class TokenClass(Enum):
    """Token classes for the Blog Builder markup.

    Each value is (display name, precedence). Classes at or below
    BLOCK_PRECEDENCE start block-level constructs; the rest are inline.
    """
    NEWLINE = ("Newline", 1)
    HASHES = ("Hashes", 2)
    MENU = ("Menu", 2)
    OPEN_PAREN = ("OpenParen", 3)
    CLOSE_PAREN = ("CloseParen", 3)
    CLOSE_SQUARE = ("CloseSquare", 3)
    OPEN_SQUARE = ("OpenSquare", 4)
    CONTROL = ("Control", 4)
    EMPHASIS = ("Emphasis", 5)
    TEXT = ("Text", 6)

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def precedence(self) -> int:
        return self.value[1]

    @classmethod
    def of(cls, char: str) -> "TokenClass":
        """Classify a single character."""
        return _CHAR_CLASSES.get(char, cls.TEXT)

    def __str__(self) -> str:
        return self.display_name

_CHAR_CLASSES = {
    '#': TokenClass.HASHES,
    '\n': TokenClass.NEWLINE,
    '[': TokenClass.OPEN_SQUARE,
    ']': TokenClass.CLOSE_SQUARE,
    '(': TokenClass.OPEN_PAREN,
    ')': TokenClass.CLOSE_PAREN,
    '~': TokenClass.MENU,
    '*': TokenClass.EMPHASIS,
    '_': TokenClass.EMPHASIS,
    ':': TokenClass.CONTROL,
}

BLOCK_PRECEDENCE = 2

CONTROL_SENTINEL = "::"

@dataclass(frozen=True)
class Token:
    """A lexical token with position information."""
    cls: TokenClass
    value: str
    line: int = 1
    column: int = 1

    @property
    def precedence(self) -> int:
        return self.cls.precedence

    def __repr__(self) -> str:
        """Readable representation for debugging."""
        return f"Token({self.cls.name}, {self.value!r}, line={self.line}, col={self.column})"

class BlogLexer:
    """
    Lexical analyzer for Blog Builder markup.

    Square brackets and parentheses are tracked with separate nesting
    counters. While either is open, everything up to the matching closer is
    read as text, so link labels and hrefs may contain emphasis, hash or
    colon characters without being re-tokenized. A newline closes any open
    bracket: brackets never span lines.
    """

    def __init__(self):
        self.init("")

    def init(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.square_depth = 0
        self.paren_depth = 0

    @property
    def current_char(self) -> Optional[str]:
        return self._peek(0)

    def _peek(self, offset: int = 0) -> Optional[str]:
        peek_pos = self.pos + offset
        return self.text[peek_pos] if peek_pos < len(self.text) else None

    def _advance(self) -> None:
        if self.current_char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1

    def _advance_n(self, n: int) -> None:
        for _ in range(n):
            if self.current_char is None: break
            self._advance()

    def _is_control_sentinel(self) -> bool:
        return self.text.startswith(CONTROL_SENTINEL, self.pos)

    def _handle_run(self, token_class: TokenClass, tok_line: int, tok_col: int) -> Token:
        """Consume consecutive characters of the same class (hashes, emphasis)."""
        start_idx = self.pos
        while self.current_char is not None and TokenClass.of(self.current_char) == token_class:
            self._advance()
        return Token(token_class, self.text[start_idx:self.pos], tok_line, tok_col)

    def _handle_bracketed_text(self, tok_line: int, tok_col: int) -> Token:
        """Consume text inside brackets, up to the closer of the outermost bracket."""
        start_idx = self.pos
        if self.square_depth:
            opener, closer, depth_attr = '[', ']', 'square_depth'
        else:
            opener, closer, depth_attr = '(', ')', 'paren_depth'

        while self.current_char is not None and self.current_char != '\n':
            depth = getattr(self, depth_attr)
            if self.current_char == opener:
                setattr(self, depth_attr, depth + 1)
            elif self.current_char == closer:
                if depth == 1:
                    break
                setattr(self, depth_attr, depth - 1)
            self._advance()

        return Token(TokenClass.TEXT, self.text[start_idx:self.pos], tok_line, tok_col)

    def _handle_text(self, tok_line: int, tok_col: int) -> Token:
        start_idx = self.pos

        while self.current_char is not None:
            char_class = TokenClass.of(self.current_char)
            if char_class == TokenClass.CONTROL:
                # A lone colon is ordinary text; only '::' starts a control sequence
                if self._is_control_sentinel(): break
            elif char_class != TokenClass.TEXT:
                break
            self._advance()

        if self.pos == start_idx and self.current_char is not None:
            self._advance()

        return Token(TokenClass.TEXT, self.text[start_idx:self.pos], tok_line, tok_col)

    def get_next_token(self) -> Optional[Token]:
        if self.current_char is None:
            return None

        tok_line, tok_col = self.line, self.column
        char = self.current_char

        if char == '\n':
            self.square_depth = 0
            self.paren_depth = 0
            self._advance()
            return Token(TokenClass.NEWLINE, char, tok_line, tok_col)

        if self.square_depth or self.paren_depth:
            closer = ']' if self.square_depth else ')'
            if char == closer:
                return self._handle_close(char, tok_line, tok_col)
            return self._handle_bracketed_text(tok_line, tok_col)

        char_class = TokenClass.of(char)

        if char_class in (TokenClass.HASHES, TokenClass.EMPHASIS):
            return self._handle_run(char_class, tok_line, tok_col)

        if char_class == TokenClass.CONTROL:
            if self._is_control_sentinel():
                self._advance_n(len(CONTROL_SENTINEL))
                return Token(TokenClass.CONTROL, CONTROL_SENTINEL, tok_line, tok_col)
            return self._handle_text(tok_line, tok_col)

        if char == '[':
            self._advance()
            self.square_depth += 1
            return Token(TokenClass.OPEN_SQUARE, char, tok_line, tok_col)
        if char == '(':
            self._advance()
            self.paren_depth += 1
            return Token(TokenClass.OPEN_PAREN, char, tok_line, tok_col)
        if char in '])':
            return self._handle_close(char, tok_line, tok_col)

        if char_class == TokenClass.MENU:
            self._advance()
            return Token(TokenClass.MENU, char, tok_line, tok_col)

        return self._handle_text(tok_line, tok_col)

    def _handle_close(self, char: str, tok_line: int, tok_col: int) -> Token:
        # Decrement the matching counter, never below zero
        if char == ']':
            self.square_depth = max(self.square_depth - 1, 0)
        else:
            self.paren_depth = max(self.paren_depth - 1, 0)
        self._advance()
        return Token(TokenClass.of(char), char, tok_line, tok_col)

    def tokenize(self, text: str) -> Generator[Token, None, None]:
        self.init(text)
        while self.current_char is not None:
            token = self.get_next_token()
            if token and token.value:
                yield token

def tokenize(text: str) -> List[Token]:
    lexer = BlogLexer()
    return list(lexer.tokenize(text))

class TokenStream:
    """Read-only cursor over a token list, used by the parser and its parselets."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.position = 0

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Look ahead in token stream without consuming."""
        pos = self.position + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def next(self) -> Optional[Token]:
        """Consume and return next token."""
        token = self.peek()
        if token:
            self.position += 1
        return token
