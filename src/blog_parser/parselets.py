"""Parselets for the Blog Builder parser.

A parselet is bound to one token class. It is handed the token that
triggered it, consumes whatever else its construct needs from the token
stream, and returns exactly one expression. Failures are returned as Error
expressions; a parselet never raises on malformed input.

Two registries are built once at import time: the block grammar used at the
top level of a page, and the inline grammar used inside a paragraph.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Mapping, NamedTuple, Tuple, Union

import constants
from .expression import (
    Bold,
    BoldItalic,
    Code,
    Date,
    Error,
    Expression,
    FloatingImage,
    Heading,
    Hyperlink,
    Image,
    Italic,
    Menu,
    Newline,
    Notice,
    Pagename,
    Paragraph,
    ParseError,
    Text,
    Tile,
    WorkInProgress,
)
from .lexer import BLOCK_PRECEDENCE, Token, TokenClass, TokenStream

if TYPE_CHECKING:
    from .parser import BlogParser

class Parselet(ABC):
    """Grammar rule handler for one token class."""

    @abstractmethod
    def parse(self, parser: "BlogParser", tokens: TokenStream, token: Token) -> Expression:
        """
        Parse one expression starting at an already consumed token.

        :param parser: The driving parser, for nested sub-expression lists
        :param tokens: The token stream, positioned just after `token`
        :param token: The token that selected this parselet
        :return: The parsed expression, or an Error expression
        """

def expect(tokens: TokenStream, token_class: TokenClass) -> Union[Token, Error]:
    """
    Consume the next token if it is of the expected class.

    A mismatched token is left in the stream so that parsing can resume at it.

    :return: The token, or an Error expression describing what was missing
    """
    token = tokens.peek()
    if token is None:
        return Error(ParseError.unexpected_eof())
    if token.cls != token_class:
        return Error(ParseError.expected_token(token_class))
    return tokens.next()

def expect_text(tokens: TokenStream) -> Union[str, Error]:
    """Consume a text token and return its trimmed value."""
    token = expect(tokens, TokenClass.TEXT)
    if isinstance(token, Error):
        return token
    return token.value.strip()

def read_bracketed(tokens: TokenStream) -> Union[str, Error]:
    """
    Read a `[value]` group and return the trimmed raw text inside it.

    Empty brackets yield an empty string.
    """
    opening = expect(tokens, TokenClass.OPEN_SQUARE)
    if isinstance(opening, Error):
        return opening

    value = ""
    next_token = tokens.peek()
    if next_token is not None and next_token.cls == TokenClass.TEXT:
        value = tokens.next().value.strip()

    closing = expect(tokens, TokenClass.CLOSE_SQUARE)
    if isinstance(closing, Error):
        return closing
    return value

def consume_line_end(tokens: TokenStream) -> None:
    next_token = tokens.peek()
    if next_token is not None and next_token.cls == TokenClass.NEWLINE:
        tokens.next()

class HeadingParselet(Parselet):
    """Parselet for headings: a run of hashes followed by the heading text."""

    def parse(self, parser, tokens, token):
        level = len(token.value)
        if level > constants.MAX_HEADING_LEVEL:
            return Error(ParseError.too_many_hashes(level, constants.MAX_HEADING_LEVEL))

        text = expect_text(tokens)
        if isinstance(text, Error):
            return text

        consume_line_end(tokens)
        return Heading(level=level, text=text)

class ParagraphParselet(Parselet):
    """
    Parselet for paragraphs.

    Collects inline expressions up to the end of the line. Block-level tokens
    (hashes, menu markers) end the paragraph without being consumed. An error
    in a nested expression replaces the whole paragraph, so that every Error
    ends up at the top level of the page.
    """

    def parse(self, parser, tokens, token):
        children: List[Expression] = [Text(token.value)]
        children.extend(parser.parse_tokens(tokens, BLOCK_PRECEDENCE, inline=True))

        if children and isinstance(children[-1], Error):
            return children[-1]

        consume_line_end(tokens)
        return Paragraph(children)

class TextParselet(Parselet):
    """Inline parselet for literal text, including bare parentheses."""

    def parse(self, parser, tokens, token):
        return Text(token.value)

class NewlineParselet(Parselet):
    """Collapses a run of newlines into a single paragraph break."""

    def parse(self, parser, tokens, token):
        while (next_token := tokens.peek()) and next_token.cls == TokenClass.NEWLINE:
            tokens.next()
        return Newline()

# Emphasis markers and the expression each produces
EMPHASIS_STYLES: Mapping[str, Callable[[str], Expression]] = MappingProxyType({
    "_": Italic,
    "*": Italic,
    "__": Bold,
    "**": Bold,
    "___": BoldItalic,
    "***": BoldItalic,
    "__*": BoldItalic,
    "**_": BoldItalic,
})

class EmphasisParselet(Parselet):
    """Parselet for emphasized text: marker, text, identical marker."""

    def parse(self, parser, tokens, token):
        style = EMPHASIS_STYLES.get(token.value)
        if style is None:
            return Error(ParseError.unrecognized_emphasis(token.value))

        content = expect(tokens, TokenClass.TEXT)
        if isinstance(content, Error):
            return content

        closing = expect(tokens, TokenClass.EMPHASIS)
        if isinstance(closing, Error):
            return closing

        if closing.value != token.value:
            return Error(ParseError.mismatched_delimiters(token.value, closing.value))

        return style(content.value)

class HyperlinkParselet(Parselet):
    """Parselet for hyperlinks: `[text](href)`."""

    def parse(self, parser, tokens, token):
        text = expect_text(tokens)
        if isinstance(text, Error):
            return text

        for token_class in (TokenClass.CLOSE_SQUARE, TokenClass.OPEN_PAREN):
            delimiter = expect(tokens, token_class)
            if isinstance(delimiter, Error):
                return delimiter

        href = expect_text(tokens)
        if isinstance(href, Error):
            return href

        closing = expect(tokens, TokenClass.CLOSE_PAREN)
        if isinstance(closing, Error):
            return closing

        return Hyperlink(text=text, href=href)

class MenuParselet(Parselet):
    """Parselet for the menu marker, expanded later by the emitter."""

    def parse(self, parser, tokens, token):
        return Menu()

class ControlSequence(NamedTuple):
    """Argument count and expression builder of one control sequence."""
    arguments: int
    build: Callable[..., Expression]

CONTROL_SEQUENCES: Mapping[str, ControlSequence] = MappingProxyType({
    "image": ControlSequence(2, lambda alt, href: Image(alt=alt, href=href)),
    "float": ControlSequence(2, lambda alt, href: FloatingImage(alt=alt, href=href)),
    "notice": ControlSequence(1, Notice),
    "wip": ControlSequence(1, WorkInProgress),
    "tile": ControlSequence(
        4,
        lambda title, description, href, image: Tile(
            title=title, href=href, image=image, description=description
        ),
    ),
    "minitile": ControlSequence(3, lambda title, href, image: Tile(title=title, href=href, image=image)),
    "code": ControlSequence(2, lambda language, path: Code(language=language, path=path)),
    "pagename": ControlSequence(1, Pagename),
    "date": ControlSequence(0, Date),
    "menu": ControlSequence(0, Menu),
})

# Returns as soon as its single argument has been read
FAST_PATH_SEQUENCES = frozenset({"wip"})

class ControlParselet(Parselet):
    """
    Parselet for control sequences: `::name [arg] [arg] ...`.

    Arguments are read as raw trimmed text while the next token opens a
    square bracket; whitespace between two arguments is skipped.
    """

    def parse(self, parser, tokens, token):
        name = expect_text(tokens)
        if isinstance(name, Error):
            return name

        arguments: List[str] = []
        while self._at_argument(tokens):
            argument = read_bracketed(tokens)
            if isinstance(argument, Error):
                return argument
            arguments.append(argument)

            if name in FAST_PATH_SEQUENCES:
                return WorkInProgress(argument)

        sequence = CONTROL_SEQUENCES.get(name)
        if sequence is None:
            return Error(ParseError.unrecognized_control(name))
        if len(arguments) != sequence.arguments:
            return Error(ParseError.wrong_argument_count(name, sequence.arguments, len(arguments)))
        return sequence.build(*arguments)

    @staticmethod
    def _at_argument(tokens: TokenStream) -> bool:
        next_token = tokens.peek()
        if next_token is None:
            return False
        if next_token.cls == TokenClass.OPEN_SQUARE:
            return True
        # Skip spacing between arguments, but only when another argument follows
        following = tokens.peek(1)
        if (next_token.cls == TokenClass.TEXT and not next_token.value.strip()
                and following is not None and following.cls == TokenClass.OPEN_SQUARE):
            tokens.next()
            return True
        return False

def build_registry(pairs: Iterable[Tuple[TokenClass, Parselet]]) -> Mapping[TokenClass, Parselet]:
    """
    Build an immutable token-class-to-parselet table.

    :raises ValueError: If a token class is registered twice
    """
    registry: Dict[TokenClass, Parselet] = {}
    for token_class, parselet in pairs:
        if token_class in registry:
            raise ValueError(f"duplicate parselet registration for token class {token_class}")
        registry[token_class] = parselet
    return MappingProxyType(registry)

_paragraph = ParagraphParselet()
_text = TextParselet()
_hyperlink = HyperlinkParselet()
_emphasis = EmphasisParselet()
_control = ControlParselet()

BLOCK_PARSELETS = build_registry([
    (TokenClass.HASHES, HeadingParselet()),
    (TokenClass.TEXT, _paragraph),
    (TokenClass.OPEN_PAREN, _paragraph),
    (TokenClass.CLOSE_PAREN, _paragraph),
    (TokenClass.NEWLINE, NewlineParselet()),
    (TokenClass.MENU, MenuParselet()),
    (TokenClass.OPEN_SQUARE, _hyperlink),
    (TokenClass.EMPHASIS, _emphasis),
    (TokenClass.CONTROL, _control),
])

INLINE_PARSELETS = build_registry([
    (TokenClass.TEXT, _text),
    (TokenClass.OPEN_PAREN, _text),
    (TokenClass.CLOSE_PAREN, _text),
    (TokenClass.OPEN_SQUARE, _hyperlink),
    (TokenClass.EMPHASIS, _emphasis),
    (TokenClass.CONTROL, _control),
])
