"""Expression tree for the Blog Builder markup.

The parser produces a flat list of expressions per page. Only Paragraph
nests other expressions, and only inline ones; there are no back
references, so a page's tree is discarded once its HTML has been emitted.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, List, Optional, Sequence

from .lexer import TokenClass

class ExpressionType(Enum):
    """Types of expressions in a parsed page."""
    HEADING = auto()          # '#' through '######'
    PARAGRAPH = auto()        # Line of inline content
    TEXT = auto()             # Plain text
    ITALIC = auto()           # _text_ or *text*
    BOLD = auto()             # __text__ or **text**
    BOLD_ITALIC = auto()      # ***text*** and friends
    HYPERLINK = auto()        # [text](href)
    IMAGE = auto()            # ::image [alt] [href]
    FLOATING_IMAGE = auto()   # ::float [alt] [href]
    TILE = auto()             # ::tile / ::minitile
    NOTICE = auto()           # ::notice [message]
    WORK_IN_PROGRESS = auto() # ::wip [message]
    CODE = auto()             # ::code [language] [path]
    PAGENAME = auto()         # ::pagename [name]
    DATE = auto()             # ::date
    MENU = auto()             # ~ or ::menu
    NEWLINE = auto()          # Paragraph break
    ERROR = auto()            # Malformed construct

class ParseErrorKind(Enum):
    """Conditions the parser can diagnose."""
    UNEXPECTED_EOF = auto()
    EXPECTED_TOKEN = auto()
    UNRECOGNIZED_EMPHASIS = auto()
    TOO_MANY_HASHES = auto()
    MISMATCHED_DELIMITERS = auto()
    UNRECOGNIZED_CONTROL = auto()
    WRONG_ARGUMENT_COUNT = auto()
    NO_PARSELET = auto()

@dataclass(frozen=True)
class ParseError:
    """A diagnosable parse failure, with enough data to describe itself."""
    kind: ParseErrorKind
    token_class: Optional[TokenClass] = None
    name: Optional[str] = None
    expected: Optional[int] = None
    actual: Optional[int] = None
    found: Optional[str] = None

    @classmethod
    def unexpected_eof(cls) -> "ParseError":
        return cls(ParseErrorKind.UNEXPECTED_EOF)

    @classmethod
    def expected_token(cls, token_class: TokenClass) -> "ParseError":
        return cls(ParseErrorKind.EXPECTED_TOKEN, token_class=token_class)

    @classmethod
    def unrecognized_emphasis(cls, sequence: str) -> "ParseError":
        return cls(ParseErrorKind.UNRECOGNIZED_EMPHASIS, name=sequence)

    @classmethod
    def too_many_hashes(cls, count: int, maximum: int) -> "ParseError":
        return cls(ParseErrorKind.TOO_MANY_HASHES, expected=maximum, actual=count)

    @classmethod
    def mismatched_delimiters(cls, opening: str, closing: str) -> "ParseError":
        return cls(ParseErrorKind.MISMATCHED_DELIMITERS, name=opening, found=closing)

    @classmethod
    def unrecognized_control(cls, name: str) -> "ParseError":
        return cls(ParseErrorKind.UNRECOGNIZED_CONTROL, name=name)

    @classmethod
    def wrong_argument_count(cls, name: str, expected: int, actual: int) -> "ParseError":
        return cls(ParseErrorKind.WRONG_ARGUMENT_COUNT, name=name, expected=expected, actual=actual)

    @classmethod
    def no_parselet(cls, token_class: TokenClass) -> "ParseError":
        return cls(ParseErrorKind.NO_PARSELET, token_class=token_class)

    @property
    def message(self) -> str:
        kind = self.kind
        if kind == ParseErrorKind.UNEXPECTED_EOF:
            return "unexpected end of input"
        if kind == ParseErrorKind.EXPECTED_TOKEN:
            return f"expected token of class '{self.token_class}'"
        if kind == ParseErrorKind.UNRECOGNIZED_EMPHASIS:
            return f"unrecognized emphasis sequence '{self.name}'"
        if kind == ParseErrorKind.TOO_MANY_HASHES:
            return f"too many heading marks (found {self.actual}, maximum is {self.expected})"
        if kind == ParseErrorKind.MISMATCHED_DELIMITERS:
            return f"mismatched emphasis delimiters ('{self.name}' closed by '{self.found}')"
        if kind == ParseErrorKind.UNRECOGNIZED_CONTROL:
            return f"unrecognized control sequence '{self.name}'"
        if kind == ParseErrorKind.WRONG_ARGUMENT_COUNT:
            plural = "" if self.expected == 1 else "s"
            return (f"control sequence '{self.name}' expects {self.expected} "
                    f"argument{plural}, found {self.actual}")
        return f"no parselet available for token class '{self.token_class}'"

    def __str__(self) -> str:
        return self.message

class Expression:
    """Base class for all expressions."""
    type: ClassVar[ExpressionType]

    # Inline expressions may share a paragraph; block ones stand alone
    inline: ClassVar[bool] = False

    def display(self) -> str:
        """Short markup-like rendering, used to locate diagnostics."""
        raise NotImplementedError

@dataclass
class Heading(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.HEADING
    level: int
    text: str

    def display(self) -> str:
        return f"{'#' * self.level} {self.text}"

@dataclass
class Paragraph(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.PARAGRAPH
    children: List[Expression] = field(default_factory=list)

    def display(self) -> str:
        return "".join(child.display() for child in self.children)

@dataclass
class Text(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.TEXT
    inline: ClassVar[bool] = True
    value: str

    def display(self) -> str:
        return self.value

@dataclass
class Italic(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.ITALIC
    inline: ClassVar[bool] = True
    text: str

    def display(self) -> str:
        return f"_{self.text}_"

@dataclass
class Bold(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.BOLD
    inline: ClassVar[bool] = True
    text: str

    def display(self) -> str:
        return f"**{self.text}**"

@dataclass
class BoldItalic(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.BOLD_ITALIC
    inline: ClassVar[bool] = True
    text: str

    def display(self) -> str:
        return f"***{self.text}***"

@dataclass
class Hyperlink(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.HYPERLINK
    inline: ClassVar[bool] = True
    text: str
    href: str

    def display(self) -> str:
        return f"[{self.text}]({self.href})"

@dataclass
class Image(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.IMAGE
    inline: ClassVar[bool] = True
    alt: str
    href: str

    def display(self) -> str:
        return f"::image [{self.alt}] [{self.href}]"

@dataclass
class FloatingImage(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.FLOATING_IMAGE
    inline: ClassVar[bool] = True
    alt: str
    href: str

    def display(self) -> str:
        return f"::float [{self.alt}] [{self.href}]"

@dataclass
class Tile(Expression):
    """Clickable card linking to another page."""
    type: ClassVar[ExpressionType] = ExpressionType.TILE
    title: str
    href: str
    image: str
    description: Optional[str] = None

    def display(self) -> str:
        if self.description is None:
            return f"::minitile [{self.title}] [{self.href}] [{self.image}]"
        return f"::tile [{self.title}] [{self.description}] [{self.href}] [{self.image}]"

@dataclass
class Notice(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.NOTICE
    message: str

    def display(self) -> str:
        return f"::notice [{self.message}]"

@dataclass
class WorkInProgress(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.WORK_IN_PROGRESS
    message: str

    def display(self) -> str:
        return f"::wip [{self.message}]"

@dataclass
class Code(Expression):
    """Source file included verbatim at emit time."""
    type: ClassVar[ExpressionType] = ExpressionType.CODE
    language: str
    path: str

    def display(self) -> str:
        return f"::code [{self.language}] [{self.path}]"

@dataclass
class Pagename(Expression):
    """Overrides the page title derived from the file name."""
    type: ClassVar[ExpressionType] = ExpressionType.PAGENAME
    name: str

    def display(self) -> str:
        return f"::pagename [{self.name}]"

@dataclass
class Date(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.DATE

    def display(self) -> str:
        return "::date"

@dataclass
class Menu(Expression):
    """Placeholder for the site menu; the emitter expands it from the config."""
    type: ClassVar[ExpressionType] = ExpressionType.MENU

    def display(self) -> str:
        return "~"

@dataclass
class Newline(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.NEWLINE

    def display(self) -> str:
        return "\\n"

@dataclass
class Error(Expression):
    type: ClassVar[ExpressionType] = ExpressionType.ERROR
    error: ParseError

    def display(self) -> str:
        return f"<error: {self.error.message}>"


def display_expressions(expressions: Sequence[Expression], return_string: bool = False,
                        indent: int = 0) -> Optional[str]:
    """
    Display or return a text representation of a list of expressions.

    :param expressions: Expressions to display
    :param return_string: If True, return the display string instead of printing
    :param indent: Current indentation level (used recursively)
    :return: String representation if return_string=True, None otherwise
    """
    prefix = "  " * indent
    parts = []
    for expression in expressions:
        if isinstance(expression, Paragraph):
            parts.append(f"{prefix}{expression.type.name}")
            child_str = display_expressions(expression.children, return_string=True, indent=indent + 1)
            if child_str:
                parts.append(child_str)
        else:
            parts.append(f"{prefix}{expression.type.name}: {expression.display()!r}")

    result = "\n".join(parts)

    if return_string:
        return result
    print(result)
    return None
