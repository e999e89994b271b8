"""Parser for the Blog Builder markup.

Turns the token stream of one page into a list of expressions using
precedence climbing: every token class has a precedence, and a nested parse
only consumes tokens that bind tighter than the construct that started it.
Malformed input never raises; each failure becomes an Error expression at
the top level of the returned list, in source order.
"""

from typing import Iterable, List, Mapping, Optional, Union

from .expression import Error, Expression, ParseError
from .lexer import Token, TokenClass, TokenStream, tokenize
from .parselets import BLOCK_PARSELETS, INLINE_PARSELETS, Parselet

class BlogParser:
    """Precedence-climbing parser driven by the parselet registries."""

    def __init__(self,
                 block_parselets: Mapping[TokenClass, Parselet] = BLOCK_PARSELETS,
                 inline_parselets: Mapping[TokenClass, Parselet] = INLINE_PARSELETS):
        self.block_parselets = block_parselets
        self.inline_parselets = inline_parselets

    def parse(self, tokens: Union[TokenStream, Iterable[Token]]) -> List[Expression]:
        """Parse a whole token stream into top-level expressions."""
        if not isinstance(tokens, TokenStream):
            tokens = TokenStream(tokens)

        output: List[Expression] = []
        while not tokens.at_end:
            output.extend(self.parse_tokens(tokens, 0))
        return output

    def parse_tokens(self, tokens: TokenStream, min_precedence: int,
                     inline: bool = False) -> List[Expression]:
        """
        Parse expressions while the next token binds tighter than `min_precedence`.

        :param tokens: The token stream
        :param min_precedence: Tokens at or below this precedence end the list
        :param inline: Use the inline grammar, and stop right after an error
        :return: The parsed expressions, in order
        """
        output: List[Expression] = []
        while (token := tokens.peek()) and token.precedence > min_precedence:
            expression = self.parse_next(tokens, inline)
            output.append(expression)
            if inline and isinstance(expression, Error):
                break
        return output

    def parse_next(self, tokens: TokenStream, inline: bool = False) -> Expression:
        """Consume the next token and parse the expression it starts."""
        token = tokens.next()
        if token is None:
            return Error(ParseError.unexpected_eof())

        parselet = self.parselet_for(token.cls, inline)
        if parselet is None:
            return Error(ParseError.no_parselet(token.cls))

        return parselet.parse(self, tokens, token)

    def parselet_for(self, token_class: TokenClass, inline: bool = False) -> Optional[Parselet]:
        registry = self.inline_parselets if inline else self.block_parselets
        return registry.get(token_class)

def parse(source: str) -> List[Expression]:
    """
    Parse page source into a list of expressions.

    Provides the main entry point for parsing Blog Builder markup.
    """
    return BlogParser().parse(tokenize(source))
