"""
Tokenizer for the HIERARCHY section of a BVH file.

Splits raw text into symbols and braces. Numbers stay symbols; the
hierarchy builder converts them when it knows what it expects.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .errors import TokenizeError


class TokenKind(Enum):
    SYMBOL = "symbol"
    LBRACE = "{"
    RBRACE = "}"
    END = "end of input"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    line: int
    column: int

    def is_keyword(self, keyword: str) -> bool:
        """Exact, case-insensitive keyword match (never a prefix match)"""
        return self.kind is TokenKind.SYMBOL and self.value.upper() == keyword


_TOKEN_RE = re.compile(r"(?P<ws>\s+)|(?P<lbrace>\{)|(?P<rbrace>\})|(?P<symbol>[^\s{}\x00-\x1f\x7f]+)")


def tokenize(text: str, source: Optional[str] = None) -> List[Token]:
    """
    Split hierarchy text into tokens.

    Args:
        text: Text preceding the MOTION line
        source: Name used in error messages (usually the file path)

    Returns:
        List of tokens, always terminated by a single END token

    Raises:
        TokenizeError: on a character that cannot start any token
    """
    tokens = []
    line, line_start = 1, 0
    pos = 0
    length = len(text)

    while pos < length:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise TokenizeError(
                f"failed to tokenize HIERARCHY section: unexpected character {text[pos]!r}",
                line=line, column=pos - line_start + 1, source=source,
            )

        kind = match.lastgroup
        if kind == "ws":
            chunk = match.group()
            newlines = chunk.count("\n")
            if newlines:
                line += newlines
                line_start = match.start() + chunk.rindex("\n") + 1
        else:
            column = pos - line_start + 1
            if kind == "lbrace":
                tokens.append(Token(TokenKind.LBRACE, "{", line, column))
            elif kind == "rbrace":
                tokens.append(Token(TokenKind.RBRACE, "}", line, column))
            else:
                tokens.append(Token(TokenKind.SYMBOL, match.group(), line, column))
        pos = match.end()

    tokens.append(Token(TokenKind.END, "", line, pos - line_start + 1))
    return tokens
