from __future__ import annotations

import re

from .. import t
from .nodes import Token, TokenKind

if t.TYPE_CHECKING:
    from .stream import Stream

# [name attrs], [/name], or [name attrs/].
# The match always stops at the first ], even inside a quoted value.
SHORTCODE_RE = re.compile(r"\[(/?)([\w-]+)([^\]]*?)(/)?\]", flags=re.ASCII)


def scanTokens(s: Stream) -> t.Generator[Token, None, None]:
    for match in SHORTCODE_RE.finditer(s.text):
        yield tokenFromMatch(s, match)


def tokenFromMatch(s: Stream, match: re.Match) -> Token:
    # The closing flag wins: [/foo/] is a closing tag.
    if match[1]:
        kind = TokenKind.Closing
    elif match[4]:
        kind = TokenKind.SelfClosing
    else:
        kind = TokenKind.Opening
    return Token(
        raw=match[0],
        position=match.start(),
        kind=kind,
        name=match[2],
        rawAttributes=match[3].strip(),
        loc=s.loc(match.start()),
    )
