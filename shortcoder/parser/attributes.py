from __future__ import annotations

from .. import t
from .. import messages as m
from .stream import Err, Ok, ResultT, Stream, decodeBytes

# Straight quotes, plus the curly/double-prime quotes some page builders
# (Divi, notably) write around attribute values.
FANCY_QUOTES = "”″"
QUOTE_CHARS = "\"'" + FANCY_QUOTES


def parseAttributes(text: str, loc: str | None = None) -> t.AttrMapT:
    """
    Parses the attribute text of a shortcode into an ordered name->value dict.

    Never fails; anything that doesn't look like name=value is skipped.
    Later duplicates overwrite earlier ones.
    """
    s = Stream(text)
    attrs: t.AttrMapT = {}
    i = 0
    while True:
        i = skipWhitespace(s, i)
        if s.eof(i):
            break
        attr, i, _ = parseAttribute(s, i, loc)
        if attr is None:
            continue
        name, value = attr
        attrs[name] = value
    return attrs


# Unlike most parsers, a failed parseAttribute() returns the index to
# *resume* scanning at, which is always past the junk it rejected.


def parseAttribute(s: Stream, start: int, loc: str | None = None) -> ResultT[tuple[str, str]]:
    if s[start] == "=":
        m.lint(f"Stray '=' in shortcode attributes '{s.text}'.", lineNum=loc)
        return Err(start + 1)
    if s[start] in QUOTE_CHARS:
        value, i, _ = parseQuotedValue(s, start)
        if value is None:
            i = len(s)
        m.lint(f"Quoted value without an attribute name in shortcode attributes '{s.text}'; dropping it.", lineNum=loc)
        return Err(i)

    name, i, _ = parseAttrName(s, start)
    assert name is not None
    i = skipWhitespace(s, i)
    if s[i] != "=":
        m.lint(f"Attribute '{name}' has no value; dropping it.", lineNum=loc)
        return Err(i)
    i = skipWhitespace(s, i + 1)
    if s.eof(i):
        m.lint(f"Attribute '{name}' has an empty value; dropping it.", lineNum=loc)
        return Err(i)

    if s[i] in FANCY_QUOTES:
        value, valueEnd, _ = parseFancyQuotedValue(s, i)
        if value is None:
            # Unterminated; stripWrappingCharacters() drops the stray quote.
            value, valueEnd, _ = parseUnquotedValue(s, i)
    elif s[i] in QUOTE_CHARS:
        value, valueEnd, _ = parseQuotedValue(s, i)
        if value is None:
            m.lint(f"Attribute '{name}' has a quoted value that is never closed; dropping it.", lineNum=loc)
            return Err(len(s))
    else:
        value, valueEnd, _ = parseUnquotedValue(s, i)
    assert value is not None
    return Ok((name, stripWrappingCharacters(value)), valueEnd)


def parseAttrName(s: Stream, start: int) -> ResultT[str]:
    i = start
    while not s.eof(i) and not s[i].isspace() and s[i] != "=" and s[i] not in QUOTE_CHARS:
        i += 1
    if i == start:
        return Err(start)
    return Ok(s.slice(start, i), i)


def parseQuotedValue(s: Stream, start: int) -> ResultT[str]:
    quote = s[start]
    val, end, _ = s.skipTo(start + 1, quote)
    if val is None:
        return Err(start)
    return Ok(val, end + 1)


def parseFancyQuotedValue(s: Stream, start: int) -> ResultT[str]:
    # Curly and prime quotes come in mixed pairs (”x″), so any of them can close the value,
    # but only at the end of a word.
    i = start + 1
    while not s.eof(i):
        if s[i] in FANCY_QUOTES and (s.eof(i + 1) or s[i + 1].isspace()):
            return Ok(s.slice(start + 1, i), i + 1)
        i += 1
    return Err(start)


def parseUnquotedValue(s: Stream, start: int) -> ResultT[str]:
    i = start
    while not s.eof(i) and not s[i].isspace():
        i += 1
    return Ok(s.slice(start, i), i)


def skipWhitespace(s: Stream, start: int) -> int:
    i = start
    while not s.eof(i) and s[i].isspace():
        i += 1
    return i


def stripWrappingCharacters(value: str) -> str:
    if not value:
        return value

    value = normalizeEncoding(value)

    lead = value[0]
    tail = value[-1]
    if len(value) >= 2 and lead == tail and lead in "\"'":
        return value[1:-1]

    # Anything in U+2000-U+2FFF starts with a 0xE2 byte in UTF-8;
    # that's where the fancy quotes live.
    if "\u2000" <= lead <= "\u2fff":
        if value[0] in FANCY_QUOTES:
            value = value[1:]
        if value and value[-1] in FANCY_QUOTES:
            value = value[:-1]
    return value


def normalizeEncoding(value: str) -> str:
    # Text read with surrogateescape can carry undecodable bytes as lone surrogates;
    # give them a second, more lenient decoding.
    try:
        value.encode("utf-8")
        return value
    except UnicodeEncodeError:
        pass
    try:
        raw = value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return value
    return decodeBytes(raw)
