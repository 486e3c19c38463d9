from __future__ import annotations

from .. import t
from .. import messages as m
from .attributes import parseAttributes
from .nodes import ClosingTag, ShortcodeRecord, TagStack, TokenKind
from .scanner import scanTokens
from .serializer import endTagStr, kebabCase, startTagStrFromRecord

if t.TYPE_CHECKING:
    from .nodes import Token
    from .stream import Stream


def buildRecords(s: Stream) -> list[ShortcodeRecord]:
    """
    Pairs up the shortcode tokens in the stream,
    producing one record per opening or self-closing tag,
    in source order.

    Closing tags pop whatever is on top of the stack,
    and anything still open at the end gets a closing tag made up for it,
    so every non-self-closing record comes out with a closingTag.
    """
    records: list[ShortcodeRecord] = []
    stack = TagStack()
    for token in scanTokens(s):
        if token.kind is TokenKind.Closing:
            handleClosingTag(s, records, stack, token)
        else:
            handleOpeningTag(s, records, stack, token)
    closeUnclosedTags(s, records, stack)
    return records


def handleOpeningTag(s: Stream, records: list[ShortcodeRecord], stack: TagStack, token: Token) -> None:
    normalizedTag = kebabCase(token.name)
    attrs = parseAttributes(token.rawAttributes, loc=token.loc)
    selfClosing = (
        token.kind is TokenKind.SelfClosing
        or s.config.isSelfClosingTag(token.name, normalizedTag)
        or (s.config.selfCloseEmpty and not attrs)
    )
    record = ShortcodeRecord(
        tag=token.name,
        normalizedTag=normalizedTag,
        rawText=token.raw,
        rewrittenText="",
        selfClosing=selfClosing,
        position=token.position,
        nestingLevel=len(stack),
        attributes=attrs,
        loc=token.loc,
    )
    record.rewrittenText = startTagStrFromRecord(record, s.config)
    if not selfClosing:
        stack.push(len(records))
    records.append(record)


def handleClosingTag(s: Stream, records: list[ShortcodeRecord], stack: TagStack, token: Token) -> None:
    if not stack:
        m.lint(f"Saw a closing tag {token.raw}, but there's no open shortcode for it; leaving it alone.", lineNum=token.loc)
        return
    record = records[stack.pop()]
    normalizedTag = kebabCase(token.name)
    if normalizedTag != record.normalizedTag:
        m.lint(
            f"Saw a closing tag {token.raw}, but the innermost open shortcode is [{record.tag}] (at {record.loc}); closing that one.",
            lineNum=token.loc,
        )
    record.closingTag = ClosingTag(
        tag=token.name,
        rawText=token.raw,
        rewrittenText=endTagStr(s.config.componentName(normalizedTag)),
        position=token.position,
        attributes=parseAttributes(token.rawAttributes, loc=token.loc),
    )


def closeUnclosedTags(s: Stream, records: list[ShortcodeRecord], stack: TagStack) -> None:
    if stack:
        m.lint(
            f"Reached the end of the text with unclosed shortcodes; closing them there.\nOpen tags: {', '.join(stack.printOpenTags(records))}",
            lineNum=s.loc(len(s)),
        )
    while stack:
        record = records[stack.pop()]
        if record.selfClosing or record.hasClosingTag:
            continue
        record.closingTag = ClosingTag(
            tag=record.tag,
            rawText=f"[/{record.tag}]",
            rewrittenText=endTagStr(s.config.componentName(record.normalizedTag)),
            position=len(s),
            synthesized=True,
        )
