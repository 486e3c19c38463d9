from __future__ import annotations

from .. import t
from .. import messages as m
from .scanner import scanTokens
from .serializer import closingTagTable
from .stream import DEFAULT_PARSE_CONFIG, ParseConfig, Stream, decodeBytes
from .treebuilder import buildRecords

if t.TYPE_CHECKING:
    from .nodes import ShortcodeRecord, Token


def parse(content: str | bytes, config: ParseConfig | None = None, context: str | None = None) -> str:
    """
    Converts every [shortcode] in the content into an <x-component>,
    returning the rewritten text.
    Text without any shortcodes comes back untouched.
    """
    text = textFromContent(content)
    if not text or "[" not in text:
        return text
    if config is None:
        config = DEFAULT_PARSE_CONFIG
    s = Stream(text, config=config, context=context)
    with m.messageScope():
        records = buildRecords(s)
    if config.substitution == "replace":
        return substituteByReplace(text, records)
    return substituteByOffsets(text, records)


convert = parse


def parseShortcodes(content: str | bytes, config: ParseConfig | None = None, context: str | None = None) -> list[ShortcodeRecord]:
    s = Stream(textFromContent(content), config=config, context=context)
    with m.messageScope():
        return buildRecords(s)


def tokensFromContent(content: str | bytes, context: str | None = None) -> list[Token]:
    return list(scanTokens(Stream(textFromContent(content), context=context)))


def textFromContent(content: str | bytes) -> str:
    if isinstance(content, bytes):
        return decodeBytes(content)
    return content


def substituteByOffsets(text: str, records: list[ShortcodeRecord]) -> str:
    # (start, end, replacement); synthesized closing tags are zero-width at the end of the text.
    edits: list[tuple[int, int, str]] = []
    synthesized: list[tuple[int, int, str]] = []
    for record in records:
        edits.append((record.position, record.end, record.rewrittenText))
        closing = record.closingTag
        if closing is None:
            continue
        if closing.synthesized:
            synthesized.append((closing.position, closing.end, closing.rewrittenText))
        else:
            edits.append((closing.position, closing.end, closing.rewrittenText))
    edits.sort(key=lambda x: x[0])
    # Unclosed tags get closed innermost-first, and inner tags come later in the list.
    edits.extend(reversed(synthesized))

    chunks = []
    cursor = 0
    for start, end, replacement in edits:
        chunks.append(text[cursor:start])
        chunks.append(replacement)
        cursor = end
    chunks.append(text[cursor:])
    return "".join(chunks)


def substituteByReplace(text: str, records: list[ShortcodeRecord]) -> str:
    # Plain global string replacement, kept for output compatibility.
    # Every occurrence of a raw tag's text gets rewritten, including
    # stray closing tags that happen to match a paired one elsewhere.
    for record in records:
        text = text.replace(record.rawText, record.rewrittenText)
    for raw, rewritten in closingTagTable(records).items():
        text = text.replace(raw, rewritten)
    unclosed = [r.closingTag for r in records if r.closingTag is not None and r.closingTag.synthesized]
    for closing in reversed(unclosed):
        text += closing.rewrittenText
    return text
