from __future__ import annotations

import re

from .. import t

if t.TYPE_CHECKING:
    from .nodes import ShortcodeRecord
    from .stream import ParseConfig

# Every capital letter after the first character starts a new word.
WORD_BOUNDARY_RE = re.compile(r"(?<=.)(?=[A-Z])")
CAMEL_SPLIT_RE = re.compile(r"[-_\s]+")


def kebabCase(name: str) -> str:
    # et_pb_section -> et-pb-section, myTag -> my-tag, HTMLBlock -> h-t-m-l-block
    name = name.replace("_", "-")
    name = WORD_BOUNDARY_RE.sub("-", name)
    return name.lower()


def camelCase(name: str) -> str:
    # data-id -> dataId, link_target -> linkTarget.
    # Only the first letter of each piece changes case.
    pieces = [x for x in CAMEL_SPLIT_RE.split(name) if x]
    if not pieces:
        return name
    first, rest = pieces[0], pieces[1:]
    return first[:1].lower() + first[1:] + "".join(x[:1].upper() + x[1:] for x in rest)


def escapeAttr(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def attributeString(attrs: t.AttrMapT) -> str:
    return " ".join(f'{camelCase(k)}="{escapeAttr(v)}"' for k, v in attrs.items())


def startTagStr(componentName: str, attrs: t.AttrMapT, selfClosing: bool = False) -> str:
    s = f"<{componentName}"
    attrStr = attributeString(attrs)
    if attrStr:
        s += " " + attrStr
    if selfClosing:
        s += " />"
    else:
        s += ">"
    return s


def endTagStr(componentName: str) -> str:
    return f"</{componentName}>"


def startTagStrFromRecord(record: ShortcodeRecord, config: ParseConfig) -> str:
    return startTagStr(config.componentName(record.normalizedTag), record.attributes, record.selfClosing)


def closingTagTable(records: t.Iterable[ShortcodeRecord]) -> t.ClosingTableT:
    # Closing tags carry no attributes, so every [/foo] rewrites the same way;
    # the first one seen wins.
    table: t.ClosingTableT = {}
    for record in records:
        if record.closingTag is None:
            continue
        table.setdefault(record.closingTag.rawText, record.closingTag.rewrittenText)
    return table
