from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .. import t


class TokenKind(Enum):
    Opening = "opening"
    Closing = "closing"
    SelfClosing = "self-closing"


@dataclass
class Token:
    raw: str
    position: int
    kind: TokenKind
    name: str
    rawAttributes: str
    loc: str = ""

    @property
    def end(self) -> int:
        return self.position + len(self.raw)

    def __json__(self) -> t.JSONT:
        return {
            "raw": self.raw,
            "position": self.position,
            "kind": self.kind.value,
            "name": self.name,
            "rawAttributes": self.rawAttributes,
        }


@dataclass
class ClosingTag:
    tag: str
    rawText: str
    rewrittenText: str
    position: int
    attributes: t.AttrMapT = field(default_factory=dict)
    # Made up at end-of-input rather than found in the source.
    synthesized: bool = False

    @property
    def end(self) -> int:
        if self.synthesized:
            return self.position
        return self.position + len(self.rawText)

    def __json__(self) -> t.JSONT:
        return {
            "tag": self.tag,
            "rawText": self.rawText,
            "rewrittenText": self.rewrittenText,
            "position": self.position,
            "attributes": self.attributes,
            "synthesized": self.synthesized,
        }


@dataclass
class ShortcodeRecord:
    tag: str
    normalizedTag: str
    rawText: str
    rewrittenText: str
    selfClosing: bool
    position: int
    nestingLevel: int
    attributes: t.AttrMapT = field(default_factory=dict)
    closingTag: ClosingTag | None = None
    loc: str = ""

    @property
    def hasClosingTag(self) -> bool:
        return self.closingTag is not None

    @property
    def end(self) -> int:
        return self.position + len(self.rawText)

    def __json__(self) -> t.JSONT:
        return {
            "tag": self.tag,
            "normalizedTag": self.normalizedTag,
            "rawText": self.rawText,
            "rewrittenText": self.rewrittenText,
            "selfClosing": self.selfClosing,
            "position": self.position,
            "nestingLevel": self.nestingLevel,
            "attributes": self.attributes,
            "hasClosingTag": self.hasClosingTag,
            "closingTag": self.closingTag,
        }


@dataclass
class TagStack:
    # Indexes into the record list, innermost last.
    indexes: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.indexes)

    def __bool__(self) -> bool:
        return bool(self.indexes)

    def push(self, index: int) -> None:
        self.indexes.append(index)

    def pop(self) -> int:
        return self.indexes.pop()

    def printOpenTags(self, records: list[ShortcodeRecord]) -> list[str]:
        return [f"[{records[i].tag}] at {records[i].loc}" for i in self.indexes]
