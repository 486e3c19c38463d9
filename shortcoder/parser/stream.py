from __future__ import annotations

import bisect
import dataclasses
from dataclasses import dataclass, field

import kdl

from .. import config, t
from .. import messages as m

ResultValT = t.TypeVar("ResultValT")
OkT: t.TypeAlias = "tuple[ResultValT, int, t.Literal[False]]"
ErrT: t.TypeAlias = "tuple[None, int, t.Literal[True]]"
ResultT: t.TypeAlias = "OkT[ResultValT] | ErrT"


def Ok(val: ResultValT, index: int) -> OkT[ResultValT]:
    return (val, index, False)


def Err(index: int) -> ErrT:
    return (None, index, True)


SUBSTITUTION_MODES = ("offsets", "replace")

# Tried in order; latin-1 accepts any byte sequence, so decoding always lands somewhere.
FALLBACK_ENCODINGS = ("utf-8", "cp1252", "latin-1")


def decodeBytes(data: bytes) -> str:
    if data.startswith(b"\xef\xbb\xbf"):
        data = data[3:]
    for encoding in FALLBACK_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", "replace")


def boolFromKdl(val: t.Any) -> bool:
    if isinstance(val, str):
        return val.strip().lower() in ("yes", "true", "on", "1")
    return bool(val)


@dataclass
class ParseConfig:
    prefix: str = "x-"
    # Tag names (as written, or normalized) that never take a closing tag.
    selfClosingTags: set[str] = field(default_factory=set)
    # Attribute-less tags are treated as self-closing.
    selfCloseEmpty: bool = False
    # Normalized tag name -> component name to emit instead.
    renames: dict[str, str] = field(default_factory=dict)
    substitution: str = "offsets"

    def isSelfClosingTag(self, tag: str, normalizedTag: str) -> bool:
        return tag in self.selfClosingTags or normalizedTag in self.selfClosingTags

    def componentName(self, normalizedTag: str) -> str:
        return self.prefix + self.renames.get(normalizedTag, normalizedTag)

    @staticmethod
    def fromKdlStr(data: str, source: str = "config") -> ParseConfig:
        self = ParseConfig()
        try:
            kdlDoc = kdl.parse(data)
        except kdl.errors.ParseError as e:
            m.die(f"Couldn't parse the {source} file as KDL:\n{e}")
            return self

        for node in kdlDoc.nodes:
            if node.name == "prefix":
                self.prefix = str(node.args[0]) if node.args else ""
            elif node.name == "self-close-empty":
                # A bare node means "yes".
                self.selfCloseEmpty = boolFromKdl(node.args[0]) if node.args else True
            elif node.name == "self-closing":
                self.selfClosingTags.update(str(x) for x in node.args)
            elif node.name == "rename":
                if len(node.args) != 2:
                    m.warn(f"The 'rename' node in {source} needs exactly two arguments, got {len(node.args)}.")
                    continue
                self.renames[str(node.args[0])] = str(node.args[1])
            elif node.name == "substitution":
                mode = str(node.args[0]) if node.args else ""
                if mode not in SUBSTITUTION_MODES:
                    modes = config.englishFromList(f"'{x}'" for x in SUBSTITUTION_MODES)
                    m.warn(f"Unknown substitution mode '{mode}' in {source}; expected {modes}.")
                    continue
                self.substitution = mode
            else:
                m.warn(f"Unknown node '{node.name}' in {source}; ignoring it.")
        return self

    @staticmethod
    def fromPath(path: str) -> ParseConfig:
        try:
            with open(path, encoding="utf-8") as fh:
                data = fh.read()
        except OSError as e:
            m.die(f"Couldn't read the config file '{path}':\n{e}")
            return ParseConfig()
        return ParseConfig.fromKdlStr(data, source=path)

    def replace(self, **kwargs: t.Any) -> ParseConfig:
        return dataclasses.replace(self, **kwargs)


DEFAULT_PARSE_CONFIG = ParseConfig()


@dataclass
class Stream:
    _chars: str
    _len: int
    _lineBreaks: list[int]
    config: ParseConfig
    context: str | None = None

    def __init__(self, chars: str, config: ParseConfig | None = None, context: str | None = None) -> None:
        self._chars = chars
        self._len = len(chars)
        self._lineBreaks = [i for i, char in enumerate(chars) if char == "\n"]
        self.config = config if config is not None else DEFAULT_PARSE_CONFIG
        self.context = context

    def __getitem__(self, key: int) -> str:
        if key < 0 or key >= self._len:
            return ""
        return self._chars[key]

    def __len__(self) -> int:
        return self._len

    def slice(self, start: int | None, stop: int | None) -> str:
        if start is not None and start < 0:
            start = 0
        if stop is not None and stop < 0:
            stop = 0
        return self._chars[start:stop]

    def eof(self, index: int) -> bool:
        return index >= self._len

    @property
    def text(self) -> str:
        return self._chars

    def line(self, index: int) -> int:
        return bisect.bisect_left(self._lineBreaks, index) + 1

    def col(self, index: int) -> int:
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        if lineIndex == 0:
            return index + 1
        startOfCol = self._lineBreaks[lineIndex - 1]
        return index - startOfCol

    def loc(self, index: int) -> str:
        rc = f"{self.line(index)}:{self.col(index)}"
        if self.context is None:
            return rc
        return f"{rc} of {self.context}"

    def skipTo(self, start: int, char: str) -> ResultT[str]:
        # Produces the text before the next `char`, and the index of `char`.
        i = self._chars.find(char, start)
        if i == -1:
            return Err(start)
        return Ok(self.slice(start, i), i)
