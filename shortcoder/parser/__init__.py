from .attributes import (
    parseAttributes,
    stripWrappingCharacters,
)
from .main import (
    convert,
    parse,
    parseShortcodes,
    substituteByOffsets,
    substituteByReplace,
    textFromContent,
    tokensFromContent,
)
from .nodes import (
    ClosingTag,
    ShortcodeRecord,
    TagStack,
    Token,
    TokenKind,
)
from .serializer import (
    camelCase,
    closingTagTable,
    escapeAttr,
    kebabCase,
)
from .stream import (
    DEFAULT_PARSE_CONFIG,
    SUBSTITUTION_MODES,
    ParseConfig,
    Stream,
    decodeBytes,
)
from .treebuilder import buildRecords
