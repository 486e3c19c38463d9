# pylint: skip-file
# Module for holding types, for easy importing into the rest of the codebase
from __future__ import annotations

import sys

# The only things that should be available during runtime.
from typing import TYPE_CHECKING, Generic, TypeVar, cast, overload

# Only available in 3.11, so stub them out for earlier versions
if sys.version_info >= (3, 11):
    from typing import assert_never, assert_type
else:
    from typing_extensions import assert_never, assert_type


if TYPE_CHECKING:
    from typing import (
        Any,
        Callable,
        Generator,
        Iterable,
        Iterator,
        Literal,
        Mapping,
        Sequence,
        TextIO,
        TypeAlias,
    )

    from typing_extensions import (
        Self,
        TypeIs,
    )

    # Ordered name -> value mapping parsed out of a shortcode's attribute text.
    AttrMapT: TypeAlias = dict[str, str]

    # Raw closing-tag text -> rewritten closing-tag text.
    ClosingTableT: TypeAlias = dict[str, str]

    JSONT: TypeAlias = dict[str, Any]

    from .parser.nodes import ClosingTag, ShortcodeRecord, Token
    from .parser.stream import ParseConfig
