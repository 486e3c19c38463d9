from __future__ import annotations

import json

from . import t
from . import messages as m


def printjson(x: t.Any, indent: str | int = 2, level: int = 0) -> str:
    """
    Pretty-prints tokens, records and closing tables for `shortcoder debug`.
    Anything with a __json__() method is printed as what that returns.
    """
    if isinstance(indent, int):
        indent = " " * indent
    x = getjson(x)
    if isinstance(x, dict) and x:
        return "\n".join(recordLines(x, indent, level))
    if isRecordList(x):
        rule = (indent * level) + m.printColor("=" * 10, "blue")
        return f"\n{rule}\n".join(printjson(v, indent, level) for v in x)
    if isinstance(x, dict):
        return m.printColor("{}", "blue")
    if isinstance(x, list):
        items = m.printColor(", ", "blue").join(printScalar(v) for v in x)
        return m.printColor("[", "blue") + items + m.printColor("]", "blue")
    return printScalar(x)


def getjson(x: t.Any) -> t.Any:
    try:
        return x.__json__()
    except AttributeError:
        return x


def dumpjson(x: t.Any) -> str:
    return json.dumps(x, indent=2, ensure_ascii=False, default=getjson)


def isRecordList(x: t.Any) -> bool:
    return isinstance(x, list) and any(isinstance(getjson(v), dict) for v in x)


def recordLines(x: dict[str, t.Any], indent: str, level: int) -> list[str]:
    width = max(len(k) for k in x) + 2
    lines = []
    for k, v in x.items():
        key = (indent * level) + m.printColor((k + ": ").ljust(width), "cyan")
        v = getjson(v)
        if (isinstance(v, dict) and v) or isRecordList(v):
            # Nested records start on their own line, one level in.
            lines.append(key)
            lines.append(printjson(v, indent, level + 1))
        else:
            lines.append(key + printjson(v, indent, level + 1))
    return lines


def printScalar(x: t.Any) -> str:
    x = getjson(x)
    if isinstance(x, bool):
        return "true" if x else "false"
    if isinstance(x, int):
        return str(x)
    if isinstance(x, str):
        # Shortcode text is mostly about its exact characters, so show them quoted.
        return json.dumps(x, ensure_ascii=False)
    if x is None:
        return "null"
    msg = f"Could not print value: {x}"
    raise ValueError(msg)
