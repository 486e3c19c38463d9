from __future__ import annotations

import contextlib
import dataclasses
import io
import json
import sys
from collections import Counter

from . import t

MESSAGE_LEVELS = {
    "everything": 0,
    "message": 1,
    "lint": 2,
    "warning": 3,
    "fatal": 4,
    "nothing": 5,
}

DEATH_TIMING = [
    "early",  # die as soon as the first disallowed error occurs
    "late",  # die at the end of processing
]

PRINT_MODES = [
    "plain",
    "console",
    "markup",
    "json",
]


@dataclasses.dataclass()
class MessagesState:
    # What message category (or higher) to stop processing on
    dieOn: str = "fatal"
    # When to stop processing when an error that trips failure happens
    dieWhen: str = "late"
    # What message category (or higher) to print
    printOn: str = "everything"
    # Suppress *all* categories, *plus* the final success/fail message
    silent: bool = False
    printMode: str = "console"
    asciiOnly: bool = False
    fh: t.TextIO = t.cast("t.TextIO", sys.stderr)  # noqa: RUF009
    seenMessages: set[str | tuple[str, str]] = dataclasses.field(default_factory=set)
    categoryCounts: Counter[str] = dataclasses.field(default_factory=Counter)

    def record(self, category: str, message: str | tuple[str, str]) -> None:
        self.categoryCounts[category] += 1
        self.seenMessages.add(message)

    def replace(self, **kwargs: t.Any) -> MessagesState:
        return dataclasses.replace(self, seenMessages=set(), categoryCounts=Counter(), **kwargs)

    def shouldDie(self, category: str, timing: str = "early") -> bool:
        if self.dieWhen == "never":
            return False
        if self.dieWhen == "late" and timing == "early":
            return False
        deathLevel = MESSAGE_LEVELS[self.dieOn]
        queriedLevel = MESSAGE_LEVELS[category]
        return queriedLevel >= deathLevel

    def shouldPrint(self, category: str) -> bool:
        if self.silent:
            return False
        if category in ("success", "failure"):
            return True
        printLevel = MESSAGE_LEVELS[self.printOn]
        queriedLevel = MESSAGE_LEVELS[category]
        return queriedLevel >= printLevel

    @staticmethod
    def categoryName(categoryNum: int) -> str:
        assert categoryNum >= 0
        if categoryNum >= len(MESSAGE_LEVELS):
            return "nothing"
        return list(MESSAGE_LEVELS.keys())[categoryNum]


state = MessagesState()


def p(msg: str | tuple[str, str], sep: str | None = None, end: str | None = None) -> None:
    if isinstance(msg, tuple):
        msg, ascii = msg
    else:
        ascii = msg.encode("ascii", "replace").decode()
    if state.asciiOnly:
        msg = ascii
    try:
        print(msg, sep=sep, end=end, file=state.fh)
    except UnicodeEncodeError:
        print(ascii, sep=sep, end=end, file=state.fh)


def _report(category: str, heading: str, msg: str, lineNum: str | int | None) -> None:
    formattedMsg = formatMessage(heading, msg, lineNum=lineNum)
    if formattedMsg in state.seenMessages:
        return
    state.record(category, formattedMsg)
    if state.shouldPrint(category):
        p(formattedMsg)
    if state.shouldDie(category):
        errorAndExit()


def die(msg: str, lineNum: str | int | None = None) -> None:
    _report("fatal", "fatal", msg, lineNum)


def lint(msg: str, lineNum: str | int | None = None) -> None:
    _report("lint", "lint", msg, lineNum)


def warn(msg: str, lineNum: str | int | None = None) -> None:
    _report("warning", "warning", msg, lineNum)


def say(msg: str) -> None:
    if state.shouldPrint("message"):
        p(formatMessage("message", msg))


def success(msg: str) -> None:
    if state.shouldPrint("success"):
        p(formatMessage("success", msg))


def failure(msg: str) -> None:
    if state.shouldPrint("failure"):
        p(formatMessage("failure", msg))


def retroactivelyCheckErrorLevel(timing: str = "late") -> bool:
    for levelName, msgCount in state.categoryCounts.items():
        if msgCount > 0 and state.shouldDie(levelName, timing):
            errorAndExit()
    return True


def printColor(text: str, color: str = "white", *styles: str) -> str:
    if state.printMode == "console":
        colorsConverter = {
            "black": 30,
            "red": 31,
            "green": 32,
            "yellow": 33,
            "blue": 34,
            "magenta": 35,
            "cyan": 36,
            "light gray": 37,
            "dark gray": 90,
            "light red": 91,
            "light green": 92,
            "light yellow": 93,
            "light blue": 94,
            "light magenta": 95,
            "light cyan": 96,
            "white": 97,
        }
        stylesConverter = {
            "normal": 0,
            "bold": 1,
            "dim": 2,
            "underline": 4,
            "invert": 7,
        }

        colorNum = colorsConverter[color.lower()]
        styleNum = ";".join(str(stylesConverter[style.lower()]) for style in styles)
        return f"\033[{styleNum};{colorNum}m{text}\033[0m"
    return text


def formatMessage(type: str, text: str, lineNum: str | int | None = None) -> str | tuple[str, str]:
    if state.printMode == "markup":
        text = text.replace("<", "&lt;")
        tagName = {
            "fatal": "fatal",
            "lint": "lint",
            "warning": "warning",
            "message": "message",
            "success": "final-success",
            "failure": "final-failure",
        }[type]
        if lineNum is not None:
            return f'<{tagName} line="{lineNum}">{text}</{tagName}>'
        return f"<{tagName}>{text}</{tagName}>"
    elif state.printMode == "json":
        # One JSON object per line, so the stream can be consumed incrementally.
        return json.dumps({"lineNum": lineNum, "messageType": type, "text": text})

    if type == "message":
        return text
    if type == "success":
        return (
            printColor(" ✔ ", "green", "invert") + " " + text,
            printColor("YAY", "green", "invert") + " " + text,
        )
    if type == "failure":
        return (
            printColor(" ✘ ", "red", "invert") + " " + text,
            printColor("ERR", "red", "invert") + " " + text,
        )
    if type == "fatal":
        headingText = "FATAL ERROR"
        color = "red"
    elif type == "lint":
        headingText = "LINT"
        color = "yellow"
    else:
        headingText = "WARNING"
        color = "light cyan"
    if lineNum is not None:
        headingText = f"{headingText} (LINE {lineNum})"
    return printColor(headingText + ":", color, "bold") + " " + text


def errorAndExit() -> None:
    failure("Did not convert, due to errors exceeding the allowed error level.")
    sys.exit(2)


@contextlib.contextmanager
def withMessageState(
    fh: str | t.TextIO,
    **kwargs: t.Any,
) -> t.Generator[t.TextIO, None, None]:
    if isinstance(fh, str):
        fhIsTemporary = True
        fh = open(fh, "w", encoding="utf-8")  # noqa: SIM115
    else:
        fhIsTemporary = False
    global state
    oldState = state
    state = oldState.replace(fh=fh, **kwargs)
    try:
        yield fh
    finally:
        state = oldState
        if fhIsTemporary:
            fh.close()


@contextlib.contextmanager
def messagesSilent() -> t.Generator[t.TextIO, None, None]:
    fh = io.StringIO()
    global state
    oldState = state
    state = oldState.replace(fh=fh, silent=True)
    try:
        yield fh
    finally:
        state = oldState


@contextlib.contextmanager
def messageScope() -> t.Generator[None, None, None]:
    # Repeats are only collapsed inside the scope, and what it saw is dropped on exit.
    # Category counts keep accumulating, so late death still sees them.
    scopeState = state
    oldSeen = scopeState.seenMessages
    scopeState.seenMessages = set()
    try:
        yield
    finally:
        scopeState.seenMessages = oldSeen
