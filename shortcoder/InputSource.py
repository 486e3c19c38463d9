from __future__ import annotations

import datetime
import email.utils
import errno
import os
import sys
from abc import abstractmethod

import attr
import requests
import tenacity

from .parser import decodeBytes


@attr.s(auto_attribs=True)
class InputContent:
    text: str
    # When the source was last changed, if known.
    date: datetime.date | None = None


def inputFromName(sourceName: str) -> InputSource:
    if sourceName == "-":
        return StdinInputSource(sourceName)
    if sourceName.startswith("https:"):
        return UrlInputSource(sourceName)
    return FileInputSource(sourceName)


class InputSource:
    """Represents a thing that can produce shortcode-laden input text.

    Input can be read from stdin ("-"), an HTTPS URL, or a file.
    """

    type: str
    sourceName: str

    @abstractmethod
    def __str__(self) -> str:
        pass

    def __repr__(self) -> str:
        return "{}({!r})".format(self.__class__.__name__, str(self))

    def __hash__(self) -> int:
        return hash(str(self))

    def __eq__(self, other: object) -> bool:
        return str(self) == str(other)

    @abstractmethod
    def read(self) -> InputContent:
        """Fully reads the source."""

    def defaultOutputName(self) -> str:
        """Where output goes when the caller didn't say. "-" is stdout."""
        return "-"


class StdinInputSource(InputSource):
    def __init__(self, sourceName: str) -> None:
        assert sourceName == "-"
        self.type = "stdin"
        self.sourceName = sourceName

    def __str__(self) -> str:
        return "-"

    def read(self) -> InputContent:
        return InputContent(decodeBytes(sys.stdin.buffer.read()), None)


class UrlInputSource(InputSource):
    def __init__(self, sourceName: str) -> None:
        assert sourceName.startswith("https:")
        self.sourceName = sourceName
        self.type = "url"

    def __str__(self) -> str:
        return self.sourceName

    @tenacity.retry(
        reraise=True,
        stop=tenacity.stop_after_attempt(3),
        wait=tenacity.wait_random(1, 2),
        retry=tenacity.retry_if_not_exception_type(FileNotFoundError),
    )
    def _fetch(self) -> requests.Response:
        response = requests.get(self.sourceName, timeout=10)
        if response.status_code == 404:
            # A concrete, expected answer; don't bother retrying.
            raise FileNotFoundError(errno.ENOENT, response.text, self.sourceName)
        response.raise_for_status()
        return response

    def read(self) -> InputContent:
        response = self._fetch()
        date = None
        if "Date" in response.headers:
            date = email.utils.parsedate_to_datetime(response.headers["Date"]).date()
        return InputContent(response.text, date)


class FileInputSource(InputSource):
    def __init__(self, sourceName: str) -> None:
        self.sourceName = sourceName
        self.type = "file"

    def __str__(self) -> str:
        return self.sourceName

    def read(self) -> InputContent:
        # surrogateescape keeps stray non-UTF-8 bytes intact for the round trip;
        # attribute values get re-decoded by the parser.
        with open(self.sourceName, encoding="utf-8", errors="surrogateescape", newline="") as f:
            return InputContent(
                f.read(),
                datetime.datetime.fromtimestamp(os.path.getmtime(self.sourceName)).date(),
            )

    def defaultOutputName(self) -> str:
        trunk, ext = os.path.splitext(self.sourceName)
        if ext == ".html":
            return trunk + ".converted.html"
        return trunk + ".html"


def writeOutput(outputName: str, text: str) -> None:
    if outputName == "-":
        sys.stdout.buffer.write(text.encode("utf-8", "surrogateescape"))
        sys.stdout.flush()
        return
    with open(outputName, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(text)
