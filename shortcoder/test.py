from __future__ import annotations

import dataclasses
import difflib
import io
import os

from alive_progress import alive_it

from . import config, t
from . import messages as m
from .parser import ParseConfig, parse

if t.TYPE_CHECKING:
    import argparse

TEST_DIR = os.path.abspath(os.path.join(config.scriptPath(), "..", "tests"))
TEST_FILE_EXTENSIONS = (".sc",)


@dataclasses.dataclass
class TestFilter:
    folders: list[str] | None = None
    files: list[str] | None = None

    @staticmethod
    def fromOptions(options: argparse.Namespace) -> TestFilter:
        return TestFilter(folders=options.folders, files=options.files)


def testPaths(filters: TestFilter) -> list[str]:
    return sorted(findTestFiles(filters), key=lambda x: ("/" in testNameForPath(x), x))


def findTestFiles(filters: TestFilter) -> t.Generator[str, None, None]:
    for root, _, filenames in os.walk(TEST_DIR):
        for filename in filenames:
            fullPath = os.path.join(root, filename)
            if not allowedPath(testNameForPath(fullPath), filters):
                continue
            yield fullPath


def allowedPath(filePath: str, filters: TestFilter) -> bool:
    extension = os.path.splitext(filePath)[1]
    pathSegs = splitPath(filePath)
    fileName = pathSegs[-1]

    if extension not in TEST_FILE_EXTENSIONS:
        return False

    if filters.folders and not any(folder in pathSegs[:-1] for folder in filters.folders):
        return False

    if filters.files and not any(fileSubstring in fileName for fileSubstring in filters.files):  # noqa: SIM103
        return False

    return True


def splitPath(path: str) -> list[str]:
    [head, tail] = os.path.split(path)
    if head in ["", "/"]:
        return [tail]
    return splitPath(head) + [tail]


# The test name will be the path relative to the tests directory,
# or the path as given if the test is outside of that directory.
def testNameForPath(path: str) -> str:
    if path.startswith(TEST_DIR):
        return path[len(TEST_DIR) + 1 :]
    return path


def configForTest(path: str) -> ParseConfig:
    # A test can carry its own settings in a sibling NAME.kdl file.
    configPath = replaceExtension(path, ".kdl")
    if os.path.exists(configPath):
        return ParseConfig.fromPath(configPath)
    return ParseConfig()


def processTest(path: str) -> tuple[str, str]:
    # Returns the converted text and the console output produced along the way.
    with open(path, encoding="utf-8", newline="") as fh:
        source = fh.read()
    consoleFh = io.StringIO()
    with m.withMessageState(fh=consoleFh, printMode="plain", dieOn="nothing"):
        output = parse(source, configForTest(path), context=testNameForPath(path))
    return output, consoleFh.getvalue()


def run(filters: TestFilter) -> bool:
    paths = testPaths(filters)
    if len(paths) == 0:
        m.p("No tests were found")
        return True
    numPassed = 0
    total = 0
    fails = []
    pathProgress = alive_it(paths, dual_line=True, length=20)
    for path in pathProgress:
        testName = testNameForPath(path)
        pathProgress.text(testName)
        total += 1
        testOutput, testConsole = processTest(path)
        goldenOutput = readGolden(replaceExtension(path, ".html"))
        goldenConsole = readGolden(replaceExtension(path, ".console.txt"))
        if compare(testOutput, goldenOutput, path=path) and compare(testConsole, goldenConsole, path=path):
            numPassed += 1
        else:
            fails.append(testName)
    if numPassed == total:
        m.p(m.printColor("✔ All tests passed.", color="green"))
        return True
    m.p(m.printColor(f"✘ {numPassed}/{total} tests passed.", color="red"))
    m.p(m.printColor("Failed Tests:", color="red"))
    for fail in fails:
        m.p("* " + fail)
    return False


def rebase(filters: TestFilter) -> bool:
    paths = testPaths(filters)
    if len(paths) == 0:
        m.p("No tests were found.")
        return True
    pathProgress = alive_it(paths, dual_line=True, length=20)
    for path in pathProgress:
        pathProgress.text(testNameForPath(path))
        testOutput, testConsole = processTest(path)
        writeGolden(replaceExtension(path, ".html"), testOutput)
        writeGolden(replaceExtension(path, ".console.txt"), testConsole)
    return True


def readGolden(path: str) -> str:
    try:
        with open(path, encoding="utf-8", newline="") as golden:
            return golden.read()
    except FileNotFoundError:
        return ""


def writeGolden(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as golden:
        golden.write(text)


def compare(suspect: str, golden: str, path: str) -> bool:
    if suspect == golden:
        return True
    m.p(f"FILE: {path}")
    for line in difflib.unified_diff(golden.split("\n"), suspect.split("\n"), fromfile="golden", tofile="suspect"):
        if line[0] == "-":
            m.p(m.printColor(line, color="red"))
        elif line[0] == "+":
            m.p(m.printColor(line, color="green"))
        else:
            m.p(line)
    m.p("")
    return False


def replaceExtension(path: str, newExt: str) -> str:
    assert newExt[0] == "."
    trunk = os.path.splitext(path)[0]
    return f"{trunk}{newExt}"
