from __future__ import annotations

import argparse
import os
import sys

import requests

from . import InputSource, config, printjson
from . import messages as m
from .parser import SUBSTITUTION_MODES, ParseConfig, closingTagTable, parse, parseShortcodes, tokensFromContent


def main(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[1:]
    # Hack around argparse's lack of optional subparsers
    if len(argv) == 0:
        argv = ["convert"]

    try:
        with open(config.scriptPath("semver.txt"), encoding="utf-8") as fh:
            semver = fh.read().strip()
            semverText = f"Shortcoder v{semver}: "
    except FileNotFoundError:
        semver = "???"
        semverText = ""

    argparser = argparse.ArgumentParser(
        prog="shortcoder",
        description=f"{semverText}Converts [shortcodes] into <x-components>.",
    )
    argparser.add_argument("--version", action="version", version=semver)
    argparser.add_argument(
        "-q",
        "--quiet",
        dest="quiet",
        action="count",
        default=0,
        help="Silences one level of message, least-important first.",
    )
    argparser.add_argument(
        "-s",
        "--silent",
        dest="silent",
        action="store_true",
        help="Shorthand for 'as many -q as you need to shut it up'",
    )
    argparser.add_argument(
        "-f",
        "--force",
        dest="errorLevel",
        action="store_const",
        const="nothing",
        help="Force the conversion to run to completion; fatal errors don't stop processing.",
    )
    argparser.add_argument(
        "-a",
        "--ascii-only",
        dest="asciiOnly",
        action="store_true",
        help="Force all messages to be ASCII-only.",
    )
    argparser.add_argument(
        "--print",
        dest="printMode",
        choices=m.PRINT_MODES,
        default=None,
        help="How messages are formatted. Options are 'plain' (just text), 'console' (text with console color codes), 'markup' (XML), and 'json' (one JSON object per line). Defaults to 'console'.",
    )
    argparser.add_argument(
        "--die-on",
        dest="errorLevel",
        choices=list(m.MESSAGE_LEVELS.keys()),
        help="Determines what sorts of messages stop the conversion. Default is 'fatal'; the -f flag is a shorthand for 'nothing'.",
    )
    argparser.add_argument(
        "--die-when",
        dest="errorTiming",
        choices=m.DEATH_TIMING,
        default="late",
        help="'early' stops at the first disallowed message; 'late' converts everything first and only refuses to write the output at the end.",
    )
    argparser.add_argument(
        "--config",
        dest="configPath",
        default=None,
        metavar="PATH",
        help="KDL file with tag overrides (self-closing tags, renames, prefix, substitution mode).",
    )

    subparsers = argparser.add_subparsers(title="Subcommands", dest="subparserName")

    convertParser = subparsers.add_parser("convert", help="Convert a shortcode document into component markup.")
    convertParser.add_argument(
        "infile",
        nargs="?",
        default="-",
        help='Path to the source file: stdin ("-"), an https URL, or a filename.',
    )
    convertParser.add_argument(
        "outfile",
        nargs="?",
        default=None,
        help='Path to the output file: stdout ("-"), or a filename. Defaults to the input name with an .html extension, or stdout.',
    )
    convertParser.add_argument(
        "--substitution",
        dest="substitution",
        choices=SUBSTITUTION_MODES,
        default=None,
        help="'offsets' rewrites each tag in place; 'replace' does global string replacement, matching older converters' output.",
    )

    debugParser = subparsers.add_parser("debug", help="Run various debugging commands.")
    debugParser.add_argument("infile", nargs="?", default="-", help="Path to the source file.")
    debugCommands = debugParser.add_mutually_exclusive_group(required=True)
    debugCommands.add_argument(
        "--print-tokens",
        dest="printTokens",
        action="store_true",
        help="Prints every shortcode token the scanner finds.",
    )
    debugCommands.add_argument(
        "--print-records",
        dest="printRecords",
        action="store_true",
        help="Prints the paired-up shortcode records, with attributes and closing tags.",
    )
    debugCommands.add_argument(
        "--print-table",
        dest="printTable",
        action="store_true",
        help="Prints the closing-tag replacement table.",
    )

    testParser = subparsers.add_parser("test", help="Tools for running the golden-file testsuite.")
    testParser.add_argument(
        "--rebase",
        default=False,
        action="store_true",
        help="Rebase the specified files.",
    )
    testParser.add_argument(
        "--folder",
        dest="folders",
        default=None,
        nargs="+",
        help="Only run tests whose paths contain any of these folder names.",
    )
    testParser.add_argument(
        "--file",
        dest="files",
        default=None,
        nargs="+",
        help="Only run tests whose filenames contain any of these strings as substrings.",
    )

    subparsers.add_parser("template", help="Outputs a skeleton config file for you to start with.")

    options = argparser.parse_args(argv)

    if options.silent:
        m.state.printOn = "nothing"
        m.state.silent = True
    else:
        m.state.printOn = m.MessagesState.categoryName(options.quiet)
    if options.errorLevel is not None:
        m.state.dieOn = options.errorLevel
    m.state.dieWhen = options.errorTiming
    m.state.asciiOnly = options.asciiOnly
    if options.printMode is None:
        if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
            m.state.printMode = "plain"
        else:
            m.state.printMode = "console"
    else:
        m.state.printMode = options.printMode

    if options.subparserName == "convert":
        handleConvert(options)
    elif options.subparserName == "debug":
        handleDebug(options)
    elif options.subparserName == "test":
        handleTest(options)
    elif options.subparserName == "template":
        handleTemplate()


def loadConfig(options: argparse.Namespace) -> ParseConfig:
    if options.configPath is None:
        return ParseConfig()
    return ParseConfig.fromPath(options.configPath)


def readInput(source: InputSource.InputSource) -> InputSource.InputContent | None:
    try:
        return source.read()
    except requests.RequestException as e:
        m.die(f"Couldn't fetch the input '{source}':\n{e}")
    except OSError as e:
        m.die(f"Couldn't read the input '{source}':\n{e}")
    return None


def handleConvert(options: argparse.Namespace) -> None:
    parseConfig = loadConfig(options)
    if options.substitution is not None:
        parseConfig = parseConfig.replace(substitution=options.substitution)
    source = InputSource.inputFromName(options.infile)
    content = readInput(source)
    if content is None:
        m.retroactivelyCheckErrorLevel()
        sys.exit(1)
    if content.date is not None:
        m.say(f"Converting {source} (last changed {content.date.isoformat()}).")
    output = parse(content.text, parseConfig, context=None if options.infile == "-" else options.infile)
    m.retroactivelyCheckErrorLevel()
    outfile = options.outfile if options.outfile is not None else source.defaultOutputName()
    try:
        InputSource.writeOutput(outfile, output)
    except OSError as e:
        m.die(f"Couldn't write the output to '{outfile}':\n{e}")
        return
    if outfile != "-":
        m.success(f"Successfully converted {source} to {outfile}")


def handleDebug(options: argparse.Namespace) -> None:
    parseConfig = loadConfig(options)
    content = readInput(InputSource.inputFromName(options.infile))
    if content is None:
        sys.exit(1)
    # Anomalies show up in the dump itself; keep the console readable.
    with m.messagesSilent():
        if options.printTokens:
            data = tokensFromContent(content.text)
        elif options.printRecords:
            data = parseShortcodes(content.text, parseConfig)
        else:
            data = closingTagTable(parseShortcodes(content.text, parseConfig))
    if m.state.printMode == "json":
        print(printjson.dumpjson(data))  # noqa: T201
    else:
        print(printjson.printjson(data))  # noqa: T201


def handleTest(options: argparse.Namespace) -> None:
    from . import test

    m.state.dieOn = "nothing"
    filters = test.TestFilter.fromOptions(options)
    if options.rebase:
        test.rebase(filters)
    else:
        result = test.run(filters)
        sys.exit(0 if result else 1)


def handleTemplate() -> None:
    print(  # noqa: T201
        """// Prefix put in front of every component name.
prefix "x-"

// Tags that never take a closing tag, written either way.
self-closing "br" "hr" "et_pb_divider"

// Treat attribute-less tags as self-closing too.
// self-close-empty

// Emit <x-section> for [et_pb_section].
rename "et-pb-section" "section"

// "offsets" (default) or "replace".
substitution "offsets"
""",
    )
