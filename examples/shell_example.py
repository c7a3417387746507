#!/usr/bin/env python
import shlex

from prompt_toolkit import PromptSession
from rich.markup import escape

from declarg.completer import SpecCompleter
from declarg.config import load_spec
from declarg.console import console
from declarg.exceptions import ParseError
from declarg.parser import parse_command
from declarg.parser.help import render_help
from declarg.signals import HelpSignal
from declarg.utils import setup_logging

# Setup logging
setup_logging()

spec = load_spec("declarg.yaml")
session = PromptSession("deploy> ", completer=SpecCompleter(spec))

while True:
    try:
        line = session.prompt()
    except (EOFError, KeyboardInterrupt):
        break
    try:
        console.print(parse_command(spec, shlex.split(line)))
    except HelpSignal as signal:
        render_help(signal.spec, signal.command_path)
    except ParseError as error:
        console.print(f"[error]{error.command_path}:[/error] {escape(error.message)}")
