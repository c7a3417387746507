# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `SpecCompleter`, a Prompt Toolkit completer driven by a `CommandSpec`.

It lets an interactive prompt offer the same subcommand names and flags that the
parser accepts, following the typed tokens down the subcommand tree with
`suggest_next()`.
"""
from __future__ import annotations

import os
import shlex
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from declarg.parser.completions import suggest_next
from declarg.parser.descriptors import CommandSpec


class SpecCompleter(Completer):
    """
    Prompt Toolkit completer for command lines described by a `CommandSpec`.

    Args:
        spec (CommandSpec): Root command description.
    """

    def __init__(self, spec: CommandSpec):
        self.spec = spec

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """
        Compute completions for the current user input.

        Args:
            document (Document): The current Prompt Toolkit document (input buffer & cursor).
            complete_event: The triggering event (TAB key, menu display, etc.), unused.

        Yields:
            Completion: One or more completions matching the current stub text.
        """
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = not text or text.endswith((" ", "\t"))

        complete_tokens = tokens if cursor_at_end_of_token else tokens[:-1]
        stub = "" if cursor_at_end_of_token else tokens[-1]
        suggestions = suggest_next(self.spec, complete_tokens, stub)
        yield from self._yield_lcp_completions(suggestions, stub)

    def _ensure_quote(self, text: str) -> str:
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(self, suggestions: list[str], stub: str):
        """
        Yield completions for the current stub using longest-common-prefix logic.

        A single match is inserted fully. Several matches sharing a prefix longer than
        the stub insert that prefix first, then list every match.
        """
        matches = [suggestion for suggestion in suggestions if suggestion.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)
        if len(matches) > 1 and len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
        for match in matches:
            yield Completion(
                self._ensure_quote(match), start_position=-len(stub), display=match
            )
