# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rule engine contract and the built-in token based engine."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Final, Protocol, runtime_checkable

from pygments.lexers.javascript import JavascriptLexer
from pygments.token import Comment, Keyword, Name, Number, Operator, Punctuation, String, Text, Token, _TokenType

from jsqa.core.models import Diagnostic, LintResult, Span
from jsqa.core.severity import Severity

from .catalog import RuleSet

PARSE_RULE: Final[str] = "parse"


class FatalLintError(Exception):
    """Raised when a file cannot be linted at all.

    The single :attr:`diagnostic` explains the failure and is rendered in
    place of the file's lint result.
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic


@runtime_checkable
class RuleEngine(Protocol):
    """Run a rule set against the source of a single file."""

    def lint_file(
        self,
        file_id: int,
        source: str,
        is_module: bool,
        rule_set: RuleSet,
        verbose: bool,
    ) -> LintResult:
        """Return the diagnostics produced for ``source``.

        Raises:
            FatalLintError: If the file cannot be parsed or linted.
        """
        ...


@dataclass(frozen=True, slots=True)
class JsToken:
    """Significant lexer token with its offset in the source."""

    index: int
    kind: _TokenType
    value: str

    @property
    def end(self) -> int:
        return self.index + len(self.value)

    def is_punct(self, value: str) -> bool:
        return self.kind in Punctuation and self.value == value

    def is_keyword(self, *values: str) -> bool:
        return self.kind in Keyword and self.value in values


RuleCheck = Callable[[Sequence[JsToken], int], list[Diagnostic]]

_COMPARISON_OPERATORS: Final[frozenset[str]] = frozenset({"==", "===", "!=", "!==", "<", ">", "<=", ">="})
_EMPTY_BLOCK_KEYWORDS: Final[frozenset[str]] = frozenset({"else", "try", "finally", "do"})
_CONTROL_KEYWORDS: Final[frozenset[str]] = frozenset({"if", "while", "for", "catch", "switch", "with"})
_MODULE_KEYWORDS: Final[frozenset[str]] = frozenset({"import", "export"})
_OPERAND_CLOSERS: Final[frozenset[str]] = frozenset({")", "]"})


def tokenize(source: str) -> list[JsToken]:
    """Return the significant tokens of ``source``, skipping whitespace.

    Comments are kept so that rules can treat commented blocks as non-empty.

    Raises:
        FatalLintError: Propagated by callers; see :meth:`TokenRuleEngine.lint_file`.
    """

    lexer = JavascriptLexer(stripnl=False, ensurenl=False)
    tokens: list[JsToken] = []
    for index, kind, value in lexer.get_tokens_unprocessed(source):
        if kind in Text or not value.strip():
            continue
        tokens.append(JsToken(index=index, kind=kind, value=value))
    return tokens


def _code_tokens(tokens: Sequence[JsToken]) -> list[JsToken]:
    return [token for token in tokens if token.kind not in Comment]


def _error(file_id: int, rule: str, message: str, token: JsToken, label: str | None = None) -> Diagnostic:
    return Diagnostic(
        severity=Severity.ERROR,
        rule=rule,
        file_id=file_id,
        message=message,
        spans=(Span(start=token.index, end=token.end, label=label),),
    )


def check_no_debugger(tokens: Sequence[JsToken], file_id: int) -> list[Diagnostic]:
    """Flag every ``debugger`` statement."""

    return [
        _error(file_id, "no-debugger", "debugger statements are not allowed", token).with_note(
            "help: remove the debugger statement before shipping"
        )
        for token in _code_tokens(tokens)
        if token.is_keyword("debugger")
    ]


def _is_negative_zero(tokens: Sequence[JsToken], position: int) -> bool:
    if position + 1 >= len(tokens):
        return False
    sign, number = tokens[position], tokens[position + 1]
    if not (sign.kind in Operator and sign.value == "-" and number.kind in Number):
        return False
    try:
        return float(number.value.replace("_", "")) == 0
    except ValueError:
        return False


def _ends_operand(token: JsToken) -> bool:
    if token.kind in Punctuation:
        return token.value in _OPERAND_CLOSERS
    return token.kind in Name or token.kind in Number or token.kind in String or token.kind in Keyword.Constant


def check_no_compare_neg_zero(tokens: Sequence[JsToken], file_id: int) -> list[Diagnostic]:
    """Flag comparisons such as ``x === -0`` which never behave as intended."""

    code = _code_tokens(tokens)
    diagnostics: list[Diagnostic] = []
    for position, token in enumerate(code):
        if not (token.kind in Operator and token.value in _COMPARISON_OPERATORS):
            continue
        right = _is_negative_zero(code, position + 1)
        # `a - 0 === b` is a subtraction, not a negative zero literal.
        left = (
            position >= 2
            and _is_negative_zero(code, position - 2)
            and not (position >= 3 and _ends_operand(code[position - 3]))
        )
        if right or left:
            diagnostics.append(
                _error(
                    file_id,
                    "no-compare-neg-zero",
                    f"comparing against -0 with `{token.value}` is unreliable",
                    token,
                    label="this comparison also matches 0",
                ).with_note("help: use `Object.is(value, -0)` to test for negative zero")
            )
    return diagnostics


def _paren_openers(code: Sequence[JsToken]) -> dict[int, JsToken | None]:
    """Map the position of each ``)`` to the token preceding its ``(``."""

    openers: dict[int, JsToken | None] = {}
    stack: list[JsToken | None] = []
    for position, token in enumerate(code):
        if token.is_punct("("):
            stack.append(code[position - 1] if position else None)
        elif token.is_punct(")") and stack:
            openers[position] = stack.pop()
    return openers


def check_no_empty(tokens: Sequence[JsToken], file_id: int) -> list[Diagnostic]:
    """Flag empty control-flow blocks; a comment makes a block non-empty."""

    openers = _paren_openers(_code_tokens(tokens))
    code_positions = {token.index: position for position, token in enumerate(_code_tokens(tokens))}
    diagnostics: list[Diagnostic] = []
    for position in range(1, len(tokens) - 1):
        token, following = tokens[position], tokens[position + 1]
        if not (token.is_punct("{") and following.is_punct("}")):
            continue
        previous = tokens[position - 1]
        if previous.kind in Comment:
            continue
        if previous.is_keyword(*_EMPTY_BLOCK_KEYWORDS):
            empty = True
        elif previous.is_punct(")"):
            opener = openers.get(code_positions[previous.index])
            empty = opener is not None and opener.is_keyword(*_CONTROL_KEYWORDS)
        else:
            empty = False
        if empty:
            diagnostics.append(
                Diagnostic(
                    severity=Severity.ERROR,
                    rule="no-empty",
                    file_id=file_id,
                    message="empty block statements are not allowed",
                    spans=(Span(start=token.index, end=following.end, label="this block is empty"),),
                    notes=("help: add a comment inside the block if this is intentional",),
                )
            )
    return diagnostics


def check_no_sparse_arrays(tokens: Sequence[JsToken], file_id: int) -> list[Diagnostic]:
    """Flag holes in array literals such as ``[1, , 2]``."""

    code = _code_tokens(tokens)
    stack: list[str] = []
    diagnostics: list[Diagnostic] = []
    for position, token in enumerate(code):
        if token.kind not in Punctuation:
            continue
        if token.value in "([{":
            stack.append(token.value)
        elif token.value in ")]}":
            if stack:
                stack.pop()
        elif token.value == "," and stack and stack[-1] == "[":
            previous = code[position - 1]
            if previous.is_punct(",") or previous.is_punct("["):
                diagnostics.append(_error(file_id, "no-sparse-arrays", "sparse arrays are not allowed", token))
    return diagnostics


BUILTIN_CHECKS: Final[Mapping[str, RuleCheck]] = {
    "no-compare-neg-zero": check_no_compare_neg_zero,
    "no-debugger": check_no_debugger,
    "no-empty": check_no_empty,
    "no-sparse-arrays": check_no_sparse_arrays,
}


def _iter_parse_errors(tokens: Sequence[JsToken], file_id: int, is_module: bool) -> Iterator[Diagnostic]:
    code = _code_tokens(tokens)
    for position, token in enumerate(code):
        if token.kind in Token.Error:
            yield _error(file_id, PARSE_RULE, f"unexpected character `{token.value}`", token)
        elif not is_module and token.is_keyword(*_MODULE_KEYWORDS):
            previous = code[position - 1] if position else None
            following = code[position + 1] if position + 1 < len(code) else None
            at_statement_start = previous is None or previous.is_punct(";") or previous.is_punct("}")
            dynamic = following is not None and (following.is_punct("(") or following.is_punct("."))
            if at_statement_start and not dynamic:
                yield _error(
                    file_id,
                    PARSE_RULE,
                    f"`{token.value}` declarations are only valid inside modules",
                    token,
                ).with_note("note: files with the `.mjs` extension are parsed as modules")


class TokenRuleEngine:
    """Rule engine running token based checks over the pygments JavaScript lexer."""

    def __init__(self, checks: Mapping[str, RuleCheck] | None = None) -> None:
        """Create an engine with ``checks`` keyed by rule name.

        Args:
            checks: Rule implementations; defaults to :data:`BUILTIN_CHECKS`.
        """

        self._checks = dict(checks if checks is not None else BUILTIN_CHECKS)

    def lint_file(
        self,
        file_id: int,
        source: str,
        is_module: bool,
        rule_set: RuleSet,
        verbose: bool,
    ) -> LintResult:
        """Run every implemented rule of ``rule_set`` against ``source``.

        Args:
            file_id: Identifier of the file in the run's file registry.
            source: Source text of the file.
            is_module: Parse the file as an ES module rather than a script.
            rule_set: Active rules; unknown names without a check are ignored.
            verbose: Accepted for interface compatibility; unused.

        Returns:
            LintResult: Diagnostics grouped by rule, in rule set order.

        Raises:
            FatalLintError: If the file contains a token the lexer rejects.
        """

        del verbose
        tokens = tokenize(source)
        fatal = next(_iter_parse_errors(tokens, file_id, is_module), None)
        if fatal is not None:
            raise FatalLintError(fatal)
        result = LintResult(file_id=file_id)
        for name in rule_set:
            check = self._checks.get(name)
            if check is None:
                continue
            diagnostics = check(tokens, file_id)
            if diagnostics:
                result.rule_diagnostics[name] = diagnostics
        return result


__all__ = [
    "BUILTIN_CHECKS",
    "FatalLintError",
    "JsToken",
    "PARSE_RULE",
    "RuleCheck",
    "RuleEngine",
    "TokenRuleEngine",
    "tokenize",
]
