"""
Arithmetic over grid variables for declaration values.

A declaration value such as ``"$unit-width + $gutter-width"`` references grid
geometry with the ``$`` sigil. Values carrying a reference are parsed as
arithmetic over numbers, ``+ - * /``, unary signs and parentheses; nothing else
is accepted and nothing is ever executed.
"""

import re
from typing import Any, Dict, List, Mapping, Tuple

from gridsystem.core.types import is_number, normalize_number
from gridsystem.error_handling.exceptions import InvalidConfigurationError

VARIABLE_SIGIL = "$"

_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_OPERATORS = "+-*/()"

Token = Tuple[str, Any]


class ExpressionEvaluator:
    """Evaluates sigil expressions against a fixed set of named numbers.

    Any string containing ``$`` is treated as an expression, so a literal
    dollar sign (e.g. ``content: "$"``) is rejected as an unknown variable
    rather than stored verbatim.
    """

    def __init__(self, variables: Mapping[str, Any]) -> None:
        """
        Initialize the evaluator.

        Args:
            variables: Variable name (without sigil) to numeric value
        """
        self.variables: Dict[str, Any] = dict(variables)

        # Longest names first so "$unit-1-width" never matches as "$unit-1".
        names = sorted(self.variables, key=len, reverse=True)
        alternatives = "|".join(re.escape(name) for name in names) or r"(?!)"
        self._reference = re.compile(
            re.escape(VARIABLE_SIGIL) + r"(" + alternatives + r")(?![A-Za-z0-9_])"
        )

    def has_reference(self, value: Any) -> bool:
        """Whether a declaration value must be evaluated rather than kept verbatim."""
        return isinstance(value, str) and VARIABLE_SIGIL in value

    def resolve(self, prop: str, value: Any) -> Any:
        """
        Resolve one declaration value.

        Args:
            prop: Declaration property name, used in error messages
            value: Raw declaration value

        Returns:
            The evaluated number for expressions, otherwise the value unchanged
        """
        if not self.has_reference(value):
            return value

        tokens = self._tokenize(prop, value)
        parser = _Parser(tokens, prop, value)
        return normalize_number(parser.parse())

    def _tokenize(self, prop: str, text: str) -> List[Token]:
        tokens: List[Token] = []
        pos = 0
        length = len(text)

        while pos < length:
            char = text[pos]
            if char.isspace():
                pos += 1
                continue

            if char == VARIABLE_SIGIL:
                match = self._reference.match(text, pos)
                if not match:
                    unknown = re.match(r"\$[\w-]*", text[pos:]).group(0)
                    raise InvalidConfigurationError(
                        f"Declaration '{prop}' references unknown variable '{unknown}' "
                        f"in '{text}'",
                        expected=sorted(VARIABLE_SIGIL + name for name in self.variables),
                        received=unknown,
                    )
                tokens.append(("number", self.variables[match.group(1)]))
                pos = match.end()
                continue

            match = _NUMBER.match(text, pos)
            if match:
                literal = match.group(0)
                number = float(literal) if "." in literal else int(literal)
                tokens.append(("number", number))
                pos = match.end()
                continue

            if char in _OPERATORS:
                tokens.append(("op", char))
                pos += 1
                continue

            raise InvalidConfigurationError(
                f"Declaration '{prop}' has unexpected character '{char}' "
                f"at position {pos} in '{text}'",
                expected="numbers, grid variables, + - * / and parentheses",
                received=text,
            )

        return tokens


class _Parser:
    """Recursive-descent parser over a token list.

    expr   := term (("+" | "-") term)*
    term   := factor (("*" | "/") factor)*
    factor := ("+" | "-") factor | number | "(" expr ")"
    """

    def __init__(self, tokens: List[Token], prop: str, text: str) -> None:
        self.tokens = tokens
        self.pos = 0
        self.prop = prop
        self.text = text

    def parse(self) -> Any:
        result = self._expr()
        if self.pos != len(self.tokens):
            self._fail(f"unexpected '{self.tokens[self.pos][1]}'")
        return result

    def _peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return ("end", None)

    def _expr(self) -> Any:
        value = self._term()
        while self._peek() in (("op", "+"), ("op", "-")):
            op = self.tokens[self.pos][1]
            self.pos += 1
            right = self._term()
            value = value + right if op == "+" else value - right
        return value

    def _term(self) -> Any:
        value = self._factor()
        while self._peek() in (("op", "*"), ("op", "/")):
            op = self.tokens[self.pos][1]
            self.pos += 1
            right = self._factor()
            if op == "*":
                value = value * right
            elif right == 0:
                self._fail("division by zero")
            else:
                value = value / right
        return value

    def _factor(self) -> Any:
        kind, token = self._peek()

        if kind == "op" and token in "+-":
            self.pos += 1
            operand = self._factor()
            return -operand if token == "-" else operand

        if kind == "number":
            self.pos += 1
            if not is_number(token):
                self._fail(f"variable value {token!r} is not numeric")
            return token

        if kind == "op" and token == "(":
            self.pos += 1
            value = self._expr()
            if self._peek() != ("op", ")"):
                self._fail("missing closing parenthesis")
            self.pos += 1
            return value

        self._fail("unexpected end of expression" if kind == "end" else f"unexpected '{token}'")

    def _fail(self, reason: str) -> None:
        raise InvalidConfigurationError(
            f"Declaration '{self.prop}' has an invalid expression '{self.text}': {reason}",
            expected="an arithmetic expression over grid variables",
            received=self.text,
        )
