"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The parser builds these nodes and the interpreter walks them. Nodes are
immutable; every node keeps the token it was created from so that
diagnostics can point back at the source.

`str(node)` renders a fully parenthesised form of the node that parses
back into an identical tree, which makes the parser's precedence
decisions easy to see and to test.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .tokens import Token


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


class Statement(Node):
    pass


class Expression(Node):
    pass


def join_statements(statements: Sequence[Statement]) -> str:
    # Expression statements need an explicit separator so that `x` followed
    # by `-y` does not read back as `x - y`.
    parts = []
    for i, stmt in enumerate(statements):
        text = str(stmt)
        if isinstance(stmt, ExpressionStatement) and i < len(statements) - 1:
            text += ';'
        parts.append(text)
    return ' '.join(parts)


@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...]

    def __str__(self) -> str:
        return join_statements(self.statements)


# Expressions


@dataclass(frozen=True)
class Identifier(Expression):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    elements: Tuple[Expression, ...]

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self.elements) + ']'


@dataclass(frozen=True)
class HashLiteral(Expression):
    pairs: Tuple[Tuple[Expression, Expression], ...]  # in source order

    def __str__(self) -> str:
        return '{' + ', '.join(f"{k}: {v}" for k, v in self.pairs) + '}'


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def chain(self) -> str:
        if isinstance(self.left, IndexExpression):
            base = self.left.chain()
        else:
            base = str(self.left)
        return f"{base}[{self.index}]"

    def __str__(self) -> str:
        return f"({self.chain()})"


@dataclass(frozen=True)
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral, or anything callable
    arguments: Tuple[Expression, ...]

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# Statements


@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Optional[Expression]

    def __str__(self) -> str:
        value = str(self.value) if self.value is not None else ''
        return f"{self.token_literal()} {self.name} = {value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    return_value: Optional[Expression]

    def __str__(self) -> str:
        if self.return_value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: Tuple[Statement, ...]

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + join_statements(self.statements) + ' }'


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement]

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"
