"""JSON serialization/deserialization for Monkey ASTs.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node keeps its
token, so a tree read back from JSON displays and evaluates exactly like
the one that was written.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    ArrayLiteral, BlockStatement, BooleanLiteral, CallExpression,
    ExpressionStatement, FunctionLiteral, HashLiteral, Identifier,
    IfExpression, IndexExpression, InfixExpression, IntegerLiteral,
    LetStatement, PrefixExpression, Program, ReturnStatement, StringLiteral,
)
from .tokens import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"type": t.type.name, "literal": t.literal, "line": t.line, "column": t.column}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["type"]], o["literal"], o.get("line", 1), o.get("column", 1))


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    def base(kind: str) -> Dict[str, Any]:
        return {"type": kind, "token": token_to_obj(node.token)}

    if isinstance(node, Program):
        return {**base("Program"), "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, LetStatement):
        return {**base("LetStatement"), "name": ast_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, ReturnStatement):
        return {**base("ReturnStatement"), "return_value": ast_to_obj(node.return_value)}
    if isinstance(node, ExpressionStatement):
        return {**base("ExpressionStatement"), "expression": ast_to_obj(node.expression)}
    if isinstance(node, BlockStatement):
        return {**base("BlockStatement"), "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Identifier):
        return {**base("Identifier"), "value": node.value}
    if isinstance(node, IntegerLiteral):
        return {**base("IntegerLiteral"), "value": node.value}
    if isinstance(node, BooleanLiteral):
        return {**base("BooleanLiteral"), "value": node.value}
    if isinstance(node, StringLiteral):
        return {**base("StringLiteral"), "value": node.value}
    if isinstance(node, ArrayLiteral):
        return {**base("ArrayLiteral"), "elements": [ast_to_obj(e) for e in node.elements]}
    if isinstance(node, HashLiteral):
        return {**base("HashLiteral"), "pairs": [[ast_to_obj(k), ast_to_obj(v)] for k, v in node.pairs]}
    if isinstance(node, PrefixExpression):
        return {**base("PrefixExpression"), "operator": node.operator, "right": ast_to_obj(node.right)}
    if isinstance(node, InfixExpression):
        return {
            **base("InfixExpression"),
            "left": ast_to_obj(node.left),
            "operator": node.operator,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, IfExpression):
        return {
            **base("IfExpression"),
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, FunctionLiteral):
        return {
            **base("FunctionLiteral"),
            "parameters": [ast_to_obj(p) for p in node.parameters],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, IndexExpression):
        return {**base("IndexExpression"), "left": ast_to_obj(node.left), "index": ast_to_obj(node.index)}
    if isinstance(node, CallExpression):
        return {
            **base("CallExpression"),
            "function": ast_to_obj(node.function),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    token = token_from_obj(obj["token"])
    if t == "Program":
        return Program(token, tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "LetStatement":
        return LetStatement(token, ast_from_obj(obj["name"]), ast_from_obj(obj.get("value")))
    if t == "ReturnStatement":
        return ReturnStatement(token, ast_from_obj(obj.get("return_value")))
    if t == "ExpressionStatement":
        return ExpressionStatement(token, ast_from_obj(obj["expression"]))
    if t == "BlockStatement":
        return BlockStatement(token, tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "Identifier":
        return Identifier(token, obj["value"])
    if t == "IntegerLiteral":
        return IntegerLiteral(token, int(obj["value"]))
    if t == "BooleanLiteral":
        return BooleanLiteral(token, bool(obj["value"]))
    if t == "StringLiteral":
        return StringLiteral(token, obj["value"])
    if t == "ArrayLiteral":
        return ArrayLiteral(token, tuple(ast_from_obj(e) for e in obj["elements"]))
    if t == "HashLiteral":
        return HashLiteral(token, tuple((ast_from_obj(k), ast_from_obj(v)) for k, v in obj["pairs"]))
    if t == "PrefixExpression":
        return PrefixExpression(token, obj["operator"], ast_from_obj(obj["right"]))
    if t == "InfixExpression":
        return InfixExpression(token, ast_from_obj(obj["left"]), obj["operator"], ast_from_obj(obj["right"]))
    if t == "IfExpression":
        return IfExpression(
            token,
            ast_from_obj(obj["condition"]),
            ast_from_obj(obj["consequence"]),
            ast_from_obj(obj.get("alternative")),
        )
    if t == "FunctionLiteral":
        return FunctionLiteral(
            token,
            tuple(ast_from_obj(p) for p in obj["parameters"]),
            ast_from_obj(obj["body"]),
        )
    if t == "IndexExpression":
        return IndexExpression(token, ast_from_obj(obj["left"]), ast_from_obj(obj["index"]))
    if t == "CallExpression":
        return CallExpression(
            token,
            ast_from_obj(obj["function"]),
            tuple(ast_from_obj(a) for a in obj["arguments"]),
        )

    raise ValueError(f"Unknown AST node type: {t}")
