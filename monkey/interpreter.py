"""Tree-walking interpreter for the Monkey language.

`Interpreter.evaluate` dispatches on the AST node type and returns a
runtime `Object`. Failures are ordinary values: an `Error` object is
returned up through every enclosing evaluation, and each composite
evaluation (blocks, argument lists, literals) stops at the first one it
sees. `return` works the same way: the value is wrapped in a
`ReturnValue` that travels out of nested blocks and enclosing expressions
until the enclosing function call (or the program) unwraps it.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence

from .ast import (
    ArrayLiteral, BlockStatement, BooleanLiteral, CallExpression, Expression,
    ExpressionStatement, FunctionLiteral, HashLiteral, Identifier,
    IfExpression, IndexExpression, InfixExpression, IntegerLiteral,
    LetStatement, Node, PrefixExpression, Program, ReturnStatement,
    StringLiteral,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .parser import parse_program
from .std import BasicIO, lookup_builtin
from .types import (
    FALSE, NULL, TRUE, Array, Error, Function, Hash, Hashable, HashPair,
    Integer, Object, ReturnValue, String, is_interrupt, is_truthy,
    native_bool_to_boolean, to_int64,
)


class Interpreter:
    """Evaluates Monkey ASTs.

    `io` is the output sink used by `puts`. With `debug_level > 0`, trace
    messages are written to `debug_file` (or stderr when no file is given):
    level 1 logs program results, level 2 adds let bindings, level 3 adds
    every function application.
    """
    def __init__(self, io: Optional[BasicIO] = None, debug_level: int = 0,
                 debug_file: Optional[str] = None):
        self.io = io if io is not None else BasicIO()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Object:
        """Evaluate a whole program against `env`, creating one if needed."""
        if env is None:
            env = Environment()
        try:
            result = self.evaluate(program, env)
        except RecursionError:
            result = Error('maximum recursion depth exceeded')
        self.debug(f"result: {result.inspect()}")
        return result

    def evaluate(self, node: Optional[Node], env: Environment) -> Object:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(node, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, ReturnStatement):
            if node.return_value is None:
                return ReturnValue(NULL)
            value = self.evaluate(node.return_value, env)
            if is_interrupt(value):
                return value
            return ReturnValue(value)
        if isinstance(node, LetStatement):
            return self.eval_let_statement(node, env)

        # Expressions
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, PrefixExpression):
            right = self.evaluate(node.right, env)
            if is_interrupt(right):
                return right
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            if is_interrupt(left):
                return left
            right = self.evaluate(node.right, env)
            if is_interrupt(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)
        if isinstance(node, CallExpression):
            function = self.evaluate(node.function, env)
            if is_interrupt(function):
                return function
            args = self.eval_expressions(node.arguments, env)
            if len(args) == 1 and is_interrupt(args[0]):
                return args[0]
            return self.apply_function(function, args)
        if isinstance(node, ArrayLiteral):
            elements = self.eval_expressions(node.elements, env)
            if len(elements) == 1 and is_interrupt(elements[0]):
                return elements[0]
            return Array(tuple(elements))
        if isinstance(node, IndexExpression):
            left = self.evaluate(node.left, env)
            if is_interrupt(left):
                return left
            index = self.evaluate(node.index, env)
            if is_interrupt(index):
                return index
            return self.eval_index_expression(left, index)
        if isinstance(node, HashLiteral):
            return self.eval_hash_literal(node, env)
        return NULL

    def eval_program(self, program: Program, env: Environment) -> Object:
        result: Object = NULL
        for stmt in program.statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                return result
        return result

    def eval_block_statement(self, block: BlockStatement, env: Environment) -> Object:
        result: Object = NULL
        for stmt in block.statements:
            result = self.evaluate(stmt, env)
            # keep ReturnValue wrapped so it escapes every enclosing block
            if is_interrupt(result):
                return result
        return result

    def eval_let_statement(self, node: LetStatement, env: Environment) -> Object:
        value = self.evaluate(node.value, env)
        if is_interrupt(value):
            return value
        name = node.name.value
        if env.is_declared(name):
            return Error(f"identifier already declared: {name}")
        env.declare(name, value)
        self.debug(f"let {name} = {value.inspect()}", level=2)
        return NULL

    def eval_expressions(self, exprs: Sequence[Expression], env: Environment) -> List[Object]:
        """Evaluate left to right; on an Error or ReturnValue return a list holding only that."""
        result: List[Object] = []
        for expr in exprs:
            evaluated = self.evaluate(expr, env)
            if is_interrupt(evaluated):
                return [evaluated]
            result.append(evaluated)
        return result

    def eval_identifier(self, node: Identifier, env: Environment) -> Object:
        value = env.get(node.value)
        if value is not None:
            return value
        builtin = lookup_builtin(node.value)
        if builtin is not None:
            return builtin
        return Error(f"identifier not found: {node.value}")

    def eval_prefix_expression(self, operator: str, right: Object) -> Object:
        if operator == '!':
            return FALSE if is_truthy(right) else TRUE
        if operator == '-':
            if not isinstance(right, Integer):
                return Error(f"unknown operator: -{right.type}")
            return Integer(to_int64(-right.value))
        return Error(f"unknown operator: {operator}{right.type}")

    def eval_infix_expression(self, operator: str, left: Object, right: Object) -> Object:
        if left.type != right.type:
            return Error(f"type mismatch: {left.type} {operator} {right.type}")
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(operator, left, right)
        if isinstance(left, String) and isinstance(right, String):
            return self.eval_string_infix_expression(operator, left, right)
        # Booleans and NULL are singletons, so identity is value equality here.
        if operator == '==':
            return native_bool_to_boolean(left is right)
        if operator == '!=':
            return native_bool_to_boolean(left is not right)
        return Error(f"unknown operator: {left.type} {operator} {right.type}")

    def eval_integer_infix_expression(self, operator: str, left: Integer, right: Integer) -> Object:
        a, b = left.value, right.value
        if operator == '+':
            return Integer(to_int64(a + b))
        if operator == '-':
            return Integer(to_int64(a - b))
        if operator == '*':
            return Integer(to_int64(a * b))
        if operator == '/':
            if b == 0:
                return Error(f"division by zero: {a} / 0")
            # truncate toward zero
            quotient = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                quotient = -quotient
            return Integer(to_int64(quotient))
        if operator == '<':
            return native_bool_to_boolean(a < b)
        if operator == '>':
            return native_bool_to_boolean(a > b)
        if operator == '==':
            return native_bool_to_boolean(a == b)
        if operator == '!=':
            return native_bool_to_boolean(a != b)
        return Error(f"unknown operator: {left.type} {operator} {right.type}")

    def eval_string_infix_expression(self, operator: str, left: String, right: String) -> Object:
        # concatenation is the only string operator
        if operator != '+':
            return Error(f"unknown operator: {left.type} {operator} {right.type}")
        return String(left.value + right.value)

    def eval_if_expression(self, node: IfExpression, env: Environment) -> Object:
        condition = self.evaluate(node.condition, env)
        if is_interrupt(condition):
            return condition
        if is_truthy(condition):
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def eval_index_expression(self, left: Object, index: Object) -> Object:
        if isinstance(left, Array) and isinstance(index, Integer):
            i = index.value
            if i < 0 or i >= len(left.elements):
                return NULL
            return left.elements[i]
        if isinstance(left, Hash):
            if not isinstance(index, Hashable):
                return Error(f"unusable as hash key: {index.type}")
            pair = left.pairs.get(index.hash_key())
            return pair.value if pair is not None else NULL
        return Error(f"index operator not supported: {left.type}[{index.type}]")

    def eval_hash_literal(self, node: HashLiteral, env: Environment) -> Object:
        pairs = {}
        for key_node, value_node in node.pairs:
            key = self.evaluate(key_node, env)
            if is_interrupt(key):
                return key
            if not isinstance(key, Hashable):
                return Error(f"unusable as hash key: {key.type}")
            value = self.evaluate(value_node, env)
            if is_interrupt(value):
                return value
            pairs[key.hash_key()] = HashPair(key, value)
        return Hash(pairs)

    def apply_function(self, fn: Object, args: List[Object]) -> Object:
        """Call a user function or builtin with already-evaluated arguments."""
        if isinstance(fn, Function):
            if len(args) != len(fn.parameters):
                return Error(f"wrong number of arguments: want={len(fn.parameters)}, got={len(args)}")
            self.debug(f"call {fn.inspect()} with ({', '.join(a.inspect() for a in args)})", level=3)
            call_env = Environment.enclosed(fn.env)
            for param, arg in zip(fn.parameters, args):
                call_env.declare(param.value, arg)
            evaluated = self.evaluate(fn.body, call_env)
            if isinstance(evaluated, ReturnValue):
                return evaluated.value
            return evaluated
        if isinstance(fn, BuiltinFunction):
            if fn.arity is not None and len(args) != fn.arity:
                plural = 's' if fn.arity != 1 else ''
                return Error(f"{fn.name} expects {fn.arity} argument{plural}, got {len(args)}")
            self.debug(f"call builtin {fn.name} with {len(args)} argument(s)", level=3)
            return fn.fn(self, args)
        return Error(f"not a function: {fn.type}")


def run_program(source: str, env: Optional[Environment] = None,
                interpreter: Optional[Interpreter] = None) -> Object:
    """Parse and evaluate `source`.

    `env` is updated in place, so calling this repeatedly with the same
    Environment sees earlier bindings. Raises ParseError if the source does
    not parse; nothing is evaluated in that case.
    """
    program = parse_program(source)
    if interpreter is None:
        interpreter = Interpreter()
    if env is None:
        env = Environment()
    return interpreter.run(program, env)
