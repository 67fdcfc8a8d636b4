"""JSON serialization/deserialization for Froggle AST.

This module converts between Froggle AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types and `TypeSpec`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .ast import (
    Program,
    Declaration,
    Assignment,
    Print,
    Block,
    While,
    If,
    Param,
    FunctionDecl,
    Return,
    ExpressionStatement,
    NumberLiteral,
    BoolLiteral,
    Identifier,
    Binary,
    Call,
    Grouping,
)
from .errors import ParseError
from .types import TypeSpec


def typespec_to_obj(t: TypeSpec) -> Dict[str, Any]:
    return {"__type__": "TypeSpec", "kind": t.kind}


def typespec_from_obj(o: Dict[str, Any]) -> TypeSpec:
    t = TypeSpec.from_name(o["kind"]) if isinstance(o["kind"], str) else None
    if t is None:
        raise ParseError(f"unknown type {o['kind']!r} in AST")
    return t


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, TypeSpec):
        return typespec_to_obj(node)

    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, Declaration):
        return {
            "type": "Declaration",
            "name": node.name,
            "type_spec": ast_to_obj(node.type_spec),
            "expr": ast_to_obj(node.expr),
        }
    if isinstance(node, Assignment):
        return {"type": "Assignment", "name": node.name, "expr": ast_to_obj(node.expr)}
    if isinstance(node, Print):
        return {"type": "Print", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, Param):
        return {"type": "Param", "name": node.name, "type_spec": ast_to_obj(node.type_spec)}
    if isinstance(node, FunctionDecl):
        return {
            "type": "FunctionDecl",
            "name": node.name,
            "params": [ast_to_obj(p) for p in node.params],
            "return_type": ast_to_obj(node.return_type),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Return):
        return {"type": "Return", "expr": ast_to_obj(node.expr)}
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "expr": ast_to_obj(node.expr)}
    if isinstance(node, NumberLiteral):
        return {"type": "NumberLiteral", "value": node.value}
    if isinstance(node, BoolLiteral):
        return {"type": "BoolLiteral", "value": node.value}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, Binary):
        return {"type": "Binary", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Call):
        return {"type": "Call", "name": node.name, "args": [ast_to_obj(a) for a in node.args]}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expr": ast_to_obj(node.expr)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


STATEMENTS = (Declaration, Assignment, Print, Block, While, If, FunctionDecl, Return, ExpressionStatement)
EXPRESSIONS = (NumberLiteral, BoolLiteral, Identifier, Binary, Call, Grouping)
OPERATORS = ('+', '-', '*', '/', '==', '>', '<')


def child(obj: Dict[str, Any], key: str, kinds: Tuple[type, ...], optional: bool = False) -> Any:
    """Decode `obj[key]` and require one of `kinds` (or None when optional)."""
    node = ast_from_obj(obj.get(key) if optional else obj[key])
    if node is None and optional:
        return None
    if not isinstance(node, kinds):
        found = type(node).__name__ if node is not None else 'null'
        raise ParseError(f"field {key!r} of {obj.get('type')}: unexpected {found}")
    return node


def children(obj: Dict[str, Any], key: str, kinds: Tuple[type, ...]) -> List[Any]:
    items = obj[key]
    if not isinstance(items, list):
        raise ParseError(f"field {key!r} of {obj.get('type')} must be a list")
    return [child({'type': obj.get('type'), key: item}, key, kinds) for item in items]


def text(obj: Dict[str, Any], key: str) -> str:
    value = obj[key]
    if not isinstance(value, str):
        raise ParseError(f"field {key!r} of {obj.get('type')} must be a string")
    return value


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise ParseError(f"invalid AST object {obj!r}")
    if obj.get("__type__") == "TypeSpec":
        return typespec_from_obj(obj)
    t = obj.get("type")
    if t == "Program":
        return Program(body=children(obj, "body", STATEMENTS))
    if t == "Declaration":
        return Declaration(
            name=text(obj, "name"),
            type_spec=child(obj, "type_spec", (TypeSpec,), optional=True),
            expr=child(obj, "expr", EXPRESSIONS),
        )
    if t == "Assignment":
        return Assignment(name=text(obj, "name"), expr=child(obj, "expr", EXPRESSIONS))
    if t == "Print":
        return Print(expr=child(obj, "expr", EXPRESSIONS))
    if t == "Block":
        return Block(statements=children(obj, "statements", STATEMENTS))
    if t == "While":
        return While(condition=child(obj, "condition", EXPRESSIONS), body=child(obj, "body", (Block,)))
    if t == "If":
        return If(
            condition=child(obj, "condition", EXPRESSIONS),
            then_branch=child(obj, "then_branch", (Block,)),
            else_branch=child(obj, "else_branch", (Block, If), optional=True),
        )
    if t == "Param":
        return Param(name=text(obj, "name"), type_spec=child(obj, "type_spec", (TypeSpec,)))
    if t == "FunctionDecl":
        return FunctionDecl(
            name=text(obj, "name"),
            params=children(obj, "params", (Param,)),
            return_type=child(obj, "return_type", (TypeSpec,)),
            body=child(obj, "body", (Block,)),
        )
    if t == "Return":
        return Return(expr=child(obj, "expr", EXPRESSIONS, optional=True))
    if t == "ExpressionStatement":
        return ExpressionStatement(expr=child(obj, "expr", EXPRESSIONS))
    if t == "NumberLiteral":
        value = obj["value"]
        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, int):
            raise ParseError(f"NumberLiteral value must be an integer, got {value!r}")
        return NumberLiteral(value=value)
    if t == "BoolLiteral":
        value = obj["value"]
        if not isinstance(value, bool):
            raise ParseError(f"BoolLiteral value must be true or false, got {value!r}")
        return BoolLiteral(value=value)
    if t == "Identifier":
        return Identifier(name=text(obj, "name"))
    if t == "Binary":
        op = obj["op"]
        if op not in OPERATORS:
            raise ParseError(f"unknown operator {op!r} in AST")
        return Binary(op=op, left=child(obj, "left", EXPRESSIONS), right=child(obj, "right", EXPRESSIONS))
    if t == "Call":
        return Call(name=text(obj, "name"), args=children(obj, "args", EXPRESSIONS))
    if t == "Grouping":
        return Grouping(expr=child(obj, "expr", EXPRESSIONS))

    raise ParseError(f"unknown AST node type {t!r}")


def program_from_obj(obj: Any) -> Program:
    """Rebuild a `Program` from JSON data, reporting malformed data as ParseError."""
    try:
        program = ast_from_obj(obj)
    except KeyError as e:
        raise ParseError(f"AST object is missing field {e.args[0]!r}") from None
    except (TypeError, ValueError) as e:
        raise ParseError(f"malformed AST object: {e}") from None
    except RecursionError:
        raise ParseError('AST object is nested too deeply') from None
    if not isinstance(program, Program):
        raise ParseError('AST root must be a Program')
    return program
