"""
Serialization helpers for finished question documents.

Converts SurveyItem, nodes and expressions into the survey engine's schema
(plain dicts), and on to JSON or YAML strings. The field names and nesting
are the engine's and must stay stable:

    item       {"key", "version", "components", "validations", "condition"?}
    component  {"key", "role", "content"?, "description"?, "displayCondition"?,
                "disabled"?, "properties"?, "style"?, "dtype"?, "order"?, "items"?}
    expression {"name", "data"?}
    argument   {"dtype": "num", "num": N} | {"str": s} | {"dtype": "exp", "exp": {...}}

Absent optional fields are omitted rather than written as null.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

import yaml

from .expressions import Expression, ExpressionArg, Literal, SEQUENTIAL_ORDER
from .keys import DataType, Role
from .model import (
    GroupNode,
    LeafNode,
    LocalizedText,
    Node,
    Properties,
    StyleEntry,
    SurveyItem,
    ValidationRule,
    ValidationType,
)


_PROPERTY_NAMES = (
    ("min", "min"),
    ("max", "max"),
    ("step_size", "stepSize"),
    ("date_input_mode", "dateInputMode"),
)


def arg_to_dict(arg: ExpressionArg) -> Dict[str, Any]:
    if isinstance(arg, Expression):
        return {"dtype": "exp", "exp": expression_to_dict(arg)}
    if isinstance(arg, Literal):
        if arg.is_numeric:
            return {"dtype": "num", "num": arg.value}
        return {"str": arg.value}
    raise TypeError(f"Unsupported expression argument type: {type(arg)}")


def arg_from_dict(d: Dict[str, Any]) -> ExpressionArg:
    dtype = d.get("dtype", "str")
    if dtype == "exp":
        return expression_from_dict(d["exp"])
    if dtype == "num":
        return Literal(d["num"])
    if dtype == "str":
        return Literal(d["str"])
    raise TypeError(f"Unsupported argument dtype: {dtype}")


def expression_to_dict(expr: Expression | None) -> Any:
    if expr is None:
        return None
    d: Dict[str, Any] = {"name": expr.name}
    if expr.data:
        d["data"] = [arg_to_dict(a) for a in expr.data]
    return d


def expression_from_dict(d: Any) -> Expression | None:
    if d is None:
        return None
    return Expression(name=d["name"], data=tuple(arg_from_dict(a) for a in d.get("data", [])))


def loc_to_list(texts) -> list:
    return [{"code": t.code, "parts": [{"str": t.text}]} for t in texts]


def loc_from_list(items) -> tuple:
    return tuple(
        LocalizedText(code=i["code"], text="".join(p.get("str", "") for p in i.get("parts", [])))
        for i in items
    )


def properties_to_dict(p: Properties) -> Dict[str, Any]:
    return {name: arg_to_dict(getattr(p, attr)) for attr, name in _PROPERTY_NAMES
            if getattr(p, attr) is not None}


def properties_from_dict(d: Dict[str, Any]) -> Properties:
    return Properties(**{attr: arg_from_dict(d[name]) for attr, name in _PROPERTY_NAMES if name in d})


def node_to_dict(node: Node) -> Dict[str, Any]:
    d: Dict[str, Any] = {"key": node.key, "role": node.role.value}
    if node.content:
        d["content"] = loc_to_list(node.content)
    if node.description:
        d["description"] = loc_to_list(node.description)
    if node.display_condition is not None:
        d["displayCondition"] = expression_to_dict(node.display_condition)
    if node.disabled is not None:
        d["disabled"] = expression_to_dict(node.disabled)
    if node.properties is not None:
        d["properties"] = properties_to_dict(node.properties)
    if node.style:
        d["style"] = [{"key": s.key, "value": s.value} for s in node.style]
    if node.dtype is not None:
        d["dtype"] = node.dtype.value
    if isinstance(node, GroupNode):
        d["order"] = expression_to_dict(node.order)
        d["items"] = [node_to_dict(c) for c in node.children]
    return d


def node_from_dict(d: Dict[str, Any]) -> Node:
    role = Role(d["role"])
    common = dict(
        key=d["key"],
        role=role,
        content=loc_from_list(d.get("content", [])),
        description=loc_from_list(d.get("description", [])),
        properties=properties_from_dict(d["properties"]) if d.get("properties") else None,
        style=tuple(StyleEntry(key=s["key"], value=s["value"]) for s in d.get("style", [])),
        display_condition=expression_from_dict(d.get("displayCondition")),
        disabled=expression_from_dict(d.get("disabled")),
        dtype=DataType(d["dtype"]) if d.get("dtype") else None,
    )
    if role.is_group:
        return GroupNode(
            order=expression_from_dict(d.get("order")) or SEQUENTIAL_ORDER,
            children=tuple(node_from_dict(c) for c in d.get("items", [])),
            **common,
        )
    return LeafNode(**common)


def validation_to_dict(v: ValidationRule) -> Dict[str, Any]:
    return {"key": v.key, "type": v.type.value, "rule": expression_to_dict(v.rule)}


def validation_from_dict(d: Dict[str, Any]) -> ValidationRule:
    return ValidationRule(key=d["key"], type=ValidationType(d["type"]), rule=expression_from_dict(d["rule"]))


def item_to_dict(item: SurveyItem) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "key": item.full_key,
        "version": item.version,
        "components": node_to_dict(item.root),
        "validations": [validation_to_dict(v) for v in item.validations],
    }
    if item.condition is not None:
        d["condition"] = expression_to_dict(item.condition)
    return d


def item_from_dict(d: Dict[str, Any]) -> SurveyItem:
    parent_key, _, key = d["key"].rpartition(".")
    root = node_from_dict(d["components"])
    if not isinstance(root, GroupNode):
        raise TypeError(f"Item root must be a group component, got role {root.role.value}")
    return SurveyItem(
        key=key,
        parent_key=parent_key,
        root=root,
        version=d.get("version", 1),
        validations=tuple(validation_from_dict(v) for v in d.get("validations", [])),
        condition=expression_from_dict(d.get("condition")),
    )


def item_to_json(item: SurveyItem, indent: Optional[int] = None) -> str:
    return json.dumps(item_to_dict(item), indent=indent, ensure_ascii=False)


def item_from_json(s: str) -> SurveyItem:
    return item_from_dict(json.loads(s))


def item_to_yaml(item: SurveyItem) -> str:
    return yaml.safe_dump(item_to_dict(item), allow_unicode=True, sort_keys=False)


def item_from_yaml(s: str) -> SurveyItem:
    return item_from_dict(yaml.safe_load(s))
