"""
Generic tree-node builder.

NodeBuilder assembles one component step by step. It is itself a frozen
value: every with_* call returns a NEW builder, so a partially built node
can be shared or branched without one caller's changes leaking into
another's tree.

    option = (
        NodeBuilder.for_role(Role.NUMBER_INPUT, key="age")
        .with_content({"en": "Age"})
        .with_properties(min=0, max=120)
        .snapshot()
    )

Whether the result is a LeafNode or a GroupNode is decided by the role
(Role.is_group). Child and order setters raise UsageError on leaf roles.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional, Tuple

from .errors import ConfigurationError, UsageError
from .expressions import Expression, Literal, SEQUENTIAL_ORDER
from .generators import LocaleMap, StyleInput, generate_loc_strings, generate_random_key, to_style_entries
from .keys import DataType, Role
from .model import GroupNode, LeafNode, LocalizedText, Node, Properties, PropertyValue, StyleEntry


# Accepted spellings of property names in caller-supplied property maps
_PROPERTY_FIELDS = {
    "min": "min",
    "max": "max",
    "stepSize": "step_size",
    "step_size": "step_size",
    "dateInputMode": "date_input_mode",
    "date_input_mode": "date_input_mode",
}


def normalize_property(value: Any) -> Optional[PropertyValue]:
    """
    Normalize one property value.

    Rules:
        None              -> None (property omitted)
        int / float       -> Literal (numeric)
        str               -> Literal (string)
        Literal / Expression -> unchanged
        anything else     -> ConfigurationError
    """
    if value is None:
        return None
    if isinstance(value, (Literal, Expression)):
        return value
    if isinstance(value, bool):
        raise ConfigurationError(f"Boolean is not a valid property value: {value!r}")
    if isinstance(value, (int, float, str)):
        return Literal(value)
    raise ConfigurationError(f"Unsupported property value type: {type(value).__name__}")


def normalize_properties(
    min: Any = None,
    max: Any = None,
    step_size: Any = None,
    date_input_mode: Any = None,
) -> Optional[Properties]:
    props = Properties(
        min=normalize_property(min),
        max=normalize_property(max),
        step_size=normalize_property(step_size),
        date_input_mode=normalize_property(date_input_mode),
    )
    return None if props.is_empty() else props


def properties_from_mapping(values: Optional[Mapping[str, Any]]) -> Optional[Properties]:
    """Normalize a {"min": .., "max": .., "stepSize": ..} style mapping."""
    if not values:
        return None
    kwargs = {}
    for name, value in values.items():
        if name not in _PROPERTY_FIELDS:
            raise ConfigurationError(f"Unknown component property: {name}")
        kwargs[_PROPERTY_FIELDS[name]] = value
    return normalize_properties(**kwargs)


def _check_expression(value: Optional[Expression], what: str) -> Optional[Expression]:
    if value is not None and not isinstance(value, Expression):
        raise ConfigurationError(f"{what} must be an Expression, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class NodeBuilder:
    """
    Immutable, role-aware builder for a single component.

    Properties:
        role: Role of the component; decides leaf vs group
        key: Sibling-unique key (random 4 character key when not given)
        order: Child order expression, groups only
        children: Children added so far, groups only

    All other fields mirror the node fields in model.py.
    """

    role: Role
    key: str = field(default_factory=generate_random_key)
    content: Tuple[LocalizedText, ...] = ()
    description: Tuple[LocalizedText, ...] = ()
    properties: Optional[Properties] = None
    style: Tuple[StyleEntry, ...] = ()
    display_condition: Optional[Expression] = None
    disabled: Optional[Expression] = None
    dtype: Optional[DataType] = None
    order: Expression = SEQUENTIAL_ORDER
    children: Tuple[Node, ...] = ()

    @classmethod
    def for_role(cls, role: Role, key: Optional[str] = None) -> NodeBuilder:
        if not isinstance(role, Role):
            raise ConfigurationError(f"Unknown component role: {role!r}")
        if key is None:
            return cls(role=role)
        if not key:
            raise ConfigurationError(f"Empty key for {role.value} component")
        return cls(role=role, key=key)

    @property
    def is_group(self) -> bool:
        return self.role.is_group

    def with_content(self, texts: Optional[LocaleMap]) -> NodeBuilder:
        if texts is None:
            return self
        return replace(self, content=generate_loc_strings(texts))

    def with_description(self, texts: Optional[LocaleMap]) -> NodeBuilder:
        if texts is None:
            return self
        return replace(self, description=generate_loc_strings(texts))

    def with_properties(
        self,
        min: Any = None,
        max: Any = None,
        step_size: Any = None,
        date_input_mode: Any = None,
    ) -> NodeBuilder:
        return replace(self, properties=normalize_properties(min, max, step_size, date_input_mode))

    def with_property_map(self, values: Optional[Mapping[str, Any]]) -> NodeBuilder:
        if values is None:
            return self
        return replace(self, properties=properties_from_mapping(values))

    def with_style(self, style: Optional[StyleInput]) -> NodeBuilder:
        if style is None:
            return self
        return replace(self, style=to_style_entries(style))

    def with_display_condition(self, condition: Optional[Expression]) -> NodeBuilder:
        return replace(self, display_condition=_check_expression(condition, "displayCondition"))

    def with_disabled(self, condition: Optional[Expression]) -> NodeBuilder:
        return replace(self, disabled=_check_expression(condition, "disabled"))

    def with_dtype(self, dtype: Optional[DataType]) -> NodeBuilder:
        return replace(self, dtype=dtype)

    def with_order(self, order: Optional[Expression]) -> NodeBuilder:
        self._require_group("set order on")
        if order is None:
            return replace(self, order=SEQUENTIAL_ORDER)
        return replace(self, order=_check_expression(order, "order"))

    def with_child(self, child: Node) -> NodeBuilder:
        self._require_group(f"add child '{child.key}' to")
        if any(c.key == child.key for c in self.children):
            raise ConfigurationError(
                f"Duplicate key '{child.key}' under {self.role.value} component '{self.key}'"
            )
        return replace(self, children=self.children + (child,))

    def with_children(self, children: Iterable[Node]) -> NodeBuilder:
        builder = self
        for child in children:
            builder = builder.with_child(child)
        return builder

    def replace_child(self, child: Node) -> NodeBuilder:
        """
        Swap the child carrying child.key in place, keeping its position.

        For callers editing an existing tree (e.g. re-wording one option of
        a group built elsewhere); the assemblers in this package only add.
        """
        self._require_group(f"replace child '{child.key}' in")
        keys = [c.key for c in self.children]
        if child.key not in keys:
            raise ConfigurationError(f"No child '{child.key}' under component '{self.key}'")
        children = list(self.children)
        children[keys.index(child.key)] = child
        return replace(self, children=tuple(children))

    def snapshot(self) -> Node:
        """Return the finished node. Builders and nodes share no mutable state."""
        common = dict(
            key=self.key,
            role=self.role,
            content=self.content,
            description=self.description,
            properties=self.properties,
            style=self.style,
            display_condition=self.display_condition,
            disabled=self.disabled,
            dtype=self.dtype,
        )
        if self.is_group:
            return GroupNode(order=self.order, children=self.children, **common)
        return LeafNode(**common)

    def _require_group(self, action: str) -> None:
        if not self.is_group:
            raise UsageError(
                f"Cannot {action} leaf component '{self.key}' (role {self.role.value})"
            )
