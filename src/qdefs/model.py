"""
Core Question Model Objects

Defines the value types of a finished question definition:
    - LocalizedText (one locale's text)
    - StyleEntry (one key/value style pair)
    - Properties (typed component properties)
    - LeafNode / GroupNode (the component tree)
    - ValidationRule (response acceptability rule)
    - SurveyItem (the finished question document)

ARCHITECTURAL RULE:
    These objects:
        - Are immutable (frozen dataclasses, tuples instead of lists)
        - Carry no construction logic (that lives in builder.py)
        - Map one-to-one onto the survey engine schema (see serialization.py)

The leaf/group distinction is a closed variant: only GroupNode has
children, so a leaf holding children cannot be represented at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .expressions import Expression, Literal, SEQUENTIAL_ORDER
from .keys import DataType, Role


PropertyValue = Union[Literal, Expression]


@dataclass(frozen=True)
class LocalizedText:
    """Text for a single locale code."""

    code: str
    text: str


@dataclass(frozen=True)
class StyleEntry:
    """One styling hint (e.g. className, variant) for the renderer."""

    key: str
    value: str


@dataclass(frozen=True)
class Properties:
    """
    Typed component properties.

    Every field is either None (omitted), a Literal or an Expression.
    Raw numbers never appear here; builder.normalize_property() wraps them.

    Properties:
        min: Lower bound (number input, slider, date input)
        max: Upper bound
        step_size: Increment for numeric inputs and sliders
        date_input_mode: "YMD", "YM" or "Y" for date inputs
    """

    min: Optional[PropertyValue] = None
    max: Optional[PropertyValue] = None
    step_size: Optional[PropertyValue] = None
    date_input_mode: Optional[PropertyValue] = None

    def is_empty(self) -> bool:
        return all(
            v is None for v in (self.min, self.max, self.step_size, self.date_input_mode)
        )


@dataclass(frozen=True)
class Component:
    """
    Fields shared by leaf and group components.

    Properties:
        key: Unique among siblings
        role: Role enum value, decides rendering
        content: Ordered localized texts
        description: Ordered localized texts (subtitles, placeholders)
        properties: Typed properties or None
        style: Ordered style entries
        display_condition: Expression deciding visibility, or None
        disabled: Expression deciding whether input is disabled, or None
        dtype: Response data type tag for typed inputs, or None
    """

    key: str
    role: Role
    content: Tuple[LocalizedText, ...] = ()
    description: Tuple[LocalizedText, ...] = ()
    properties: Optional[Properties] = None
    style: Tuple[StyleEntry, ...] = ()
    display_condition: Optional[Expression] = None
    disabled: Optional[Expression] = None
    dtype: Optional[DataType] = None


@dataclass(frozen=True)
class LeafNode(Component):
    """A component without children (text, option, input, label, ...)."""

    @property
    def is_group(self) -> bool:
        return False


@dataclass(frozen=True)
class GroupNode(Component):
    """
    A component holding an ordered tuple of children.

    Properties (in addition to Component):
        order: Expression deciding child order ("sequential" by default,
               an expression such as "randomize" shuffles responses)
        children: Ordered child nodes; order is significant for rendering
    """

    order: Expression = SEQUENTIAL_ORDER
    children: Tuple[Node, ...] = ()

    @property
    def is_group(self) -> bool:
        return True

    def child_keys(self) -> Tuple[str, ...]:
        return tuple(c.key for c in self.children)

    def get_child(self, key: str) -> Optional[Node]:
        """
        Retrieve a direct child by key.

        Returns:
            Node or None if not found
        """
        for child in self.children:
            if child.key == key:
                return child
        return None


Node = Union[LeafNode, GroupNode]


class ValidationType(Enum):
    """Hard rules block submission, soft rules only warn."""
    HARD = "hard"
    SOFT = "soft"


@dataclass(frozen=True)
class ValidationRule:
    """
    A named rule the survey engine evaluates against the response.

    Properties:
        key: Unique within the item (e.g. "r1")
        type: ValidationType.HARD or ValidationType.SOFT
        rule: Boolean Expression
    """

    key: str
    type: ValidationType
    rule: Expression


@dataclass(frozen=True)
class SurveyItem:
    """
    The finished question document.

    This is THE artifact handed to the caller. Nothing in qdefs mutates it
    after it is returned.

    Properties:
        key: Item key within its parent (e.g. "Q1")
        parent_key: Key of the containing survey group (e.g. "weekly")
        version: Definition version, 1 unless stated
        root: GroupNode with role "root" holding all components
        validations: Ordered validation rules
        condition: Expression deciding whether the item is shown, or None
    """

    key: str
    parent_key: str
    root: GroupNode
    version: int = 1
    validations: Tuple[ValidationRule, ...] = ()
    condition: Optional[Expression] = None

    @property
    def full_key(self) -> str:
        return f"{self.parent_key}.{self.key}"

    def get_component(self, path: str) -> Optional[Node]:
        """
        Retrieve a component by dotted key path below the root.

        Args:
            path: Key path, e.g. "rg.scg.opt1"

        Returns:
            Node or None if any segment is missing
        """
        node: Optional[Node] = self.root
        for segment in path.split("."):
            if node is None or not isinstance(node, GroupNode):
                return None
            node = node.get_child(segment)
        return node
