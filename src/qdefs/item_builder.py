"""
Question envelope composer.

QuestionBuilder wraps one response-group subtree together with the title,
help popup, display components, validations and footnote of a single
survey item.

The renderer lays components out top to bottom exactly in child order, so
build() always assembles them in this fixed order, whatever order the
setters were called in:

    1. title (+ subtitle)
    2. item condition
    3. help group
    4. top display components
    5. response group (exactly one)
    6. bottom display components
    7. required-response validation
    8. custom validations
    9. footnote
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from .builder import NodeBuilder
from .errors import ConfigurationError
from .expressions import Expression, exp_with_args
from .generators import (
    LocaleMap,
    generate_footnote_component,
    generate_help_group_component,
    generate_title_component,
)
from .keys import REQUIRED_VALIDATION_KEY, RESPONSE_GROUP_KEY, ROOT_KEY, Role
from .model import GroupNode, LeafNode, Node, SurveyItem, ValidationRule, ValidationType


logger = logging.getLogger(__name__)


def _check_node(node: Node) -> Node:
    if not isinstance(node, (LeafNode, GroupNode)):
        raise ConfigurationError(f"Display components must be nodes, got {type(node).__name__}")
    return node


@dataclass(frozen=True)
class QuestionBuilder:
    """
    Immutable composer for one survey item. Each with_* call returns a new
    builder; build() returns the finished SurveyItem.

    Properties:
        parent_key: Key of the containing survey group
        item_key: Key of this item within the parent
        version: Definition version (default 1)
    """

    parent_key: str
    item_key: str
    version: int = 1
    title: Optional[LeafNode] = None
    condition: Optional[Expression] = None
    help_group: Optional[GroupNode] = None
    top_components: Tuple[Node, ...] = ()
    response_group: Optional[GroupNode] = None
    bottom_components: Tuple[Node, ...] = ()
    required_validation: Optional[ValidationRule] = None
    validations: Tuple[ValidationRule, ...] = ()
    footnote: Optional[LeafNode] = None

    def __post_init__(self):
        if not self.parent_key:
            raise ConfigurationError("Parent key is required")
        if not self.item_key:
            raise ConfigurationError("Item key is required")
        if isinstance(self.version, bool) or not isinstance(self.version, int) or self.version < 1:
            raise ConfigurationError(f"Version must be a positive integer, got {self.version!r}")

    @property
    def full_key(self) -> str:
        return f"{self.parent_key}.{self.item_key}"

    def with_title(self, title: LocaleMap, subtitle: Optional[LocaleMap] = None) -> QuestionBuilder:
        return replace(self, title=generate_title_component(title, subtitle))

    def with_condition(self, condition: Optional[Expression]) -> QuestionBuilder:
        if condition is not None and not isinstance(condition, Expression):
            raise ConfigurationError("Item condition must be an Expression")
        return replace(self, condition=condition)

    def with_help_group(self, items: Sequence[Mapping]) -> QuestionBuilder:
        return replace(self, help_group=generate_help_group_component(items))

    def with_top_components(self, nodes: Iterable[Node]) -> QuestionBuilder:
        return replace(self, top_components=self.top_components + tuple(_check_node(n) for n in nodes))

    def with_bottom_components(self, nodes: Iterable[Node]) -> QuestionBuilder:
        return replace(
            self, bottom_components=self.bottom_components + tuple(_check_node(n) for n in nodes)
        )

    def with_response_group(self, inner: Node) -> QuestionBuilder:
        """
        Wrap inner in the "rg" response group. An item has exactly one
        response group; setting it again replaces the previous one.
        """
        _check_node(inner)
        if self.response_group is not None:
            warnings.warn(
                f"Replacing existing response group of {self.full_key}", UserWarning, stacklevel=2
            )
        group = (
            NodeBuilder.for_role(Role.RESPONSE_GROUP, RESPONSE_GROUP_KEY)
            .with_child(inner)
            .snapshot()
        )
        return replace(self, response_group=group)

    def with_has_response_validation(self) -> QuestionBuilder:
        rule = exp_with_args("hasResponse", self.full_key, RESPONSE_GROUP_KEY)
        return self.with_required_validation(rule)

    def with_required_validation(self, rule: Expression) -> QuestionBuilder:
        if not isinstance(rule, Expression):
            raise ConfigurationError("Required validation rule must be an Expression")
        validation = ValidationRule(key=REQUIRED_VALIDATION_KEY, type=ValidationType.HARD, rule=rule)
        return replace(self, required_validation=validation)

    def with_validations(self, validations: Iterable[ValidationRule]) -> QuestionBuilder:
        validations = tuple(validations)
        for v in validations:
            if not isinstance(v, ValidationRule):
                raise ConfigurationError(f"Custom validations must be ValidationRule, got {type(v).__name__}")
        return replace(self, validations=self.validations + validations)

    def with_footnote(self, text: LocaleMap) -> QuestionBuilder:
        return replace(self, footnote=generate_footnote_component(text))

    def build(self) -> SurveyItem:
        components = []
        if self.title is not None:
            components.append(self.title)
        if self.help_group is not None:
            components.append(self.help_group)
        components.extend(self.top_components)
        if self.response_group is not None:
            components.append(self.response_group)
        components.extend(self.bottom_components)
        if self.footnote is not None:
            components.append(self.footnote)

        root = NodeBuilder.for_role(Role.ROOT, ROOT_KEY).with_children(components).snapshot()

        validations = []
        if self.required_validation is not None:
            validations.append(self.required_validation)
        validations.extend(self.validations)

        seen = set()
        for v in validations:
            if v.key in seen:
                raise ConfigurationError(f"Duplicate validation key '{v.key}' in {self.full_key}")
            seen.add(v.key)

        logger.debug(
            "Built item %s (version %d): %d components, %d validations",
            self.full_key, self.version, len(components), len(validations),
        )
        return SurveyItem(
            key=self.item_key,
            parent_key=self.parent_key,
            root=root,
            version=self.version,
            validations=tuple(validations),
            condition=self.condition,
        )
