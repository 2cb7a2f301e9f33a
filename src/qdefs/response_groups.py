"""
Response-group assemblers for option based questions.

Turns declarative option lists into response group subtrees:
    - single choice, multiple choice, dropdown and categorical slider
      groups (init_response_group and its wrappers)
    - the fixed EQ-5D health indicator widget

Matrix and likert assemblers live in matrix.py and likert.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from .builder import NodeBuilder
from .errors import ConfigurationError
from .expressions import Expression
from .generators import LocaleMap, StyleInput
from .keys import OPTION_DATA_TYPES, ChoiceGroupRole, Role
from .model import GroupNode, Node


@dataclass(frozen=True)
class OptionDef:
    """
    Declares one response option.

    Properties:
        key: Option key, becomes the response value
        role: Option role (Role.OPTION, Role.INPUT, Role.NUMBER_INPUT,
              Role.DATE, ...)
        content: Label per locale
        description: Secondary text per locale
        display_condition: Expression deciding visibility
        disabled: Expression deciding whether the option is selectable
        style: Style entries
        properties: Raw property map ({"min": 0, "stepSize": 1, ...});
                    numbers are wrapped as literals at build time
    """

    key: str
    role: Role = Role.OPTION
    content: Optional[LocaleMap] = None
    description: Optional[LocaleMap] = None
    display_condition: Optional[Expression] = None
    disabled: Optional[Expression] = None
    style: Optional[StyleInput] = None
    properties: Optional[Mapping[str, Any]] = None


def build_option(option: OptionDef) -> Node:
    if option.role not in OPTION_DATA_TYPES:
        raise ConfigurationError(f"Role {option.role!r} is not a valid option role (option '{option.key}')")
    return (
        NodeBuilder.for_role(option.role, option.key)
        .with_content(option.content)
        .with_description(option.description)
        .with_dtype(OPTION_DATA_TYPES[option.role])
        .with_display_condition(option.display_condition)
        .with_disabled(option.disabled)
        .with_style(option.style)
        .with_property_map(option.properties)
        .snapshot()
    )


def init_response_group(
    group_role: ChoiceGroupRole,
    key: str,
    options: Sequence[OptionDef],
    order: Optional[Expression] = None,
    disabled: Optional[Expression] = None,
    content: Optional[LocaleMap] = None,
    description: Optional[LocaleMap] = None,
) -> GroupNode:
    """
    Build an option group.

    Args:
        group_role: Which kind of choice group to build
        key: Group key (e.g. "scg")
        options: Options in display order
        order: Order expression; "sequential" when None
        disabled: Disables the whole group
        content: Group label (dropdown placeholder)
        description: Group description

    Returns:
        GroupNode whose children are the options, in input order
    """
    if not isinstance(group_role, ChoiceGroupRole):
        raise ConfigurationError(f"Unsupported response group role: {group_role!r}")
    if not options:
        raise ConfigurationError(f"Response group '{key}' needs at least one option")

    builder = (
        NodeBuilder.for_role(group_role.value, key)
        .with_order(order)
        .with_disabled(disabled)
        .with_content(content)
        .with_description(description)
    )
    for option in options:
        builder = builder.with_child(build_option(option))
    return builder.snapshot()


def init_single_choice_group(
    key: str,
    options: Sequence[OptionDef],
    order: Optional[Expression] = None,
) -> GroupNode:
    return init_response_group(ChoiceGroupRole.SINGLE_CHOICE, key, options, order)


def init_multiple_choice_group(
    key: str,
    options: Sequence[OptionDef],
    order: Optional[Expression] = None,
) -> GroupNode:
    return init_response_group(ChoiceGroupRole.MULTIPLE_CHOICE, key, options, order)


def init_dropdown_group(
    key: str,
    options: Sequence[OptionDef],
    order: Optional[Expression] = None,
    disabled: Optional[Expression] = None,
    content: Optional[LocaleMap] = None,
    description: Optional[LocaleMap] = None,
) -> GroupNode:
    return init_response_group(
        ChoiceGroupRole.DROPDOWN, key, options, order, disabled, content, description
    )


def init_slider_categorical_group(
    key: str,
    options: Sequence[OptionDef],
    order: Optional[Expression] = None,
    disabled: Optional[Expression] = None,
) -> GroupNode:
    return init_response_group(ChoiceGroupRole.SLIDER_CATEGORICAL, key, options, order, disabled)


@dataclass(frozen=True)
class EQ5DHealthIndicatorProps:
    """Texts and conditions of the EQ-5D visual analogue scale widget."""

    key: str
    instruction_text: LocaleMap
    value_box_text: LocaleMap
    min_health_text: LocaleMap
    max_health_text: LocaleMap
    display_condition: Optional[Expression] = None
    disabled: Optional[Expression] = None


def init_eq5d_health_indicator_question(props: EQ5DHealthIndicatorProps) -> GroupNode:
    """
    Build the EQ-5D health indicator group.

    Always four children, in this order: instruction, value box label,
    minimum health label, maximum health label.
    """
    group = (
        NodeBuilder.for_role(Role.EQ5D_HEALTH_INDICATOR, props.key)
        .with_display_condition(props.display_condition)
        .with_disabled(props.disabled)
    )
    group = group.with_child(
        NodeBuilder.for_role(Role.INSTRUCTION, "instruction").with_content(props.instruction_text).snapshot()
    )
    group = group.with_child(
        NodeBuilder.for_role(Role.VALUEBOX, "valuebox").with_content(props.value_box_text).snapshot()
    )
    group = group.with_child(
        NodeBuilder.for_role(Role.MIN_TEXT, "mintext").with_content(props.min_health_text).snapshot()
    )
    group = group.with_child(
        NodeBuilder.for_role(Role.MAX_TEXT, "maxtext").with_content(props.max_health_text).snapshot()
    )
    return group.snapshot()
