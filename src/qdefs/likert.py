"""
Likert scale assemblers.

A likert group renders several statements sharing one answer scale. For
every declared row it emits:
    (a) a bold text label with the row's statement
    (b) a likert sub-item (role "likert") with one option per scale point

The label of the first row has no top spacing or border; later rows get
spacing and a top border unless the row hides it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .builder import NodeBuilder
from .errors import ConfigurationError
from .expressions import Expression
from .generators import LocaleMap, generate_random_key
from .keys import (
    LIKERT_LABEL_BORDER_CLASS_NAME,
    LIKERT_LABEL_CLASS_NAME,
    LIKERT_LABEL_SPACING_CLASS_NAME,
    LIKERT_LABEL_VARIANT,
    STACK_ON_SMALL_SCREEN,
    Role,
)
from .model import GroupNode, Node


@dataclass(frozen=True)
class OptionDisabled:
    """Disables the scale option option_key within a single row."""

    option_key: str
    exp: Expression


@dataclass(frozen=True)
class LikertRow:
    """
    One statement of a likert group.

    Properties:
        key: Row key; the response path is "<group key>.<row key>"
        content: Statement text per locale
        hide_top_border: Suppress the separator above this row's label
        option_disabled: Per-option disabled overrides for this row
        display_condition: Expression deciding row visibility
    """

    key: str
    content: LocaleMap
    hide_top_border: bool = False
    option_disabled: Sequence[OptionDisabled] = ()
    display_condition: Optional[Expression] = None


@dataclass(frozen=True)
class ScaleOption:
    """One point of the answer scale."""

    key: str
    content: Optional[LocaleMap] = None
    class_name: Optional[str] = None
    disabled: Optional[Expression] = None


def _label_class_name(index: int, hide_top_border: bool) -> str:
    class_name = LIKERT_LABEL_CLASS_NAME
    if index > 0:
        class_name += LIKERT_LABEL_SPACING_CLASS_NAME
        if not hide_top_border:
            class_name += LIKERT_LABEL_BORDER_CLASS_NAME
    return class_name


def _row_options(row: LikertRow, scale_options: Sequence[ScaleOption]) -> Sequence[ScaleOption]:
    overrides = {}
    for override in row.option_disabled:
        # first match wins
        overrides.setdefault(override.option_key, override.exp)
    return [
        ScaleOption(
            key=option.key,
            content=option.content,
            class_name=option.class_name,
            disabled=overrides.get(option.key),
        )
        for option in scale_options
    ]


def init_likert_scale_item(
    key: str,
    options: Sequence[ScaleOption],
    stack_on_small_screen: bool = False,
    display_condition: Optional[Expression] = None,
) -> GroupNode:
    """
    Build one likert row (role "likert") with one option child per scale
    point, in the given order.
    """
    if not options:
        raise ConfigurationError(f"Likert item '{key}' needs at least one scale option")

    builder = NodeBuilder.for_role(Role.LIKERT, key).with_display_condition(display_condition)
    if stack_on_small_screen:
        builder = builder.with_style([("responsive", STACK_ON_SMALL_SCREEN)])

    for option in options:
        option_builder = (
            NodeBuilder.for_role(Role.OPTION, option.key)
            .with_content(option.content)
            .with_disabled(option.disabled)
        )
        if option.class_name:
            option_builder = option_builder.with_style([("className", option.class_name)])
        builder = builder.with_child(option_builder.snapshot())
    return builder.snapshot()


def init_likert_scale_group(
    key: str,
    rows: Sequence[LikertRow],
    scale_options: Sequence[ScaleOption],
    stack_on_small_screen: bool = False,
    display_condition: Optional[Expression] = None,
) -> GroupNode:
    """
    Build a likert group (role "likertGroup").

    Args:
        key: Group key (e.g. "lsg")
        rows: Statements in display order
        scale_options: Shared answer scale
        stack_on_small_screen: Stack options vertically on narrow screens
        display_condition: Expression deciding group visibility

    Returns:
        GroupNode with 2 * len(rows) children: label, item, label, item, ...
    """
    if not rows:
        raise ConfigurationError(f"Likert group '{key}' needs at least one row")
    if not scale_options:
        raise ConfigurationError(f"Likert group '{key}' needs at least one scale option")

    taken = {row.key for row in rows}
    builder = NodeBuilder.for_role(Role.LIKERT_GROUP, key).with_display_condition(display_condition)
    for index, row in enumerate(rows):
        label_key = generate_random_key()
        while label_key in taken:
            label_key = generate_random_key()
        taken.add(label_key)
        label: Node = (
            NodeBuilder.for_role(Role.TEXT, label_key)
            .with_content(row.content)
            .with_style([
                ("className", _label_class_name(index, row.hide_top_border)),
                ("variant", LIKERT_LABEL_VARIANT),
            ])
            .snapshot()
        )
        builder = builder.with_child(label)
        builder = builder.with_child(init_likert_scale_item(
            row.key,
            _row_options(row, scale_options),
            stack_on_small_screen,
            row.display_condition,
        ))
    return builder.snapshot()
