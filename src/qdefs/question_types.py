"""
Question-type facade.

One generator per question kind. Each takes a props dataclass, builds the
type specific response subtree and hands it to QuestionBuilder together
with the shared envelope (title, condition, help, display components,
validations, footnote).

    item = generate_single_choice_question(OptionQuestionProps(
        parent_key="weekly",
        item_key="Q1",
        question_text={"en": "Did you have a fever?"},
        response_options=[
            OptionDef(key="1", content={"en": "Yes"}),
            OptionDef(key="0", content={"en": "No"}),
        ],
        is_required=True,
    ))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Sequence, Union

from .builder import NodeBuilder
from .errors import ConfigurationError
from .expressions import Expression, exp_with_args
from .generators import LocaleMap
from .item_builder import QuestionBuilder
from .keys import (
    DATE_PICKER_KEY,
    DROPDOWN_KEY,
    LIKERT_SCALE_GROUP_KEY,
    MULTIPLE_CHOICE_KEY,
    NUMERIC_INPUT_KEY,
    NUMERIC_SLIDER_KEY,
    RESPONSE_GROUP_KEY,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SECONDS_PER_MONTH,
    SECONDS_PER_YEAR,
    SINGLE_CHOICE_KEY,
    Role,
)
from .likert import LikertRow, ScaleOption, init_likert_scale_group
from .model import Node, SurveyItem, ValidationRule
from .response_groups import OptionDef, init_dropdown_group, init_multiple_choice_group, init_single_choice_group


logger = logging.getLogger(__name__)

NumberOrExpression = Union[int, float, Expression, None]


@dataclass(frozen=True, kw_only=True)
class GenericQuestionProps:
    """
    Envelope settings shared by every question kind.

    Properties:
        parent_key: Key of the containing survey group
        item_key: Key of the item
        question_text: Title per locale
        version: Definition version (default 1)
        question_sub_text: Subtitle per locale
        help_group_content: [{"content": locale map, "style": [...]}, ...]
        condition: Item display condition
        top_display_components: Nodes shown above the response group
        bottom_display_components: Nodes shown below the response group
        is_required: Add the required-response validation
        footnote_text: Footnote per locale
        custom_validations: Extra validation rules, appended in order
    """

    parent_key: str
    item_key: str
    question_text: LocaleMap
    version: int = 1
    question_sub_text: Optional[LocaleMap] = None
    help_group_content: Optional[Sequence[Mapping]] = None
    condition: Optional[Expression] = None
    top_display_components: Sequence[Node] = ()
    bottom_display_components: Sequence[Node] = ()
    is_required: bool = False
    footnote_text: Optional[LocaleMap] = None
    custom_validations: Sequence[ValidationRule] = ()


@dataclass(frozen=True, kw_only=True)
class OptionQuestionProps(GenericQuestionProps):
    response_options: Sequence[OptionDef]
    order: Optional[Expression] = None


@dataclass(frozen=True, kw_only=True)
class NumericInputQuestionProps(GenericQuestionProps):
    content: LocaleMap
    content_behind_input: bool = False
    min: NumberOrExpression = None
    max: NumberOrExpression = None
    step_size: NumberOrExpression = None


@dataclass(frozen=True, kw_only=True)
class NumericSliderQuestionProps(GenericQuestionProps):
    slider_label: LocaleMap
    min: NumberOrExpression = None
    max: NumberOrExpression = None
    step_size: NumberOrExpression = None


@dataclass(frozen=True)
class Duration:
    """
    A relative offset, e.g. Duration(years=-18) for "18 years ago".

    Properties:
        reference: Expression (or timestamp) the offset is relative to;
                   the engine uses the current time when None
        years, months, days, hours, minutes, seconds: Offset components
    """

    reference: Union[int, Expression, None] = None
    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0


def duration_to_seconds(duration: Duration) -> int:
    """Total offset in seconds. Years are 365 days, months 30 days."""
    return (
        duration.years * SECONDS_PER_YEAR
        + duration.months * SECONDS_PER_MONTH
        + duration.days * SECONDS_PER_DAY
        + duration.hours * SECONDS_PER_HOUR
        + duration.minutes * SECONDS_PER_MINUTE
        + duration.seconds
    )


def relative_timestamp(duration: Duration) -> Expression:
    return exp_with_args("timestampWithOffset", duration_to_seconds(duration), duration.reference)


class DateInputMode(Enum):
    YEAR_MONTH_DAY = "YMD"
    YEAR_MONTH = "YM"
    YEAR = "Y"


@dataclass(frozen=True, kw_only=True)
class DatePickerQuestionProps(GenericQuestionProps):
    date_input_mode: DateInputMode = DateInputMode.YEAR_MONTH_DAY
    input_label_text: Optional[LocaleMap] = None
    placeholder_text: Optional[LocaleMap] = None
    min_relative_date: Optional[Duration] = None
    max_relative_date: Optional[Duration] = None


@dataclass(frozen=True, kw_only=True)
class LikertGroupQuestionProps(GenericQuestionProps):
    rows: Sequence[LikertRow]
    scale_options: Sequence[ScaleOption]
    stack_on_small_screen: bool = False


@dataclass(frozen=True, kw_only=True)
class DisplayProps:
    parent_key: str
    item_key: str
    content: Sequence[Node]
    condition: Optional[Expression] = None


def _compose(
    props: GenericQuestionProps,
    response: Node,
    required_rule: Optional[Expression] = None,
) -> SurveyItem:
    builder = QuestionBuilder(props.parent_key, props.item_key, props.version)
    builder = builder.with_title(props.question_text, props.question_sub_text)
    if props.condition is not None:
        builder = builder.with_condition(props.condition)
    if props.help_group_content:
        builder = builder.with_help_group(props.help_group_content)
    builder = builder.with_top_components(props.top_display_components)
    builder = builder.with_response_group(response)
    builder = builder.with_bottom_components(props.bottom_display_components)
    if props.is_required:
        if required_rule is not None:
            builder = builder.with_required_validation(required_rule)
        else:
            builder = builder.with_has_response_validation()
    builder = builder.with_validations(props.custom_validations)
    if props.footnote_text:
        builder = builder.with_footnote(props.footnote_text)
    return builder.build()


def generate_single_choice_question(props: OptionQuestionProps) -> SurveyItem:
    logger.debug("Generating single choice question %s.%s", props.parent_key, props.item_key)
    inner = init_single_choice_group(SINGLE_CHOICE_KEY, props.response_options, props.order)
    return _compose(props, inner)


def generate_multiple_choice_question(props: OptionQuestionProps) -> SurveyItem:
    logger.debug("Generating multiple choice question %s.%s", props.parent_key, props.item_key)
    inner = init_multiple_choice_group(MULTIPLE_CHOICE_KEY, props.response_options, props.order)
    return _compose(props, inner)


def generate_dropdown_question(props: OptionQuestionProps) -> SurveyItem:
    logger.debug("Generating dropdown question %s.%s", props.parent_key, props.item_key)
    inner = init_dropdown_group(DROPDOWN_KEY, props.response_options, props.order)
    return _compose(props, inner)


def generate_numeric_input_question(props: NumericInputQuestionProps) -> SurveyItem:
    logger.debug("Generating numeric input question %s.%s", props.parent_key, props.item_key)
    builder = (
        NodeBuilder.for_role(Role.NUMBER_INPUT, NUMERIC_INPUT_KEY)
        .with_content(props.content)
        .with_properties(min=props.min, max=props.max, step_size=props.step_size)
    )
    if props.content_behind_input:
        builder = builder.with_style([("labelPlacement", "after")])
    return _compose(props, builder.snapshot())


def generate_numeric_slider_question(props: NumericSliderQuestionProps) -> SurveyItem:
    logger.debug("Generating numeric slider question %s.%s", props.parent_key, props.item_key)
    inner = (
        NodeBuilder.for_role(Role.SLIDER_NUMERIC, NUMERIC_SLIDER_KEY)
        .with_content(props.slider_label)
        .with_properties(min=props.min, max=props.max, step_size=props.step_size)
        .snapshot()
    )
    return _compose(props, inner)


def generate_date_picker_question(props: DatePickerQuestionProps) -> SurveyItem:
    logger.debug("Generating date picker question %s.%s", props.parent_key, props.item_key)
    try:
        mode = DateInputMode(props.date_input_mode)
    except ValueError:
        raise ConfigurationError(f"Invalid date input mode: {props.date_input_mode!r}") from None
    inner = (
        NodeBuilder.for_role(Role.DATE_INPUT, DATE_PICKER_KEY)
        .with_properties(
            date_input_mode=mode.value,
            min=relative_timestamp(props.min_relative_date) if props.min_relative_date else None,
            max=relative_timestamp(props.max_relative_date) if props.max_relative_date else None,
        )
        .with_content(props.input_label_text)
        .with_description(props.placeholder_text)
        .snapshot()
    )
    return _compose(props, inner)


def likert_required_rule(
    item_key: str,
    rows: Sequence[LikertRow],
    scale_options: Sequence[ScaleOption],
) -> Expression:
    """
    All rows answered: and(responseHasKeysAny(item, "rg.lsg.<row>", keys...), ...)
    """
    option_keys = [o.key for o in scale_options]
    return exp_with_args("and", *[
        exp_with_args(
            "responseHasKeysAny",
            item_key,
            ".".join([RESPONSE_GROUP_KEY, LIKERT_SCALE_GROUP_KEY, row.key]),
            *option_keys,
        )
        for row in rows
    ])


def generate_simple_likert_group_question(props: LikertGroupQuestionProps) -> SurveyItem:
    logger.debug("Generating likert group question %s.%s", props.parent_key, props.item_key)
    inner = init_likert_scale_group(
        LIKERT_SCALE_GROUP_KEY,
        props.rows,
        props.scale_options,
        props.stack_on_small_screen,
    )
    rule = likert_required_rule(f"{props.parent_key}.{props.item_key}", props.rows, props.scale_options)
    return _compose(props, inner, required_rule=rule)


def generate_display(props: DisplayProps) -> SurveyItem:
    """An item without response group or validations, only display nodes."""
    logger.debug("Generating display item %s.%s", props.parent_key, props.item_key)
    builder = QuestionBuilder(props.parent_key, props.item_key).with_top_components(props.content)
    if props.condition is not None:
        builder = builder.with_condition(props.condition)
    return builder.build()


SURVEY_ITEM_GENERATORS = {
    "singleChoice": generate_single_choice_question,
    "multipleChoice": generate_multiple_choice_question,
    "simpleLikertGroup": generate_simple_likert_group_question,
    "dateInput": generate_date_picker_question,
    "dropDown": generate_dropdown_question,
    "numericSlider": generate_numeric_slider_question,
    "numericInput": generate_numeric_input_question,
    "display": generate_display,
}
