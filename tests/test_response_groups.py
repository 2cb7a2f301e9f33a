"""
Tests for option based response-group assemblers and the EQ-5D widget.
"""

import pytest
from qdefs.errors import ConfigurationError
from qdefs.expressions import Expression, Literal
from qdefs.keys import ChoiceGroupRole, DataType, Role
from qdefs.model import StyleEntry
from qdefs.response_groups import (
    EQ5DHealthIndicatorProps,
    OptionDef,
    init_dropdown_group,
    init_eq5d_health_indicator_question,
    init_multiple_choice_group,
    init_response_group,
    init_single_choice_group,
    init_slider_categorical_group,
)


OPTIONS = [
    OptionDef(key="b", content={"en": "B"}),
    OptionDef(key="a", content={"en": "A"}),
    OptionDef(key="c", role=Role.INPUT, content={"en": "Other"}),
]


class TestInitResponseGroup:
    """Test the shared option group algorithm."""

    def test_children_follow_input_order(self):
        """Child keys equal option keys, in input order."""
        group = init_single_choice_group("scg", OPTIONS)
        assert group.child_keys() == ("b", "a", "c")

    def test_roles(self):
        """Each wrapper sets its group role."""
        assert init_single_choice_group("k", OPTIONS).role == Role.SINGLE_CHOICE_GROUP
        assert init_multiple_choice_group("k", OPTIONS).role == Role.MULTIPLE_CHOICE_GROUP
        assert init_dropdown_group("k", OPTIONS).role == Role.DROPDOWN_GROUP
        assert init_slider_categorical_group("k", OPTIONS).role == Role.SLIDER_CATEGORICAL

    def test_default_and_custom_order(self):
        """Order is sequential unless an expression is given."""
        assert init_single_choice_group("scg", OPTIONS).order == Expression("sequential")
        randomize = Expression("randomize")
        assert init_multiple_choice_group("mcg", OPTIONS, randomize).order == randomize

    def test_dtype_inference(self):
        """date and numberInput options get data types, others none."""
        group = init_multiple_choice_group("mcg", [
            OptionDef(key="d", role=Role.DATE),
            OptionDef(key="n", role=Role.NUMBER_INPUT),
            OptionDef(key="o"),
        ])
        assert group.get_child("d").dtype is DataType.DATE
        assert group.get_child("n").dtype is DataType.NUMBER
        assert group.get_child("o").dtype is None

    def test_option_fields(self):
        """Content, description, conditions and style are carried over."""
        cond = Expression("isDefined")
        group = init_single_choice_group("scg", [
            OptionDef(
                key="x",
                content={"en": "X"},
                description={"en": "desc"},
                display_condition=cond,
                disabled=cond,
                style=[("className", "w-100")],
            ),
        ])
        option = group.get_child("x")
        assert option.content[0].text == "X"
        assert option.description[0].text == "desc"
        assert option.display_condition is cond
        assert option.disabled is cond
        assert option.style == (StyleEntry("className", "w-100"),)

    def test_option_properties_normalized(self):
        """Option property numbers are wrapped, expressions kept."""
        expr = Expression("getAttribute")
        group = init_single_choice_group("scg", [
            OptionDef(key="n", role=Role.NUMBER_INPUT, properties={"min": 0, "max": expr, "stepSize": 1}),
        ])
        props = group.get_child("n").properties
        assert props.min == Literal(0)
        assert props.max is expr
        assert props.step_size == Literal(1)

    def test_dropdown_group_extras(self):
        """Dropdown groups accept disabled, content and description."""
        cond = Expression("isDefined")
        group = init_dropdown_group("ddg", OPTIONS, disabled=cond, content={"en": "Select"}, description={"en": "d"})
        assert group.disabled is cond
        assert group.content[0].text == "Select"
        assert group.description[0].text == "d"

    def test_empty_options(self):
        """An empty option list is rejected."""
        with pytest.raises(ConfigurationError):
            init_single_choice_group("scg", [])

    def test_duplicate_option_keys(self):
        """Duplicate option keys are rejected."""
        with pytest.raises(ConfigurationError):
            init_single_choice_group("scg", [OptionDef(key="a"), OptionDef(key="a")])

    def test_invalid_option_role(self):
        """Group roles cannot be used as option roles."""
        with pytest.raises(ConfigurationError):
            init_single_choice_group("scg", [OptionDef(key="a", role=Role.MATRIX)])

    def test_invalid_group_role(self):
        """Only choice group roles are accepted."""
        with pytest.raises(ConfigurationError):
            init_response_group(Role.MATRIX, "m", OPTIONS)

    def test_input_options_not_mutated(self):
        """Option definitions stay as declared."""
        option = OptionDef(key="n", role=Role.NUMBER_INPUT, properties={"min": 0})
        init_response_group(ChoiceGroupRole.SINGLE_CHOICE, "scg", [option])
        assert option.properties == {"min": 0}


class TestEQ5DHealthIndicator:
    """Test the fixed EQ-5D widget."""

    def _props(self, **kwargs):
        return EQ5DHealthIndicatorProps(
            key="eq5d",
            instruction_text={"en": "Mark your health today"},
            value_box_text={"en": "Your health today"},
            min_health_text={"en": "Worst"},
            max_health_text={"en": "Best"},
            **kwargs,
        )

    def test_four_children_in_fixed_order(self):
        """Instruction, value box, min label, max label."""
        group = init_eq5d_health_indicator_question(self._props())
        assert group.role == Role.EQ5D_HEALTH_INDICATOR
        assert [c.role for c in group.children] == [
            Role.INSTRUCTION, Role.VALUEBOX, Role.MIN_TEXT, Role.MAX_TEXT,
        ]
        assert [c.content[0].text for c in group.children] == [
            "Mark your health today", "Your health today", "Worst", "Best",
        ]

    def test_conditions(self):
        """Display condition and disabled apply to the group."""
        cond = Expression("isDefined")
        group = init_eq5d_health_indicator_question(self._props(display_condition=cond, disabled=cond))
        assert group.display_condition is cond
        assert group.disabled is cond
