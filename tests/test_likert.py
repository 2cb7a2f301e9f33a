"""
Tests for likert group and likert item assemblers.
"""

import pytest
from qdefs.errors import ConfigurationError
from qdefs.expressions import Expression
from qdefs.keys import Role
from qdefs.likert import (
    LikertRow,
    OptionDisabled,
    ScaleOption,
    init_likert_scale_group,
    init_likert_scale_item,
)
from qdefs.model import StyleEntry


SCALE = [
    ScaleOption(key="1", content={"en": "Disagree"}),
    ScaleOption(key="2", content={"en": "Neutral"}, class_name="border-start"),
    ScaleOption(key="3", content={"en": "Agree"}),
]

ROWS = [
    LikertRow(key="a", content={"en": "Statement A"}),
    LikertRow(key="b", content={"en": "Statement B"}),
    LikertRow(key="c", content={"en": "Statement C"}, hide_top_border=True),
]


def _class_name(node):
    return dict((s.key, s.value) for s in node.style)["className"]


class TestLikertGroup:
    """Test likert group structure."""

    def test_label_and_item_per_row(self):
        """Each row emits a text label followed by a likert item."""
        group = init_likert_scale_group("lsg", ROWS, SCALE)
        assert group.role == Role.LIKERT_GROUP
        assert len(group.children) == 6
        assert [c.role for c in group.children] == [Role.TEXT, Role.LIKERT] * 3
        assert [c.key for c in group.children[1::2]] == ["a", "b", "c"]

    def test_label_content_and_variant(self):
        """Labels carry the row text and the h6 variant."""
        label = init_likert_scale_group("lsg", ROWS, SCALE).children[0]
        assert label.content[0].text == "Statement A"
        assert StyleEntry("variant", "h6") in label.style

    def test_label_borders(self):
        """First row has no border; hidden borders are honored."""
        labels = init_likert_scale_group("lsg", ROWS, SCALE).children[0::2]
        assert _class_name(labels[0]) == "mb-1 fw-bold"
        assert _class_name(labels[1]) == "mb-1 fw-bold pt-1 mt-2 border-top border-1 border-grey-2"
        assert _class_name(labels[2]) == "mb-1 fw-bold pt-1 mt-2"

    def test_first_row_hide_border_has_no_effect(self):
        """The first row never gets a border either way."""
        rows = [LikertRow(key="a", content={"en": "A"}, hide_top_border=True)]
        label = init_likert_scale_group("lsg", rows, SCALE).children[0]
        assert _class_name(label) == "mb-1 fw-bold"

    def test_label_keys_are_random(self):
        """Label keys are generated and differ between builds."""
        keys_1 = [c.key for c in init_likert_scale_group("lsg", ROWS, SCALE).children[0::2]]
        keys_2 = [c.key for c in init_likert_scale_group("lsg", ROWS, SCALE).children[0::2]]
        assert all(len(k) == 4 for k in keys_1)
        assert len(set(keys_1)) == 3
        assert keys_1 != keys_2

    def test_per_row_disabled_options(self):
        """Disabled overrides apply per row, matched by option key."""
        cond = Expression("isDefined")
        rows = [
            LikertRow(key="a", content={"en": "A"}, option_disabled=[OptionDisabled("2", cond)]),
            LikertRow(key="b", content={"en": "B"}),
        ]
        group = init_likert_scale_group("lsg", rows, SCALE)
        item_a, item_b = group.get_child("a"), group.get_child("b")
        assert item_a.get_child("2").disabled is cond
        assert item_a.get_child("1").disabled is None
        assert all(o.disabled is None for o in item_b.children)

    def test_row_display_condition_and_stacking(self):
        """Row condition and stacking style reach the likert item."""
        cond = Expression("isDefined")
        rows = [LikertRow(key="a", content={"en": "A"}, display_condition=cond)]
        item = init_likert_scale_group("lsg", rows, SCALE, stack_on_small_screen=True).get_child("a")
        assert item.display_condition is cond
        assert item.style == (StyleEntry("responsive", "stackOnSmallScreen"),)

    def test_group_display_condition(self):
        """The group itself may carry a display condition."""
        cond = Expression("isDefined")
        assert init_likert_scale_group("lsg", ROWS, SCALE, display_condition=cond).display_condition is cond

    def test_empty_rows_or_scale(self):
        """Rows and scale options are required."""
        with pytest.raises(ConfigurationError):
            init_likert_scale_group("lsg", [], SCALE)
        with pytest.raises(ConfigurationError):
            init_likert_scale_group("lsg", ROWS, [])

    def test_duplicate_row_keys(self):
        """Row keys must be unique."""
        rows = [LikertRow(key="a", content={"en": "A"}), LikertRow(key="a", content={"en": "B"})]
        with pytest.raises(ConfigurationError):
            init_likert_scale_group("lsg", rows, SCALE)


class TestLikertItem:
    """Test a single likert item."""

    def test_options_in_order(self):
        """One option child per scale point, in order."""
        item = init_likert_scale_item("row", SCALE)
        assert item.role == Role.LIKERT
        assert item.child_keys() == ("1", "2", "3")
        assert all(c.role == Role.OPTION for c in item.children)

    def test_option_class_name(self):
        """Scale option class names become styles."""
        item = init_likert_scale_item("row", SCALE)
        assert item.get_child("2").style == (StyleEntry("className", "border-start"),)
        assert item.get_child("1").style == ()

    def test_no_stacking_by_default(self):
        """Items carry no style unless stacking is requested."""
        assert init_likert_scale_item("row", SCALE).style == ()
