"""
Matrix response group assembler.

A matrix is a group of rows; each row is a group of cells. Three closed
row kinds exist:

    HeaderRow    text cells only (column headers)
    RadioRow     label and option cells sharing one single-choice answer
    ResponseRow  heterogeneous cells: label, checkbox, text input,
                 number input or a nested dropdown

Row and cell-option display/disabled conditions are independent of each
other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from .builder import NodeBuilder
from .errors import ConfigurationError
from .expressions import Expression
from .generators import LocaleMap
from .keys import Role
from .model import GroupNode, Node
from .response_groups import OptionDef, build_option


class RadioCellRole(Enum):
    LABEL = Role.LABEL
    OPTION = Role.OPTION


class ResponseCellRole(Enum):
    LABEL = Role.LABEL
    CHECK = Role.CHECK
    INPUT = Role.INPUT
    NUMBER_INPUT = Role.NUMBER_INPUT
    DROPDOWN = Role.DROPDOWN_GROUP


@dataclass(frozen=True)
class HeaderCell:
    key: str
    content: Optional[LocaleMap] = None
    description: Optional[LocaleMap] = None


@dataclass(frozen=True)
class RadioCell:
    key: str
    role: RadioCellRole = RadioCellRole.OPTION
    content: Optional[LocaleMap] = None
    description: Optional[LocaleMap] = None


@dataclass(frozen=True)
class ResponseCell:
    """
    One cell of a response row.

    Properties:
        key: Cell key
        role: ResponseCellRole
        content: Label per locale
        description: Secondary text per locale
        properties: Raw property map, normalized like option properties
        items: Dropdown options; only valid for ResponseCellRole.DROPDOWN
    """

    key: str
    role: ResponseCellRole
    content: Optional[LocaleMap] = None
    description: Optional[LocaleMap] = None
    properties: Optional[Mapping[str, Any]] = None
    items: Sequence[OptionDef] = ()


@dataclass(frozen=True)
class HeaderRow:
    key: str
    cells: Sequence[HeaderCell] = field(default_factory=tuple)
    display_condition: Optional[Expression] = None
    disabled: Optional[Expression] = None


@dataclass(frozen=True)
class RadioRow:
    key: str
    cells: Sequence[RadioCell] = field(default_factory=tuple)
    display_condition: Optional[Expression] = None
    disabled: Optional[Expression] = None


@dataclass(frozen=True)
class ResponseRow:
    key: str
    cells: Sequence[ResponseCell] = field(default_factory=tuple)
    display_condition: Optional[Expression] = None
    disabled: Optional[Expression] = None


MatrixRow = Union[HeaderRow, RadioRow, ResponseRow]


def _cell_role(enum_cls, role, key: str):
    try:
        return enum_cls(role)
    except ValueError:
        raise ConfigurationError(f"Role {role!r} is not valid for matrix cell '{key}'") from None


def _header_cell(cell: HeaderCell) -> Node:
    return (
        NodeBuilder.for_role(Role.TEXT, cell.key)
        .with_content(cell.content)
        .with_description(cell.description)
        .snapshot()
    )


def _radio_cell(cell: RadioCell) -> Node:
    return (
        NodeBuilder.for_role(_cell_role(RadioCellRole, cell.role, cell.key).value, cell.key)
        .with_content(cell.content)
        .with_description(cell.description)
        .snapshot()
    )


def _response_cell(cell: ResponseCell) -> Node:
    role = _cell_role(ResponseCellRole, cell.role, cell.key)
    builder = (
        NodeBuilder.for_role(role.value, cell.key)
        .with_content(cell.content)
        .with_description(cell.description)
        .with_property_map(cell.properties)
    )
    if role is ResponseCellRole.DROPDOWN:
        if not cell.items:
            raise ConfigurationError(f"Dropdown cell '{cell.key}' needs at least one option")
        for item in cell.items:
            builder = builder.with_child(build_option(item))
    elif cell.items:
        raise ConfigurationError(f"Only dropdown cells take items (cell '{cell.key}' is {role.value.value})")
    return builder.snapshot()


def _build_row(row: MatrixRow) -> Node:
    if isinstance(row, HeaderRow):
        role, build_cell = Role.HEADER_ROW, _header_cell
    elif isinstance(row, RadioRow):
        role, build_cell = Role.RADIO_ROW, _radio_cell
    elif isinstance(row, ResponseRow):
        role, build_cell = Role.RESPONSE_ROW, _response_cell
    else:
        raise ConfigurationError(f"Unsupported matrix row type: {type(row).__name__}")

    builder = (
        NodeBuilder.for_role(role, row.key)
        .with_display_condition(row.display_condition)
        .with_disabled(row.disabled)
    )
    for cell in row.cells:
        builder = builder.with_child(build_cell(cell))
    return builder.snapshot()


def init_matrix_question(
    key: str,
    rows: Sequence[MatrixRow],
    order: Optional[Expression] = None,
) -> GroupNode:
    """
    Build a matrix response group.

    Args:
        key: Group key
        rows: Header, radio and response rows in display order
        order: Row order expression; "sequential" when None

    Returns:
        GroupNode with role matrix, one child per row
    """
    if not rows:
        raise ConfigurationError(f"Matrix '{key}' needs at least one row")
    builder = NodeBuilder.for_role(Role.MATRIX, key).with_order(order)
    for row in rows:
        builder = builder.with_child(_build_row(row))
    return builder.snapshot()
