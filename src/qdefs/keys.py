"""
Fixed keys, roles and constants shared by the question builders.

The survey engine locates components by key path (e.g. "rg.lsg.row1"), so
these values are part of the produced schema and must not change.
"""

from enum import Enum


# Component keys
ROOT_KEY = "root"
TITLE_KEY = "title"
HELP_GROUP_KEY = "helpGroup"
FOOTNOTE_KEY = "footnote"
RESPONSE_GROUP_KEY = "rg"
SINGLE_CHOICE_KEY = "scg"
MULTIPLE_CHOICE_KEY = "mcg"
DROPDOWN_KEY = "ddg"
LIKERT_SCALE_GROUP_KEY = "lsg"
NUMERIC_INPUT_KEY = "ni"
NUMERIC_SLIDER_KEY = "slider"
DATE_PICKER_KEY = "date"

# Validation keys
REQUIRED_VALIDATION_KEY = "r1"

# Styling
FOOTNOTE_CLASS_NAME = "fs-small fst-italic text-center"
LIKERT_LABEL_CLASS_NAME = "mb-1 fw-bold"
LIKERT_LABEL_SPACING_CLASS_NAME = " pt-1 mt-2"
LIKERT_LABEL_BORDER_CLASS_NAME = " border-top border-1 border-grey-2"
LIKERT_LABEL_VARIANT = "h6"
STACK_ON_SMALL_SCREEN = "stackOnSmallScreen"

# Length of keys generated for anonymous nodes
RANDOM_KEY_LENGTH = 4

# Duration units in seconds
SECONDS_PER_YEAR = 31536000
SECONDS_PER_MONTH = 2592000
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


class Role(Enum):
    """
    Component roles understood by the survey engine.

    The role decides both what the renderer draws and whether the component
    may hold children (see is_group).
    """

    # Item structure
    ROOT = "root"
    TITLE = "title"
    HELP_GROUP = "helpGroup"
    TEXT = "text"
    MARKDOWN = "markdown"
    FOOTNOTE = "footnote"
    RESPONSE_GROUP = "responseGroup"

    # Response groups
    SINGLE_CHOICE_GROUP = "singleChoiceGroup"
    MULTIPLE_CHOICE_GROUP = "multipleChoiceGroup"
    DROPDOWN_GROUP = "dropDownGroup"
    SLIDER_CATEGORICAL = "sliderCategorical"
    MATRIX = "matrix"
    LIKERT_GROUP = "likertGroup"
    LIKERT = "likert"
    EQ5D_HEALTH_INDICATOR = "eq5d-health-indicator"

    # Matrix rows
    HEADER_ROW = "headerRow"
    RADIO_ROW = "radioRow"
    RESPONSE_ROW = "responseRow"

    # Options and inputs
    OPTION = "option"
    INPUT = "input"
    MULTILINE_TEXT_INPUT = "multilineTextInput"
    NUMBER_INPUT = "numberInput"
    DATE = "date"
    LABEL = "label"
    CHECK = "check"
    SLIDER_NUMERIC = "sliderNumeric"
    DATE_INPUT = "dateInput"

    # EQ-5D widget parts
    INSTRUCTION = "instruction"
    VALUEBOX = "valuebox"
    MIN_TEXT = "mintext"
    MAX_TEXT = "maxtext"

    @property
    def is_group(self) -> bool:
        return self in GROUP_ROLES


GROUP_ROLES = frozenset({
    Role.ROOT,
    Role.HELP_GROUP,
    Role.RESPONSE_GROUP,
    Role.SINGLE_CHOICE_GROUP,
    Role.MULTIPLE_CHOICE_GROUP,
    Role.DROPDOWN_GROUP,
    Role.SLIDER_CATEGORICAL,
    Role.MATRIX,
    Role.LIKERT_GROUP,
    Role.LIKERT,
    Role.EQ5D_HEALTH_INDICATOR,
    Role.HEADER_ROW,
    Role.RADIO_ROW,
    Role.RESPONSE_ROW,
})


class ChoiceGroupRole(Enum):
    """Roles accepted by init_response_group."""
    SINGLE_CHOICE = Role.SINGLE_CHOICE_GROUP
    MULTIPLE_CHOICE = Role.MULTIPLE_CHOICE_GROUP
    DROPDOWN = Role.DROPDOWN_GROUP
    SLIDER_CATEGORICAL = Role.SLIDER_CATEGORICAL


class DataType(Enum):
    """Response data type tags attached to input options."""
    DATE = "date"
    NUMBER = "number"


# Every option role must appear here; None means untyped.
OPTION_DATA_TYPES = {
    Role.OPTION: None,
    Role.INPUT: None,
    Role.MULTILINE_TEXT_INPUT: None,
    Role.TEXT: None,
    Role.MARKDOWN: None,
    Role.DATE: DataType.DATE,
    Role.NUMBER_INPUT: DataType.NUMBER,
}

OPTION_ROLES = frozenset(OPTION_DATA_TYPES)
