"""
Survey Question Definition (qdefs) Package

Assembles declarative, hierarchical definitions of survey questions
(component tree, validations, display conditions, version) for an external
survey engine to render and evaluate.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Rendering
    - Expression evaluation
    - Persistence or transport

It builds in-memory SurveyItem values only.
serialization.py maps them onto the engine's schema.
"""

from .builder import NodeBuilder
from .errors import BuildError, ConfigurationError, UsageError
from .expressions import Expression, Literal, exp_with_args
from .item_builder import QuestionBuilder
from .keys import ChoiceGroupRole, DataType, Role
from .model import GroupNode, LeafNode, SurveyItem, ValidationRule, ValidationType
from .question_types import SURVEY_ITEM_GENERATORS

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "ChoiceGroupRole",
    "ConfigurationError",
    "DataType",
    "Expression",
    "GroupNode",
    "LeafNode",
    "Literal",
    "NodeBuilder",
    "QuestionBuilder",
    "Role",
    "SURVEY_ITEM_GENERATORS",
    "SurveyItem",
    "UsageError",
    "ValidationRule",
    "ValidationType",
    "exp_with_args",
]
