"""
Errors raised while assembling question definitions.

Every error is raised at construction time, before any document is handed
back to the caller. A build either returns a complete SurveyItem or raises.
"""


class BuildError(Exception):
    """Base class for all construction errors in qdefs."""
    pass


class ConfigurationError(BuildError):
    """
    Raised when caller-declared input cannot produce a valid tree.

    Examples:
        - empty option, row or scale lists
        - duplicate sibling keys
        - missing required fields (item key, parent key, question text)
        - property values that are neither numbers, strings nor expressions
    """
    pass


class UsageError(BuildError):
    """Raised when a builder is asked to do something its node kind cannot do."""
    pass
