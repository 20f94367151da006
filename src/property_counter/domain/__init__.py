from .checker import PropertyChecker, as_checker
from .errors import ElementEvaluationFailure, InvalidArgumentError, PropertyCounterError
from .results import CountResult, Partition, calculate_percentage

# Public domain exports keep imports explicit across layers.
__all__ = [
    "CountResult",
    "ElementEvaluationFailure",
    "InvalidArgumentError",
    "Partition",
    "PropertyChecker",
    "PropertyCounterError",
    "as_checker",
    "calculate_percentage",
]
