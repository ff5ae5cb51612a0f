"""Query functionality: typed selector builder and evaluation."""

from personledger.core.query.models import Condition, Operator, Selector
from personledger.core.query.operations import employment_selector, matching_pairs

__all__ = [
    # Models
    "Selector",
    "Condition",
    "Operator",
    # Operations
    "employment_selector",
    "matching_pairs",
]
