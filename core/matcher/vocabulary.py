"""
Shared vocabulary for profile and scholarship text rendering.

Both encoders bucket income with the same thresholds so profile and
scholarship embeddings describe the same bracket in comparable words.
"""
from typing import Optional

# Upper bounds (inclusive) per bracket, ascending
INCOME_BRACKETS = (
    (100000, "economically_weaker"),
    (250000, "low"),
    (500000, "lower_middle"),
    (800000, "middle"),
)

CATEGORY_NAMES = {
    'SC': 'Scheduled Caste (SC)',
    'ST': 'Scheduled Tribe (ST)',
    'OBC': 'Other Backward Class (OBC)',
    'General': 'General category',
    'EWS': 'Economically Weaker Section (EWS)',
}

# Rendering order for scholarship category clauses
CATEGORY_ORDER = ('SC', 'ST', 'OBC', 'General', 'EWS')


def income_bracket(amount: int) -> Optional[str]:
    """Return the bracket key for an annual income, or None above the top bracket."""
    for upper_bound, bracket in INCOME_BRACKETS:
        if amount <= upper_bound:
            return bracket
    return None


def format_inr(amount: int) -> str:
    """Format an amount with Indian digit grouping: 250000 -> '2,50,000'."""
    sign = '-' if amount < 0 else ''
    digits = str(abs(int(amount)))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ','.join(groups + [tail])
