"""Domain constants for form validation.

CATEGORIES is ordered: the first entry is the form's default selection.
"""

from typing import Tuple

CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Transportation",
    "Housing",
    "Utilities",
    "Entertainment",
    "Health",
    "Shopping",
    "Education",
    "Travel",
    "Other",
)

DEFAULT_CATEGORY: str = CATEGORIES[0]
