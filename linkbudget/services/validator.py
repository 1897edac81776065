"""Validation of raw form values against the link budget field table."""

import math
import re
from typing import Mapping

from linkbudget.core.exceptions import InputValidationError
from linkbudget.core.schemas.link_budget import LINK_BUDGET_FIELDS, LinkBudgetInputs

# Plain decimal literal: optional sign, digits with optional fraction, optional exponent
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _format_bound(bound: float) -> str:
    return f"{bound:g}"


def validate(name: str, value: str, minimum: float, maximum: float) -> float:
    """
    Validate a single raw field value and return it as a float.

    Args:
        name: Display label used in error messages
        value: Raw submitted value
        minimum: Smallest accepted value (inclusive)
        maximum: Largest accepted value (inclusive)

    Returns:
        The parsed value

    Raises:
        InputValidationError: If the value is empty, not a decimal number in
            its entirety, or outside the bounds
    """
    if not value:
        raise InputValidationError(f"{name} is required.")

    if not _DECIMAL_PATTERN.fullmatch(value):
        raise InputValidationError(f"{name} must be a valid number.")

    number = float(value)
    if math.isinf(number):
        raise InputValidationError(f"{name} is out of range.")

    if number < minimum or number > maximum:
        raise InputValidationError(
            f"{name} must be between {_format_bound(minimum)} and {_format_bound(maximum)}."
        )
    return number


def validate_inputs(form: Mapping[str, str]) -> LinkBudgetInputs:
    """
    Validate every link budget field in table order.

    Validation stops at the first failing field; later fields are not
    inspected. Missing keys are treated as empty values.
    """
    values = {
        field.key: validate(field.label, form.get(field.key, ""), field.minimum, field.maximum)
        for field in LINK_BUDGET_FIELDS
    }
    return LinkBudgetInputs(**values)
