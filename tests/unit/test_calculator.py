"""
Unit tests for the received power calculation
"""

import pytest

from linkbudget.core.schemas.link_budget import LinkBudgetInputs
from linkbudget.services.calculator import calculate, calculate_received_power, format_dbm

pytestmark = pytest.mark.unit


class TestCalculateReceivedPower:

    def test_reference_case(self):
        assert calculate_received_power(10, 5, 100, 2, 3, 1) == -85.00

    def test_end_to_end_values(self):
        assert calculate_received_power(20, 10, 90, 1, 5, 0) == -56.00

    def test_gains_add_and_losses_subtract(self):
        assert calculate_received_power(0, 1, 0, 0, 0, 0) == 1
        assert calculate_received_power(0, 0, 0, 0, 1, 0) == 1
        assert calculate_received_power(0, 0, 1, 0, 0, 0) == -1
        assert calculate_received_power(0, 0, 0, 1, 0, 0) == -1
        assert calculate_received_power(0, 0, 0, 0, 0, 1) == -1

    def test_rounds_to_two_decimals(self):
        assert calculate_received_power(10.123, 0, 0, 0, 0, 0) == 10.12
        assert calculate_received_power(10.127, 0, 0, 0, 0, 0) == 10.13

    def test_ties_round_half_to_even(self):
        # 0.125 and 0.375 are exact binary values, so the tie rule is visible
        assert calculate_received_power(0.125, 0, 0, 0, 0, 0) == 0.12
        assert calculate_received_power(0.375, 0, 0, 0, 0, 0) == 0.38

    def test_calculate_from_inputs(self):
        inputs = LinkBudgetInputs(
            tx_power=10, tx_gain=5, free_space_loss=100, misc_loss=2, rx_gain=3, rx_loss=1
        )
        assert calculate(inputs) == -85.00


class TestFormatDbm:

    @pytest.mark.parametrize("value, expected", [
        (-56.0, "-56.00"),
        (12.5, "12.50"),
        (0.0, "0.00"),
        (-0.0, "0.00"),
        (-85.0, "-85.00"),
    ])
    def test_two_decimal_form(self, value, expected):
        assert format_dbm(value) == expected
