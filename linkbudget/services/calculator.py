"""Received power arithmetic."""

from linkbudget.core.schemas.link_budget import LinkBudgetInputs


def calculate_received_power(
    tx_power: float,
    tx_gain: float,
    free_space_loss: float,
    misc_loss: float,
    rx_gain: float,
    rx_loss: float,
) -> float:
    """
    Compute received power in dBm, rounded to two decimal places.

    Rounding uses the built-in ``round``: ties are resolved to even on the
    exact binary value of the sum, so ``0.125`` becomes ``0.12`` while
    ``0.375`` becomes ``0.38``.
    """
    received_power = tx_power + tx_gain - free_space_loss - misc_loss + rx_gain - rx_loss
    return round(received_power, 2)


def calculate(inputs: LinkBudgetInputs) -> float:
    """Compute received power for a validated set of inputs."""
    return calculate_received_power(
        inputs.tx_power,
        inputs.tx_gain,
        inputs.free_space_loss,
        inputs.misc_loss,
        inputs.rx_gain,
        inputs.rx_loss,
    )


def format_dbm(value: float) -> str:
    """Two-decimal string form used in pages, logs and the session."""
    # Avoid rendering a negative zero as "-0.00"
    return f"{value + 0.0:.2f}"
