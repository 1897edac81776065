"""Link budget field table and request/response schema definitions."""
from typing import NamedTuple, Tuple

from pydantic import BaseModel, ConfigDict, Field


class FieldSpec(NamedTuple):
    """Form key, display label and inclusive bounds of one input field"""

    key: str
    label: str
    minimum: float
    maximum: float


# Validation order is the order of this table
LINK_BUDGET_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("tx_power", "Transmit Power", -30, 60),
    FieldSpec("tx_gain", "Transmit Antenna Gain", -20, 50),
    FieldSpec("free_space_loss", "Free Space Loss", 0, 200),
    FieldSpec("misc_loss", "Miscellaneous Loss", 0, 50),
    FieldSpec("rx_gain", "Receiver Antenna Gain", -20, 50),
    FieldSpec("rx_loss", "Receiver Loss", 0, 50),
)


class LinkBudgetInputs(BaseModel):
    """Schema for the six validated link budget inputs (dB / dBm)"""

    tx_power: float = Field(..., ge=-30, le=60, description="Transmit power (dBm)")
    tx_gain: float = Field(..., ge=-20, le=50, description="Transmit antenna gain (dBi)")
    free_space_loss: float = Field(..., ge=0, le=200, description="Free-space path loss (dB)")
    misc_loss: float = Field(..., ge=0, le=50, description="Miscellaneous losses (dB)")
    rx_gain: float = Field(..., ge=-20, le=50, description="Receiver antenna gain (dBi)")
    rx_loss: float = Field(..., ge=0, le=50, description="Receiver losses (dB)")

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class LinkBudgetResult(BaseModel):
    """Schema for a calculation response"""

    received_power_dbm: float = Field(..., description="Received power rounded to 0.01 dBm")
