"""JSON link budget calculation endpoint"""

from fastapi import APIRouter

from linkbudget.core.logging_config import get_calculation_logger
from linkbudget.core.schemas.link_budget import LinkBudgetInputs, LinkBudgetResult
from linkbudget.services.calculator import calculate, format_dbm

# Create router
router = APIRouter()


@router.post("/link-budget", response_model=LinkBudgetResult)
async def calculate_link_budget(inputs: LinkBudgetInputs) -> LinkBudgetResult:
    """
    Calculate received power from a JSON body of six numbers.

    Bounds are enforced by the request schema, so out-of-range values are
    rejected with 422 before any calculation. This endpoint is stateless and
    does not touch the caller's session.
    """
    received_power = calculate(inputs)
    get_calculation_logger().info(
        f"Calculation performed. Result: {format_dbm(received_power)} dBm"
    )
    return LinkBudgetResult(received_power_dbm=received_power)
