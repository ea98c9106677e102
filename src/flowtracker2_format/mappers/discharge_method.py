"""Discharge equation to discharge method mapping."""

from typing import Union

from ..constants import DischargeEquation, DischargeMethodType
from ..errors import UnsupportedConfigurationError


def map_discharge_equation(
    discharge_equation: Union[DischargeEquation, str],
) -> DischargeMethodType:
    """
    Map the instrument's discharge equation to a discharge method.

    Raises:
        UnsupportedConfigurationError: For any equation other than
            mean-section or mid-section
    """
    if discharge_equation == DischargeEquation.MEAN_SECTION:
        return DischargeMethodType.MEAN_SECTION

    if discharge_equation == DischargeEquation.MID_SECTION:
        return DischargeMethodType.MID_SECTION

    value = getattr(discharge_equation, "value", discharge_equation)
    raise UnsupportedConfigurationError(f"DischargeEquation='{value}' is not supported")
