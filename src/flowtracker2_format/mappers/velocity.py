"""
Velocity method classification.

Maps FlowTracker2 velocity sampling methods to standardized point velocity
observation methods, and picks the method used by most stations.
"""

import logging
from collections.abc import Iterable
from types import MappingProxyType
from typing import Union

from ..constants import PointVelocityObservationType, VelocityMethod
from ..raw import Station

logger = logging.getLogger(__name__)

VELOCITY_METHOD_MAP = MappingProxyType(
    {
        VelocityMethod.FIVE_TENTHS: PointVelocityObservationType.ONE_AT_POINT_FIVE,
        VelocityMethod.SIX_TENTHS: PointVelocityObservationType.ONE_AT_POINT_SIX,
        VelocityMethod.TWO_TENTHS_EIGHT_TENTHS: (
            PointVelocityObservationType.ONE_AT_POINT_TWO_AND_POINT_EIGHT
        ),
        VelocityMethod.TWO_TENTHS_SIX_TENTHS_EIGHT_TENTHS: (
            PointVelocityObservationType.ONE_AT_POINT_TWO_POINT_SIX_AND_POINT_EIGHT
        ),
        VelocityMethod.FIVE_POINT: PointVelocityObservationType.FIVE_POINT,
        VelocityMethod.SIX_POINT: PointVelocityObservationType.SIX_POINT,
    }
)


def map_velocity_method(
    velocity_method: Union[VelocityMethod, str],
) -> PointVelocityObservationType:
    """
    Map an instrument velocity method to its standardized equivalent.

    Methods without an equivalent map to UNKNOWN.
    """
    observation_type = VELOCITY_METHOD_MAP.get(velocity_method)
    if observation_type is None:
        logger.debug(f"No point velocity observation type for velocity method {velocity_method!r}")
        return PointVelocityObservationType.UNKNOWN
    return observation_type


def most_common_velocity_method(stations: Iterable[Station]) -> PointVelocityObservationType:
    """
    Find the velocity method used by the most stations.

    Ties go to the method seen first in station order.

    Raises:
        ValueError: If there are no stations
    """
    counts: dict[Union[VelocityMethod, str], int] = {}
    for station in stations:
        counts[station.velocity_method] = counts.get(station.velocity_method, 0) + 1

    if not counts:
        raise ValueError("Cannot pick a velocity method without any stations")

    # dicts keep insertion order, so max() returns the first method seen
    winner = max(counts, key=counts.__getitem__)
    return map_velocity_method(winner)
