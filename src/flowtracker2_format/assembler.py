"""
Discharge activity assembly.

Runs the record mappers over one measurement and collects their output
into a discharge activity plus the readings taken during the visit.
Nothing is handed to the results sink here, so a failure part-way
through never leaves a partial activity behind.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .mappers.base import Mapper, MapperContext
from .raw import RawMeasurement
from .records import (
    DischargeActivity,
    FieldVisit,
    ManualGaugingDischargeSection,
    Reading,
    UnitSystem,
)

logger = logging.getLogger(__name__)


@dataclass
class AssembledActivity:
    """
    Output of assembling one measurement.

    Attributes:
        activity: The discharge activity, channel measurement attached
        readings: Readings to append to the visit after the activity
        warnings: Non-fatal issues encountered while mapping
    """

    activity: DischargeActivity
    readings: list[Reading] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def section(self) -> ManualGaugingDischargeSection:
        """The manual gauging section of the activity."""
        return self.activity.channel_measurements[0]


class DischargeActivityAssembler:
    """
    Assembles a discharge activity from a raw measurement.

    Example:
        assembler = DischargeActivityAssembler()
        assembled = assembler.assemble(measurement, visit, unit_system)
        appender.add_discharge_activity(visit, assembled.activity)

    Attributes:
        mappers: Mapper instances, run in order
    """

    def __init__(self, mappers: Optional[list[Mapper]] = None):
        """
        Initialize the assembler.

        Args:
            mappers: Optional list of Mapper instances. If None, uses
                     the default mappers.
        """
        self.mappers = mappers or self._default_mappers()

    def _default_mappers(self) -> list[Mapper]:
        """
        Create the default mappers in processing order.

        Order matters: ManualGaugingMapper attaches to the activity that
        DischargeActivityMapper puts in the context.
        """
        from .mappers import (
            DischargeActivityMapper,
            ManualGaugingMapper,
            TemperatureReadingMapper,
        )

        return [
            DischargeActivityMapper(),
            ManualGaugingMapper(),
            TemperatureReadingMapper(),
        ]

    def assemble(
        self,
        measurement: RawMeasurement,
        visit: FieldVisit,
        unit_system: UnitSystem,
    ) -> AssembledActivity:
        """
        Assemble the discharge activity for a field visit.

        Raises:
            Any exception raised by a mapper; nothing is returned partially.
        """
        context = MapperContext(
            measurement=measurement,
            unit_system=unit_system,
            visit=visit,
        )
        readings: list[Reading] = []

        for mapper in self.mappers:
            block = mapper.map(context)
            if block is None:
                if mapper.is_required():
                    raise ValueError(f"Required record '{mapper.block_name}' was not produced")
                continue
            self._attach(mapper, block, context, readings)

        if context.activity is None:
            raise ValueError("No discharge activity was produced")

        for warning in context.warnings:
            logger.warning(warning)

        return AssembledActivity(
            activity=context.activity,
            readings=readings,
            warnings=context.warnings,
        )

    def _attach(
        self,
        mapper: Mapper,
        block: Any,
        context: MapperContext,
        readings: list[Reading],
    ) -> None:
        if isinstance(block, DischargeActivity):
            context.activity = block
        elif isinstance(block, ManualGaugingDischargeSection):
            if context.activity is None:
                raise ValueError(f"Mapper {mapper.block_name} ran before the discharge activity")
            context.activity.channel_measurements.append(block)
        elif isinstance(block, Reading):
            readings.append(block)
        else:
            raise TypeError(f"Mapper {mapper.block_name} produced unsupported {type(block).__name__}")
