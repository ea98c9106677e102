"""
Base mapper class and context for discharge activity conversion.

Provides the abstract interface that all mappers must implement,
along with a shared context for passing data between mappers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from ..raw import MeasurementCalculations, RawMeasurement, Station
from ..records import DischargeActivity, FieldVisit, UnitSystem


@dataclass
class MapperContext:
    """
    Shared context passed between mappers during conversion.

    Contains the raw measurement, the resolved unit system and the field
    visit the activity belongs to, and accumulates warnings during the
    conversion process.

    Attributes:
        measurement: The raw FlowTracker2 measurement
        unit_system: Unit identifiers resolved once per measurement
        visit: Field visit created by the results sink
        activity: Discharge activity, set once DischargeActivityMapper has run
        warnings: Non-fatal issues encountered during mapping
    """

    measurement: RawMeasurement
    unit_system: UnitSystem
    visit: FieldVisit
    activity: Optional[DischargeActivity] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def stations(self) -> list[Station]:
        """Shortcut to the ordered stations of the measurement."""
        return self.measurement.stations

    @property
    def calculations(self) -> MeasurementCalculations:
        """Shortcut to the instrument's aggregate calculations."""
        return self.measurement.calculations

    def add_warning(self, message: str) -> None:
        """Add a warning message to the context."""
        self.warnings.append(message)

    @property
    def has_warnings(self) -> bool:
        """Check if any warnings have been added."""
        return len(self.warnings) > 0


class Mapper(ABC):
    """
    Abstract base class for discharge activity mappers.

    Each mapper is responsible for converting a portion of the raw
    measurement into one output record.

    Subclasses must implement:
    - block_name: The name of the record the mapper produces
    - map(): The conversion logic

    Example:
        class TemperatureReadingMapper(Mapper):
            block_name = "temperature_reading"

            def map(self, context: MapperContext) -> Reading:
                return Reading(...)
    """

    @property
    @abstractmethod
    def block_name(self) -> str:
        """The name of the record this mapper produces."""
        pass

    @abstractmethod
    def map(self, context: MapperContext) -> Optional[Any]:
        """
        Map data from the context to an output record.

        Args:
            context: The shared MapperContext with source data

        Returns:
            The mapped record, or None if the record should be omitted
        """
        pass

    def is_required(self) -> bool:
        """
        Whether the record must be produced for the activity to be valid.

        Default is True; override for optional records.
        """
        return True
