"""
Results sink and location resolver interfaces.

The converter hands its output to a ResultsAppender and resolves site
numbers through a LocationResolver. InMemoryResultsAppender implements both
and keeps everything it receives, which is what the CLI and the tests use.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from .errors import LocationNotFoundError
from .records import DischargeActivity, FieldVisit, FieldVisitDetails, LocationInfo, Reading
from .serialization import to_native
from .ulid import generate_ulid

logger = logging.getLogger(__name__)


class LocationResolver(Protocol):
    """Resolves a site identifier to a location."""

    def resolve_by_site_number(self, identifier: str) -> LocationInfo: ...


class ResultsAppender(Protocol):
    """Receives the records produced for one measurement."""

    def add_field_visit(self, location: LocationInfo, details: FieldVisitDetails) -> FieldVisit: ...

    def add_discharge_activity(self, visit: FieldVisit, activity: DischargeActivity) -> None: ...

    def add_reading(self, visit: FieldVisit, reading: Reading) -> None: ...


class StaticLocationResolver:
    """
    Resolves identifiers against a fixed set of known locations.

    With no known locations, any non-blank identifier resolves to a bare
    LocationInfo carrying that identifier.
    """

    def __init__(self, locations: Optional[Iterable[LocationInfo]] = None):
        self._locations = (
            {location.identifier: location for location in locations}
            if locations is not None
            else None
        )

    def resolve_by_site_number(self, identifier: str) -> LocationInfo:
        if not identifier or not identifier.strip():
            raise LocationNotFoundError("Site number is blank")

        identifier = identifier.strip()

        if self._locations is None:
            return LocationInfo(identifier=identifier)

        try:
            return self._locations[identifier]
        except KeyError:
            raise LocationNotFoundError(f"Unknown location '{identifier}'") from None


@dataclass
class VisitResults:
    """Everything appended to one field visit."""

    visit: FieldVisit
    discharge_activities: list[DischargeActivity] = field(default_factory=list)
    readings: list[Reading] = field(default_factory=list)


class InMemoryResultsAppender:
    """
    Results sink that keeps appended records in memory.

    Visit identities are ULIDs derived from the visit start time.

    Attributes:
        visits: Results per visit, in creation order
    """

    def __init__(self, location_resolver: Optional[LocationResolver] = None):
        self.visits: list[VisitResults] = []
        self._location_resolver = location_resolver or StaticLocationResolver()

    def resolve_by_site_number(self, identifier: str) -> LocationInfo:
        return self._location_resolver.resolve_by_site_number(identifier)

    def add_field_visit(self, location: LocationInfo, details: FieldVisitDetails) -> FieldVisit:
        visit = FieldVisit(
            visit_id=generate_ulid(details.period.start),
            location=location,
            period=details.period,
            party=details.party,
        )
        self.visits.append(VisitResults(visit=visit))
        logger.debug(f"Created field visit {visit.visit_id} at {location.identifier}")
        return visit

    def add_discharge_activity(self, visit: FieldVisit, activity: DischargeActivity) -> None:
        self._results_for(visit).discharge_activities.append(activity)

    def add_reading(self, visit: FieldVisit, reading: Reading) -> None:
        self._results_for(visit).readings.append(reading)

    def _results_for(self, visit: FieldVisit) -> VisitResults:
        for results in self.visits:
            if results.visit.visit_id == visit.visit_id:
                return results
        raise KeyError(f"Field visit {visit.visit_id} was not created by this appender")

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view of every visit and its records."""
        return {"visits": [to_native(results) for results in self.visits]}
