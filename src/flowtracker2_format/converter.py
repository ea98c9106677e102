"""
FlowTracker2 Data File Converter - Main orchestration.

This module provides the DataFileConverter class which reads one
FlowTracker2 measurement, assembles its discharge activity and hands the
results to a results sink, reporting one of three outcomes:

- CannotParse: the stream is not a FlowTracker2 measurement; another
  plugin may try it
- SuccessfullyParsedButDataInvalid: the stream is a FlowTracker2
  measurement but could not be converted
- SuccessfullyParsedAndDataValid: the results were appended
"""

import logging
import os
from typing import Any, BinaryIO, Optional

from .assembler import DischargeActivityAssembler
from .constants import MALFORMED_AS_INVALID_ENV, ParseStatus, ReadErrorKind
from .errors import ErrorDetail, log_error_chain
from .mappers.units import create_unit_system
from .raw import RawMeasurement
from .reader import InstrumentFileReader, JsonMeasurementReader
from .records import DateTimeInterval, FieldVisit, FieldVisitDetails, LocationInfo
from .sink import LocationResolver, ResultsAppender

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ParseFileResult:
    """
    Outcome of parsing one measurement file.

    Attributes:
        status: Terminal outcome
        error: The exception that made the data invalid, if any
        error_details: Structured error info with tracebacks, outermost first
        visit: The field visit created for the measurement, if any
        warnings: Non-fatal issues encountered
    """

    def __init__(
        self,
        status: ParseStatus,
        error: Optional[BaseException] = None,
        visit: Optional[FieldVisit] = None,
        warnings: Optional[list[str]] = None,
    ):
        self.status = status
        self.error = error
        self.visit = visit
        self.warnings = warnings or []
        self.error_details: list[dict[str, Any]] = (
            ErrorDetail.from_exception(error).to_dicts() if error is not None else []
        )

    @classmethod
    def cannot_parse(cls, error: Optional[BaseException] = None) -> "ParseFileResult":
        return cls(ParseStatus.CANNOT_PARSE, error=error)

    @classmethod
    def parsed_but_invalid(
        cls, error: BaseException, visit: Optional[FieldVisit] = None
    ) -> "ParseFileResult":
        return cls(ParseStatus.PARSED_BUT_INVALID, error=error, visit=visit)

    @classmethod
    def parsed_and_valid(
        cls, visit: FieldVisit, warnings: Optional[list[str]] = None
    ) -> "ParseFileResult":
        return cls(ParseStatus.SUCCESSFULLY_PARSED_VALID, visit=visit, warnings=warnings)

    @property
    def parsed(self) -> bool:
        """Whether the stream was recognized as a FlowTracker2 measurement."""
        return self.status != ParseStatus.CANNOT_PARSE

    @property
    def is_valid(self) -> bool:
        return self.status == ParseStatus.SUCCESSFULLY_PARSED_VALID

    def __repr__(self) -> str:
        return f"ParseFileResult(status={self.status.value!r}, error={self.error!r})"


class DataFileConverter:
    """
    Converts FlowTracker2 measurements and appends them to a results sink.

    Example:
        appender = InMemoryResultsAppender()
        converter = DataFileConverter(appender)

        with open("measurement.json", "rb") as f:
            result = converter.parse(f)

        if not result.is_valid:
            print("Errors:", result.error_details)

    Attributes:
        results_appender: Sink receiving the visit, activity and readings
        location_resolver: Resolves site numbers when no location is given
        reader: Instrument file reader
        assembler: Discharge activity assembler
        malformed_as_invalid: Report malformed FlowTracker2 content as
            parsed-but-invalid instead of cannot-parse
    """

    def __init__(
        self,
        results_appender: ResultsAppender,
        location_resolver: Optional[LocationResolver] = None,
        reader: Optional[InstrumentFileReader] = None,
        assembler: Optional[DischargeActivityAssembler] = None,
        malformed_as_invalid: Optional[bool] = None,
    ):
        """
        Initialize the converter.

        Args:
            results_appender: Sink for the converted records
            location_resolver: Optional resolver. If None, the results
                appender is used as the resolver.
            reader: Optional reader. If None, uses JsonMeasurementReader.
            assembler: Optional assembler. If None, uses the default mappers.
            malformed_as_invalid: If None, read from FT2_MALFORMED_AS_INVALID
        """
        self.results_appender = results_appender
        self.location_resolver = location_resolver or results_appender
        self.reader = reader or JsonMeasurementReader()
        self.assembler = assembler or DischargeActivityAssembler()

        if malformed_as_invalid is None:
            env_value = os.environ.get(MALFORMED_AS_INVALID_ENV, "")
            malformed_as_invalid = env_value.strip().lower() in _TRUE_VALUES
        self.malformed_as_invalid = malformed_as_invalid

    def parse(self, stream: BinaryIO, location: Optional[LocationInfo] = None) -> ParseFileResult:
        """
        Parse one measurement stream and append its results.

        Args:
            stream: Binary stream of the measurement file
            location: Optional location. If None, the measurement's site
                      number is resolved through the location resolver.

        Returns:
            ParseFileResult with the outcome
        """
        outcome = self.reader.read(stream)

        if outcome.error_kind == ReadErrorKind.FORMAT_MISMATCH:
            log_error_chain(logger, "Not a FlowTracker2 measurement", outcome.error)
            return ParseFileResult.cannot_parse(outcome.error)

        if outcome.error_kind == ReadErrorKind.MALFORMED_CONTENT:
            log_error_chain(logger, "Malformed FlowTracker2 measurement", outcome.error)
            if self.malformed_as_invalid:
                return ParseFileResult.parsed_but_invalid(outcome.error)
            return ParseFileResult.cannot_parse(outcome.error)

        if outcome.error_kind is not None:
            log_error_chain(logger, "Reading error", outcome.error)
            return ParseFileResult.parsed_but_invalid(outcome.error)

        return self.append_results(outcome.measurement, location)

    def append_results(
        self, measurement: RawMeasurement, location: Optional[LocationInfo] = None
    ) -> ParseFileResult:
        """
        Assemble a measurement's discharge activity and append it.

        The activity and readings are fully assembled before anything other
        than the field visit is appended, so a failure never leaves a
        partial activity in the sink.
        """
        visit: Optional[FieldVisit] = None

        try:
            if location is None:
                location = self.location_resolver.resolve_by_site_number(
                    measurement.properties.site_number
                )

            unit_system = create_unit_system(measurement)

            visit = self._create_visit(measurement, location)

            assembled = self.assembler.assemble(measurement, visit, unit_system)

            self.results_appender.add_discharge_activity(visit, assembled.activity)

            for reading in assembled.readings:
                self.results_appender.add_reading(visit, reading)
        except Exception as e:
            log_error_chain(logger, "Parsing error", e)
            return ParseFileResult.parsed_but_invalid(e, visit=visit)

        logger.info(
            f"Appended discharge activity with {len(assembled.section.verticals)} verticals "
            f"to visit {visit.visit_id} at {location.identifier}"
        )
        return ParseFileResult.parsed_and_valid(visit, warnings=assembled.warnings)

    def _create_visit(self, measurement: RawMeasurement, location: LocationInfo) -> FieldVisit:
        properties = measurement.properties
        details = FieldVisitDetails(
            period=DateTimeInterval(properties.start_time, properties.end_time),
            party=properties.operator,
        )
        return self.results_appender.add_field_visit(location, details)
