"""
Instrument file readers.

A reader turns a byte stream into a RawMeasurement, or reports which kind
of failure stopped it: a stream in some other format, a FlowTracker2
document with missing or broken structure, or anything else.

The bundled JsonMeasurementReader reads FlowTracker2 measurement exports:
JSON documents tagged ``"format": "flowtracker2-measurement"`` that mirror
the raw object graph of ``raw.py``.
"""

import json
import logging
import math
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Optional, Protocol, TypeVar, Union

import jsonschema

from .constants import SCHEMA_PATH_ENV, DischargeEquation, ReadErrorKind, StationType, VelocityMethod
from .errors import FormatMismatchError, MalformedContentError
from .raw import (
    Configuration,
    HandheldInfo,
    MeasurementCalculations,
    MeasurementProperties,
    PointMeasurement,
    ProbeInfo,
    RawMeasurement,
    Station,
    StationCalculations,
    Vector,
)

logger = logging.getLogger(__name__)

FORMAT_MARKER = "flowtracker2-measurement"
BUNDLED_SCHEMA_PATH = Path(__file__).parent / "schema" / "flowtracker2_measurement_v1.json"

E = TypeVar("E", bound=Enum)


@dataclass
class ReadOutcome:
    """
    Result of reading one stream.

    Exactly one of measurement or error_kind is set.
    """

    measurement: Optional[RawMeasurement] = None
    error_kind: Optional[ReadErrorKind] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, measurement: RawMeasurement) -> "ReadOutcome":
        return cls(measurement=measurement)

    @classmethod
    def failure(cls, error_kind: ReadErrorKind, error: BaseException) -> "ReadOutcome":
        return cls(error_kind=error_kind, error=error)

    @property
    def ok(self) -> bool:
        return self.error_kind is None


class InstrumentFileReader(Protocol):
    """Interface for readers producing raw FlowTracker2 measurements."""

    def read(self, stream: BinaryIO) -> ReadOutcome: ...


class JsonMeasurementReader:
    """
    Reads FlowTracker2 measurement exports.

    Attributes:
        schema_path: Optional custom path to the export JSON schema
    """

    def __init__(self, schema_path: Optional[Union[str, Path]] = None):
        self._schema: Optional[dict] = None
        self._schema_path = Path(schema_path) if schema_path else None

    def read(self, stream: BinaryIO) -> ReadOutcome:
        """Read a stream, reporting failures as a tagged outcome."""
        try:
            measurement = self.read_measurement(stream)
        except FormatMismatchError as e:
            return ReadOutcome.failure(ReadErrorKind.FORMAT_MISMATCH, e)
        except MalformedContentError as e:
            return ReadOutcome.failure(ReadErrorKind.MALFORMED_CONTENT, e)
        except Exception as e:
            return ReadOutcome.failure(ReadErrorKind.OTHER, e)

        return ReadOutcome.success(measurement)

    def read_measurement(self, stream: BinaryIO) -> RawMeasurement:
        """
        Read a stream into a RawMeasurement.

        Raises:
            FormatMismatchError: The stream is not a FlowTracker2 export
            MalformedContentError: The export is missing expected structure
        """
        document = self._load_document(stream)

        errors = self.validate(document)
        if errors:
            raise MalformedContentError(
                f"FlowTracker2 export failed schema validation: {'; '.join(errors[:5])}"
            )

        try:
            measurement = measurement_from_dict(document)
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedContentError(f"FlowTracker2 export is incomplete: {e!r}") from e

        if not measurement.stations:
            raise MalformedContentError("FlowTracker2 export contains no stations")

        handheld = measurement.handheld_info
        logger.info(
            f"Loaded {measurement.configuration.data_collection_mode}."
            f"{_enum_text(measurement.configuration.discharge_equation)} measurement from "
            f"{handheld.serial_number}/{handheld.cpu_serial_number}/{handheld.software_version}"
        )

        return measurement

    def _load_document(self, stream: BinaryIO) -> dict[str, Any]:
        content = stream.read()

        try:
            text = content.decode("utf-8") if isinstance(content, bytes) else content
            document = json.loads(text)
        except (ValueError, RecursionError) as e:
            raise FormatMismatchError("Stream is not a JSON document") from e

        if not isinstance(document, dict) or document.get("format") != FORMAT_MARKER:
            raise FormatMismatchError(f"JSON document is not tagged as '{FORMAT_MARKER}'")

        return document

    def validate(self, document: dict[str, Any]) -> list[str]:
        """
        Validate a document against the export JSON schema.

        Returns list of validation errors (empty if valid).
        """
        schema = self._load_schema()
        if schema is None:
            return []

        validator = jsonschema.Draft7Validator(schema)
        errors = []
        for error in validator.iter_errors(document):
            path = ".".join(str(p) for p in error.absolute_path)
            errors.append(f"{path}: {error.message}" if path else error.message)

        return errors

    def _load_schema(self) -> Optional[dict]:
        """
        Load the export JSON schema.

        Search order:
        1. Explicitly configured schema_path
        2. Environment variable FT2_SCHEMA_PATH
        3. Bundled schema in package
        """
        if self._schema is not None:
            return self._schema

        if self._schema_path and self._schema_path.exists():
            return self._load_schema_from_path(self._schema_path)

        env_path = os.environ.get(SCHEMA_PATH_ENV)
        if env_path:
            env_path_obj = Path(env_path)
            if env_path_obj.exists():
                return self._load_schema_from_path(env_path_obj)

        if BUNDLED_SCHEMA_PATH.exists():
            return self._load_schema_from_path(BUNDLED_SCHEMA_PATH)

        logger.warning(
            "Could not find FlowTracker2 export schema. Pass schema_path to "
            f"JsonMeasurementReader or set {SCHEMA_PATH_ENV} environment variable."
        )
        return None

    def _load_schema_from_path(self, path: Path) -> dict:
        with open(path) as f:
            self._schema = json.load(f)
        logger.debug(f"Loaded FlowTracker2 export schema from {path}")
        return self._schema


# -----------------------------------------------------------------------------
# Document -> raw object graph
# -----------------------------------------------------------------------------


def measurement_from_dict(document: dict[str, Any]) -> RawMeasurement:
    """Build a RawMeasurement from an export document."""
    properties = document["properties"]
    configuration = document["configuration"]
    calculations = document["calculations"]

    return RawMeasurement(
        properties=MeasurementProperties(
            site_number=properties["site_number"],
            operator=properties.get("operator"),
            comment=properties.get("comment"),
            start_time=_parse_datetime(properties["start_time"]),
            end_time=_parse_datetime(properties["end_time"]),
        ),
        handheld_info=_handheld_from_dict(document.get("handheld_info")),
        configuration=Configuration(
            data_collection_mode=configuration["data_collection_mode"],
            discharge_equation=_parse_enum(DischargeEquation, configuration["discharge_equation"]),
            units=configuration.get("units"),
        ),
        calculations=MeasurementCalculations(
            discharge=float(calculations["discharge"]),
            area=float(calculations["area"]),
            width=float(calculations["width"]),
            velocity=_vector_from_dict(calculations["velocity"]),
            gauge_height=_parse_float(calculations.get("gauge_height")),
            temperature=_parse_float(calculations.get("temperature")),
        ),
        stations=[_station_from_dict(station) for station in document["stations"]],
    )


def _station_from_dict(data: dict[str, Any]) -> Station:
    calculations = data["calculations"]

    return Station(
        station_type=StationType(data["station_type"]),
        location=float(data["location"]),
        creation_time=_parse_datetime(data["creation_time"]),
        comment=data.get("comment"),
        effective_depth=float(data["effective_depth"]),
        final_depth=float(data["final_depth"]),
        velocity_method=_parse_enum(VelocityMethod, data["velocity_method"]),
        calculations=StationCalculations(
            width=float(calculations["width"]),
            area=float(calculations["area"]),
            discharge=float(calculations["discharge"]),
            fraction_of_total_discharge=float(calculations["fraction_of_total_discharge"]),
            mean_velocity_in_vertical=_vector_from_dict(calculations["mean_velocity_in_vertical"]),
        ),
        water_surface_to_bottom_of_ice=_parse_float(data.get("water_surface_to_bottom_of_ice")),
        water_surface_to_bottom_of_slush=_parse_float(data.get("water_surface_to_bottom_of_slush")),
        ice_thickness=_parse_float(data.get("ice_thickness")),
        point_measurements=[_point_from_dict(point) for point in data.get("point_measurements", [])],
    )


def _point_from_dict(data: dict[str, Any]) -> PointMeasurement:
    probe = data.get("probe_info") or {}

    return PointMeasurement(
        fractional_depth=float(data["fractional_depth"]),
        start_time=_parse_datetime(data["start_time"]),
        end_time=_parse_datetime(data["end_time"]),
        velocity=_vector_from_dict(data["velocity"]),
        handheld_info=_handheld_from_dict(data.get("handheld_info")),
        probe_info=ProbeInfo(
            serial_number=probe.get("serial_number"),
            firmware_version=probe.get("firmware_version"),
        ),
    )


def _handheld_from_dict(data: Optional[dict[str, Any]]) -> HandheldInfo:
    data = data or {}
    return HandheldInfo(
        serial_number=data.get("serial_number"),
        cpu_serial_number=data.get("cpu_serial_number"),
        software_version=data.get("software_version"),
        firmware_version=data.get("firmware_version"),
        settings=dict(data.get("settings") or {}),
    )


def _vector_from_dict(data: dict[str, Any]) -> Vector:
    return Vector(
        x=float(data["x"]),
        y=float(data.get("y", 0.0)),
        z=float(data.get("z", 0.0)),
    )


def _parse_float(value: Any) -> float:
    """Convert an optional number; missing values become NaN."""
    if value is None:
        return math.nan
    return float(value)


def _parse_datetime(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp, treating naive values as UTC."""
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_enum(enum_type: type[E], value: str) -> Union[E, str]:
    """Convert to an enum member, keeping unrecognized values as plain strings."""
    try:
        return enum_type(value)
    except ValueError:
        logger.warning(f"Unrecognized {enum_type.__name__} '{value}'")
        return value


def _enum_text(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else str(value)
