"""Test fixtures for flowtracker2-format tests."""

from .measurements import (
    END_TIME,
    HANDHELD_CPU_SERIAL,
    HANDHELD_SERIAL,
    PROBE_SERIAL,
    START_TIME,
    create_export_document,
    create_ice_station,
    create_measurement,
    create_point,
    create_station,
    create_wide_measurement,
)

__all__ = [
    "END_TIME",
    "HANDHELD_CPU_SERIAL",
    "HANDHELD_SERIAL",
    "PROBE_SERIAL",
    "START_TIME",
    "create_export_document",
    "create_ice_station",
    "create_measurement",
    "create_point",
    "create_station",
    "create_wide_measurement",
]
