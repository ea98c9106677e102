"""
FlowTracker2 discharge converter.

Convert SonTek FlowTracker2 flow surveys to unit-aware discharge activity
records for hydrological data-management systems.

A measurement's stations become verticals of a manual gauging section,
the instrument's aggregates become the discharge activity, gauge height
and a mid-visit water temperature reading.

CLI usage::

    flowtracker2-format convert measurement.json --location 01234567
    flowtracker2-format validate measurement.json

Programmatic usage::

    from flowtracker2_format import DataFileConverter, InMemoryResultsAppender

    appender = InMemoryResultsAppender()
    converter = DataFileConverter(appender)

    with open("measurement.json", "rb") as f:
        result = converter.parse(f)
"""

__version__ = "0.1.0"

from .assembler import AssembledActivity, DischargeActivityAssembler
from .converter import DataFileConverter, ParseFileResult
from .reader import JsonMeasurementReader, ReadOutcome
from .sink import InMemoryResultsAppender, StaticLocationResolver

__all__ = [
    "AssembledActivity",
    "DataFileConverter",
    "DischargeActivityAssembler",
    "InMemoryResultsAppender",
    "JsonMeasurementReader",
    "ParseFileResult",
    "ReadOutcome",
    "StaticLocationResolver",
    "__version__",
]
