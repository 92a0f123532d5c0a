"""Metric points and their assembly from records."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from influxdb_client_3 import Point, WritePrecision


@dataclass(frozen=True)
class MetricPoint:
    """A tagged, timestamped observation ready for emission."""

    measurement: str
    tags: Mapping[str, str]
    fields: Mapping[str, Any]
    timestamp: int
    precision: str = field(default="ns")

    def __post_init__(self):
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def to_influx(self) -> Point:
        """Build the equivalent influxdb_client_3 Point."""
        point = Point(self.measurement)
        for key, value in self.tags.items():
            point.tag(key, value)
        for key, value in self.fields.items():
            point.field(key, value)
        return point.time(self.timestamp, WritePrecision.NS)

    def to_line_protocol(self) -> str:
        """Render as one line of InfluxDB line protocol."""
        return self.to_influx().to_line_protocol()

    def to_dict(self) -> dict[str, Any]:
        return {
            "measurement": self.measurement,
            "tags": dict(self.tags),
            "fields": dict(self.fields),
            "timestamp": self.timestamp,
            "precision": self.precision,
        }


def assemble_point(record: Any, mount: str, timestamp: int) -> MetricPoint:
    """
    Build the point for a record.

    Args:
        record: Any record variant from btrfsmon.core.records
        mount: Mount path the record was collected from
        timestamp: Shared nanosecond timestamp of the command invocation

    Returns:
        MetricPoint tagged with the mount and the record's identity tags
    """
    return MetricPoint(
        measurement=record.measurement,
        tags={"mount": mount, **record.tags()},
        fields=record.fields(),
        timestamp=timestamp,
    )
