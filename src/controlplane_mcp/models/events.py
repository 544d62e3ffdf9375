"""
Pydantic model for Kubernetes events returned to the caller.

An EventRecord is a trimmed projection of a CoreV1Event carrying only the
fields useful when diagnosing a pod. Every field is a string so the encoded
form is stable regardless of which fields the cluster populated: unset text
fields are empty and unset timestamps are the zero time.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ZERO_TIME = "0001-01-01 00:00:00 +0000 UTC"


def format_timestamp(value: datetime | None) -> str:
    """
    Render a Kubernetes timestamp as a human-readable string.

    Args:
        value: Timestamp from the API object, or None when unset.

    Returns:
        String such as "2025-01-02 03:04:05 +0000 UTC". An unset timestamp
        renders as the zero time, "0001-01-01 00:00:00 +0000 UTC".
    """
    if value is None:
        return ZERO_TIME

    rendered = value.strftime("%Y-%m-%d %H:%M:%S")
    if value.microsecond:
        rendered += f".{value.microsecond:06d}".rstrip("0")
    if value.tzinfo is not None:
        rendered += value.strftime(" %z %Z")
    return rendered


def format_group_version_kind(reference: Any) -> str:
    """
    Render an object reference as "group/version, Kind=kind".

    The core API group is empty, so a v1 Pod renders as "/v1, Kind=Pod".
    """
    if reference is None:
        return ""

    api_version = reference.api_version or ""
    group, _, version = api_version.rpartition("/")
    return f"{group}/{version}, Kind={reference.kind or ''}"


class EventRecord(BaseModel):
    """Kubernetes event information for a single pod."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    reason: str = Field(default="", description="Event reason code (e.g., Pulled, OOMKilled)")
    message: str = Field(default="", description="Human-readable event message")
    event_time: str = Field(default="", description="Time the event was first observed")
    action: str = Field(default="", description="Action taken or failed regarding the object")
    reporting_controller: str = Field(
        default="", description="Controller that emitted the event"
    )
    reporting_instance: str = Field(
        default="", description="Controller instance that emitted the event"
    )
    related: str = Field(
        default="", description="Group/version/kind of a secondary related object"
    )
    first_timestamp: str = Field(default="", description="First occurrence timestamp")
    last_timestamp: str = Field(default="", description="Most recent occurrence timestamp")

    @classmethod
    def from_k8s(cls, event: Any) -> "EventRecord":
        """
        Build a record from a CoreV1Event.

        Args:
            event: Event object as returned by the Kubernetes client.

        Returns:
            EventRecord with unset fields rendered as empty strings.

        Raises:
            pydantic.ValidationError: If a field holds a value that is not a string.
        """
        return cls(
            reason=event.reason or "",
            message=event.message or "",
            event_time=format_timestamp(event.event_time),
            action=event.action or "",
            reporting_controller=event.reporting_component or "",
            reporting_instance=event.reporting_instance or "",
            related=format_group_version_kind(event.related),
            first_timestamp=format_timestamp(event.first_timestamp),
            last_timestamp=format_timestamp(event.last_timestamp),
        )

    def encode(self) -> str:
        """Compact JSON encoding using the camelCase field names."""
        return self.model_dump_json(by_alias=True)
