"""Shared fixtures: a mocked CoreV1Api and real Kubernetes model objects."""

import json
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from kubernetes import client
from kubernetes.client.exceptions import ApiException

from controlplane_mcp.clients.pods import PodAccessor
from controlplane_mcp.config import AccessorConfig
from controlplane_mcp.models.pods import PodIdentity

NOW = datetime(2025, 6, 1, 12, 30, 0, tzinfo=timezone.utc)


def make_pod(name: str = "pod-1", namespace: str = "default") -> client.V1Pod:
    return client.V1Pod(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace),
    )


def make_event(
    name: str,
    pod: str = "pod-1",
    namespace: str = "default",
    **fields,
) -> client.CoreV1Event:
    return client.CoreV1Event(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace),
        involved_object=client.V1ObjectReference(kind="Pod", name=pod),
        **fields,
    )


def make_event_list(*events: client.CoreV1Event) -> client.CoreV1EventList:
    return client.CoreV1EventList(items=list(events))


def make_raw_event(reason) -> SimpleNamespace:
    """An event as listed, without client-side validation of its fields."""
    return SimpleNamespace(
        reason=reason,
        message="",
        event_time=None,
        action=None,
        reporting_component=None,
        reporting_instance=None,
        related=None,
        first_timestamp=None,
        last_timestamp=None,
    )


def api_error(status: int, reason: str, message: str | None = None) -> ApiException:
    """An ApiException carrying the Status body the API server sends."""
    exc = ApiException(status=status, reason=reason)
    if message is not None:
        exc.body = json.dumps(
            {"kind": "Status", "status": "Failure", "message": message, "code": status}
        )
    return exc


def decode_events(payload: bytes) -> list[dict]:
    """Decode back-to-back JSON objects."""
    decoder = json.JSONDecoder()
    text = payload.decode("utf-8")
    objects = []
    index = 0
    while index < len(text):
        obj, index = decoder.raw_decode(text, index)
        objects.append(obj)
    return objects


@pytest.fixture
def core_v1() -> MagicMock:
    return MagicMock(spec=client.CoreV1Api)


@pytest.fixture
def log_stream() -> MagicMock:
    stream = MagicMock()
    stream.read.return_value = b"fake logs"
    return stream


@pytest.fixture
def accessor(core_v1) -> PodAccessor:
    return PodAccessor(core_v1, AccessorConfig())


@pytest.fixture
def identity() -> PodIdentity:
    return PodIdentity(namespace="default", name="pod-1")
