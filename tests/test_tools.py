from unittest.mock import MagicMock

import pytest

from controlplane_mcp.clients.kubernetes import K8sClientError, K8sNotFoundError
from controlplane_mcp.clients.pods import PodAccessor
from controlplane_mcp.models.pods import PodIdentity
from controlplane_mcp.models.responses import ToolStatus
from controlplane_mcp.tools import GET_POD_EVENTS, GET_POD_LOGS, ToolDispatcher
from controlplane_mcp.tools.base import ArgumentError, optional_string, require_string

from .conftest import api_error


@pytest.fixture
def pod_accessor() -> MagicMock:
    return MagicMock(spec=PodAccessor)


@pytest.fixture
def dispatcher(pod_accessor) -> ToolDispatcher:
    return ToolDispatcher(pod_accessor)


class TestArguments:
    def test_require_string(self):
        assert require_string({"pod": "pod-1"}, "pod") == "pod-1"

    @pytest.mark.parametrize(
        "arguments",
        [None, {}, {"pod": None}, {"pod": 7}, {"pod": ""}],
    )
    def test_require_string_rejects(self, arguments):
        with pytest.raises(ArgumentError):
            require_string(arguments, "pod")

    def test_optional_string(self):
        assert optional_string({}, "container") is None
        assert optional_string({"container": ""}, "container") is None
        assert optional_string({"container": "app"}, "container") == "app"

        with pytest.raises(ArgumentError):
            optional_string({"container": ["app"]}, "container")


class TestListTools:
    def test_declares_both_tools(self, dispatcher):
        tools = {tool.name: tool for tool in dispatcher.list_tools()}

        assert set(tools) == {GET_POD_LOGS, GET_POD_EVENTS}
        for tool in tools.values():
            schema = tool.inputSchema
            assert schema["required"] == ["namespace", "pod"]
            assert set(schema["properties"]) == {"namespace", "pod", "container"}
            assert all(p["type"] == "string" for p in schema["properties"].values())


class TestGetPodLogs:
    def test_success_is_verbatim(self, dispatcher, pod_accessor):
        pod_accessor.get_logs.return_value = b"line 1\nline 2\n"

        result = dispatcher.call(GET_POD_LOGS, {"namespace": "default", "pod": "pod-1"})

        assert result.status == ToolStatus.SUCCESS
        assert result.text == "line 1\nline 2\n"
        pod_accessor.get_logs.assert_called_once_with(
            PodIdentity(namespace="default", name="pod-1"), container=None
        )

    def test_forwards_container(self, dispatcher, pod_accessor):
        pod_accessor.get_logs.return_value = b""

        dispatcher.call(
            GET_POD_LOGS,
            {"namespace": "default", "pod": "pod-1", "container": "sidecar"},
        )

        assert pod_accessor.get_logs.call_args.kwargs["container"] == "sidecar"

    def test_missing_namespace_is_in_band(self, dispatcher, pod_accessor):
        result = dispatcher.call(GET_POD_LOGS, {"pod": "pod-1"})

        assert result.is_error
        assert "namespace" in result.text
        pod_accessor.get_logs.assert_not_called()

    def test_accessor_failure_is_in_band(self, dispatcher, pod_accessor):
        pod_accessor.get_logs.side_effect = K8sClientError(
            "failed to read pod log stream: connection broken"
        )

        result = dispatcher.call(GET_POD_LOGS, {"namespace": "default", "pod": "pod-1"})

        assert result.is_error
        assert result.text == "failed to read pod log stream: connection broken"

    def test_invalid_utf8_is_replaced(self, dispatcher, pod_accessor):
        pod_accessor.get_logs.return_value = b"ok \xff\n"

        result = dispatcher.call(GET_POD_LOGS, {"namespace": "default", "pod": "pod-1"})

        assert result.text == "ok �\n"


class TestGetPodEvents:
    def test_success_is_verbatim(self, dispatcher, pod_accessor):
        payload = b'{"reason":"a"}{"reason":"b"}'
        pod_accessor.get_events.return_value = payload

        result = dispatcher.call(
            GET_POD_EVENTS,
            {"namespace": "default", "pod": "pod-1", "container": "ignored"},
        )

        assert not result.is_error
        assert result.text == payload.decode()
        pod_accessor.get_events.assert_called_once_with(
            PodIdentity(namespace="default", name="pod-1")
        )

    def test_pod_must_be_a_string(self, dispatcher, pod_accessor):
        result = dispatcher.call(GET_POD_EVENTS, {"namespace": "default", "pod": 1})

        assert result.is_error
        pod_accessor.get_events.assert_not_called()

    def test_not_found_is_in_band(self, dispatcher, pod_accessor):
        pod_accessor.get_events.side_effect = K8sNotFoundError(
            "failed to look up pod: Not Found"
        )

        result = dispatcher.call(GET_POD_EVENTS, {"namespace": "default", "pod": "pod-1"})

        assert result.is_error
        assert result.text == "failed to look up pod: Not Found"

    def test_unexpected_failure_is_in_band(self, dispatcher, pod_accessor):
        pod_accessor.get_events.side_effect = RuntimeError("boom")

        result = dispatcher.call(GET_POD_EVENTS, {"namespace": "default", "pod": "pod-1"})

        assert result.is_error
        assert result.text == "Unexpected error: boom"


def test_unknown_tool(dispatcher):
    result = dispatcher.call("delete_pod", {"namespace": "default", "pod": "pod-1"})

    assert result.is_error
    assert result.text == "Unknown tool: delete_pod"


def test_to_call_tool_result(dispatcher, pod_accessor):
    pod_accessor.get_logs.return_value = b"fake logs"

    ok = dispatcher.call(GET_POD_LOGS, {"namespace": "default", "pod": "pod-1"})
    err = dispatcher.call(GET_POD_LOGS, {})

    assert ok.to_call_tool_result().isError is False
    assert ok.to_call_tool_result().content[0].text == "fake logs"
    assert err.to_call_tool_result().isError is True


def test_multi_container_pod_error_names_containers(core_v1):
    core_v1.read_namespaced_pod_log.side_effect = api_error(
        400,
        "Bad Request",
        message=(
            "a container name must be specified for pod pod-1, "
            "choose one of: [app sidecar]"
        ),
    )
    dispatcher = ToolDispatcher(PodAccessor(core_v1))

    result = dispatcher.call(GET_POD_LOGS, {"namespace": "default", "pod": "pod-1"})

    assert result.is_error
    assert result.text.endswith("choose one of: [app sidecar]")
