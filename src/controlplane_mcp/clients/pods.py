"""
Bounded, read-only access to a single pod's logs and events.

Example:
    ```python
    accessor = PodAccessor(load_core_v1(Settings()), AccessorConfig(max_events=5))
    identity = PodIdentity(namespace="default", name="my-pod")

    logs = accessor.get_logs(identity)
    events = accessor.get_events(identity)
    ```
"""

import json
import logging

from kubernetes import client
from kubernetes.client.exceptions import ApiException
from pydantic import ValidationError
from urllib3.exceptions import HTTPError
from urllib3.response import HTTPResponse

from controlplane_mcp.clients.kubernetes import K8sClientError, K8sNotFoundError
from controlplane_mcp.config import AccessorConfig
from controlplane_mcp.models.events import EventRecord
from controlplane_mcp.models.pods import PodIdentity

logger = logging.getLogger(__name__)


def _status_message(body: str | bytes | None) -> str | None:
    """Message of the Status object the API server returned, if any."""
    if not body:
        return None
    try:
        status = json.loads(body)
    except ValueError:
        return None
    if isinstance(status, dict) and isinstance(status.get("message"), str):
        return status["message"] or None
    return None


def _describe(exc: Exception) -> str:
    if isinstance(exc, ApiException):
        return _status_message(exc.body) or exc.reason or str(exc.status)
    return str(exc)


def _wrap(exc: Exception, context: str) -> K8sClientError:
    """Wrap a failed cluster call with a static context string."""
    message = f"{context}: {_describe(exc)}"
    if isinstance(exc, ApiException) and exc.status == 404:
        return K8sNotFoundError(message)
    return K8sClientError(message)


def escape_field_value(value: str) -> str:
    """Escape a value for use in an exact-match field selector term."""
    return value.replace("\\", "\\\\").replace(",", "\\,").replace("=", "\\=")


class PodAccessor:
    """
    Reads logs and events for a pod, bounded by an AccessorConfig.

    The accessor holds no per-call state and may be shared between
    concurrent requests.

    Args:
        core_v1: Core V1 API client.
        config: Output limits. Defaults apply if not provided.
    """

    def __init__(
        self,
        core_v1: client.CoreV1Api,
        config: AccessorConfig | None = None,
    ):
        self._core_v1 = core_v1
        self._config = config or AccessorConfig()

    @property
    def config(self) -> AccessorConfig:
        return self._config

    def get_logs(self, identity: PodIdentity, container: str | None = None) -> bytes:
        """
        Get the tail of a pod's log.

        Args:
            identity: Pod to read from.
            container: Container name. Required by the cluster for multi-container
                pods; may be omitted for single-container pods.

        Returns:
            The last max_log_lines lines of the log, exactly as streamed.

        Raises:
            K8sNotFoundError: If the pod or container doesn't exist.
            K8sClientError: If the stream cannot be opened or fully read.
        """
        try:
            stream = self._core_v1.read_namespaced_pod_log(
                name=identity.name,
                namespace=identity.namespace,
                container=container,
                tail_lines=self._config.max_log_lines,
                _preload_content=False,
            )
        except (ApiException, HTTPError) as e:
            raise _wrap(e, "failed to read data from pod log stream") from e

        try:
            return stream.read()
        except (HTTPError, OSError) as e:
            raise _wrap(e, "failed to read pod log stream") from e
        finally:
            self._release(stream)

    @staticmethod
    def _release(stream: HTTPResponse) -> None:
        try:
            stream.close()
        except (HTTPError, OSError) as e:
            logger.info("failed to close log stream: %s", e)
        finally:
            try:
                stream.release_conn()
            except (HTTPError, OSError) as e:
                logger.info("failed to release log stream connection: %s", e)

    def get_events(self, identity: PodIdentity) -> bytes:
        """
        Get events for a pod.

        Events are returned in the order the cluster lists them, stopping as
        soon as max_events records have been encoded. Records that cannot be
        encoded are skipped and do not count toward the limit.

        Args:
            identity: Pod to read events for.

        Returns:
            Concatenated compact JSON objects, one per event. Empty if the pod
            has no events.

        Raises:
            K8sNotFoundError: If the pod doesn't exist.
            K8sClientError: If the pod lookup or event listing fails.
        """
        try:
            pod = self._core_v1.read_namespaced_pod(
                name=identity.name,
                namespace=identity.namespace,
            )
        except (ApiException, HTTPError) as e:
            raise _wrap(e, "failed to look up pod") from e

        field_selector = f"involvedObject.name={escape_field_value(pod.metadata.name)}"
        try:
            event_list = self._core_v1.list_namespaced_event(
                namespace=identity.namespace,
                field_selector=field_selector,
            )
        except (ApiException, HTTPError) as e:
            raise _wrap(e, "failed to look up events for pod") from e

        encoded: list[str] = []
        for event in event_list.items:
            if len(encoded) >= self._config.max_events:
                break  # we have enough
            try:
                encoded.append(EventRecord.from_k8s(event).encode())
            except ValidationError as e:
                # Skip this event; the rest may still be useful.
                logger.info("failed to marshal event: %s", e)

        return "".join(encoded).encode("utf-8")
