"""Agent ports and their service and container port manifests."""

from __future__ import annotations

from enum import Enum
from typing import Any

from agentobjects.model import InstanaAgent, OpenTelemetry


class InstanaAgentPort(str, Enum):
    """Named ports exposed by the agent."""

    AGENT_APIS = "agent-apis"
    OPEN_TELEMETRY_LEGACY = "otlp-legacy"
    OPEN_TELEMETRY_GRPC = "otlp-grpc"
    OPEN_TELEMETRY_HTTP = "otlp-http"

    def __str__(self) -> str:
        return self.value


AGENT_APIS_PORT_NUMBER = 42699
OPEN_TELEMETRY_LEGACY_PORT_NUMBER = 55680
OPEN_TELEMETRY_GRPC_PORT_NUMBER = 4317
OPEN_TELEMETRY_HTTP_PORT_NUMBER = 4318

_PORT_NUMBERS = {
    InstanaAgentPort.AGENT_APIS.value: AGENT_APIS_PORT_NUMBER,
    InstanaAgentPort.OPEN_TELEMETRY_LEGACY.value: OPEN_TELEMETRY_LEGACY_PORT_NUMBER,
    InstanaAgentPort.OPEN_TELEMETRY_GRPC.value: OPEN_TELEMETRY_GRPC_PORT_NUMBER,
    InstanaAgentPort.OPEN_TELEMETRY_HTTP.value: OPEN_TELEMETRY_HTTP_PORT_NUMBER,
}


def _port_name(port: str) -> str:
    return port.value if isinstance(port, InstanaAgentPort) else str(port)


def port_number(port: str) -> int:
    """Number of a named port; raises ValueError for unknown ports."""
    try:
        return _PORT_NUMBERS[_port_name(port)]
    except KeyError:
        raise ValueError("unknown port requested") from None


def port_is_enabled(port: str, open_telemetry: OpenTelemetry) -> bool:
    """Whether the port is exposed under the given OpenTelemetry settings."""
    name = _port_name(port)
    if name in (
        InstanaAgentPort.OPEN_TELEMETRY_LEGACY.value,
        InstanaAgentPort.OPEN_TELEMETRY_GRPC.value,
    ):
        return open_telemetry.grpc_is_enabled()
    if name == InstanaAgentPort.OPEN_TELEMETRY_HTTP.value:
        return open_telemetry.http_is_enabled()
    return True


def _service_port(port: str) -> dict[str, Any]:
    name = _port_name(port)
    return {
        "name": name,
        "protocol": "TCP",
        "port": port_number(port),
        "targetPort": name,
    }


def _container_port(port: str) -> dict[str, Any]:
    return {
        "name": _port_name(port),
        "containerPort": port_number(port),
        "protocol": "TCP",
    }


class PortsBuilder:
    """Builds port entries for the ports enabled on an agent."""

    def __init__(self, agent: InstanaAgent) -> None:
        self.agent = agent

    def _enabled(self, ports: tuple[str, ...]) -> list[str]:
        otel = self.agent.spec.open_telemetry
        return [port for port in ports if port_is_enabled(port, otel)]

    def get_service_ports(self, *args: str) -> list[dict[str, Any]]:
        return [_service_port(port) for port in self._enabled(args)]

    def get_container_ports(self, *args: str) -> list[dict[str, Any]]:
        return [_container_port(port) for port in self._enabled(args)]