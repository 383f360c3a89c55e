"""Data model of the InstanaAgent custom resource used by the object builders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class OpenTelemetry:
    """OpenTelemetry settings.

    ``enabled`` is the legacy switch for both protocols; ``grpc`` and ``http``
    override it per protocol. ``None`` means "not set".
    """

    enabled: Optional[bool] = None
    grpc: Optional[bool] = None
    http: Optional[bool] = None

    def _protocol_enabled(self, setting: Optional[bool]) -> bool:
        if setting is not None:
            return setting
        if self.enabled is not None:
            return self.enabled
        return True

    def grpc_is_enabled(self) -> bool:
        """Whether the gRPC (and legacy) OTLP endpoints are enabled."""
        return self._protocol_enabled(self.grpc)

    def http_is_enabled(self) -> bool:
        """Whether the HTTP OTLP endpoint is enabled."""
        return self._protocol_enabled(self.http)


@dataclass
class TlsSpec:
    """TLS settings of the agent."""

    secret_name: str = ""
    certificate: bytes = b""
    key: bytes = b""


@dataclass
class ServiceAccountSpec:
    """Service account settings; ``create`` is ``None`` when not set."""

    name: str = ""
    create: Optional[bool] = None


@dataclass
class AgentSpec:
    """Settings of the agent daemon itself.

    ``pull_secrets`` is ``None`` when omitted, which differs from an empty list.
    Pull secrets, volumes and volume mounts are Kubernetes manifest dicts.
    """

    endpoint_host: str = ""
    endpoint_port: str = ""
    image_name: str = ""
    pull_secrets: Optional[list[dict[str, Any]]] = None
    tls: TlsSpec = field(default_factory=TlsSpec)
    host_repository: str = ""
    volumes: list[dict[str, Any]] = field(default_factory=list)
    volume_mounts: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class K8sSensorSpec:
    """Settings of the Kubernetes sensor deployment."""

    replicas: int = 0
    pod_disruption_budget_enabled: Optional[bool] = None


@dataclass
class InstanaAgentSpec:
    """The spec section of an InstanaAgent resource."""

    agent: AgentSpec = field(default_factory=AgentSpec)
    k8s_sensor: K8sSensorSpec = field(default_factory=K8sSensorSpec)
    service_account: ServiceAccountSpec = field(default_factory=ServiceAccountSpec)
    open_telemetry: OpenTelemetry = field(default_factory=OpenTelemetry)


@dataclass
class Zone:
    """A named agent zone."""

    name: str = ""


@dataclass
class InstanaAgent:
    """An InstanaAgent resource: identifying metadata plus its spec."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    generation: int = 0
    api_version: str = ""
    kind: str = ""
    spec: InstanaAgentSpec = field(default_factory=InstanaAgentSpec)