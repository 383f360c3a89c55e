"""Shared constants of the object builders."""

from __future__ import annotations

from dataclasses import dataclass

# components
COMPONENT_INSTANA_AGENT = "instana-agent"
COMPONENT_K8SENSOR = "k8sensor"

# labels
LABEL_AGENT_MODE = "instana/agent-mode"

# keys
AGENT_KEY = "key"
DOWNLOAD_KEY = "downloadKey"
BACKEND_KEY = "backend"

# rbac
RBAC_API_GROUP = "rbac.authorization.k8s.io"
RBAC_API_VERSION = RBAC_API_GROUP + "/v1"
ROLE_KIND = "ClusterRole"
SUBJECT_KIND = "ServiceAccount"


def reader_verbs() -> list[str]:
    """RBAC verbs that grant read access to a resource."""
    return ["get", "list", "watch"]


@dataclass
class K8SensorBackend:
    """A backend the Kubernetes sensor reports to."""

    resource_suffix: str = ""
    endpoint_key: str = ""
    download_key: str = ""
    endpoint_host: str = ""
    endpoint_port: str = ""