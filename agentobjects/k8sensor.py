"""Builders for the objects that back the Kubernetes sensor deployment."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from agentobjects.builder import ObjectBuilder
from agentobjects.constants import (
    BACKEND_KEY,
    COMPONENT_K8SENSOR,
    RBAC_API_GROUP,
    RBAC_API_VERSION,
    ROLE_KIND,
    SUBJECT_KIND,
    K8SensorBackend,
    reader_verbs,
)
from agentobjects.helpers import Helpers
from agentobjects.model import InstanaAgent
from agentobjects.transformations import PodSelectorLabelGenerator, pod_selector_labels


class _K8SensorObjectBuilder(ObjectBuilder):
    """Shared state of the sensor builders: the agent and its helpers."""

    def __init__(
        self, agent: Optional[InstanaAgent], helpers: Optional[Helpers] = None
    ) -> None:
        self.agent = agent if agent is not None else InstanaAgent()
        self.helpers = helpers if helpers is not None else Helpers(self.agent)


class ConfigMapBuilder(_K8SensorObjectBuilder):
    """Builds the config map listing the backends the sensor reports to."""

    def __init__(
        self,
        agent: Optional[InstanaAgent],
        backends: Iterable[K8SensorBackend] = (),
        helpers: Optional[Helpers] = None,
    ) -> None:
        super().__init__(agent, helpers)
        self.backends = list(backends)

    def component_name(self) -> str:
        return COMPONENT_K8SENSOR

    def is_namespaced(self) -> bool:
        return True

    def _data(self) -> dict[str, str]:
        return {
            BACKEND_KEY + backend.resource_suffix: f"{backend.endpoint_host}:{backend.endpoint_port}"
            for backend in self.backends
        }

    def build(self) -> Optional[dict[str, Any]]:
        return {
            "apiVersion": "v1",
            "kind": "ConfigMap",
            "metadata": {
                "name": self.helpers.k8s_sensor_resources_name(),
                "namespace": self.agent.namespace,
            },
            "data": self._data(),
        }


class PodDisruptionBudgetBuilder(_K8SensorObjectBuilder):
    """Builds a disruption budget when enabled and more than one replica runs."""

    def __init__(
        self,
        agent: Optional[InstanaAgent],
        helpers: Optional[Helpers] = None,
        label_generator: Optional[PodSelectorLabelGenerator] = None,
    ) -> None:
        super().__init__(agent, helpers)
        self.label_generator = (
            label_generator
            if label_generator is not None
            else pod_selector_labels(self.agent, COMPONENT_K8SENSOR)
        )

    def component_name(self) -> str:
        return COMPONENT_K8SENSOR

    def is_namespaced(self) -> bool:
        return True

    def build(self) -> Optional[dict[str, Any]]:
        sensor = self.agent.spec.k8s_sensor
        if not (sensor.pod_disruption_budget_enabled and sensor.replicas > 1):
            return None
        return {
            "apiVersion": "policy/v1",
            "kind": "PodDisruptionBudget",
            "metadata": {
                "name": self.helpers.k8s_sensor_resources_name(),
                "namespace": self.agent.namespace,
            },
            "spec": {
                "selector": {"matchLabels": self.label_generator.get_pod_selector_labels()},
                "minAvailable": sensor.replicas - 1,
            },
        }


class ClusterRoleBuilder(_K8SensorObjectBuilder):
    """Builds the cluster role granting the sensor read access to the cluster."""

    def component_name(self) -> str:
        return COMPONENT_K8SENSOR

    def is_namespaced(self) -> bool:
        return False

    def build(self) -> Optional[dict[str, Any]]:
        name = self.helpers.k8s_sensor_resources_name()
        return {
            "apiVersion": RBAC_API_VERSION,
            "kind": ROLE_KIND,
            "metadata": {"name": name},
            "rules": [
                {
                    "nonResourceURLs": ["/version", "/healthz"],
                    "verbs": ["get"],
                    "apiGroups": [],
                    "resources": [],
                },
                {
                    "apiGroups": ["extensions"],
                    "resources": ["deployments", "replicasets", "ingresses"],
                    "verbs": reader_verbs(),
                },
                {
                    "apiGroups": [""],
                    "resources": [
                        "configmaps",
                        "events",
                        "services",
                        "endpoints",
                        "namespaces",
                        "nodes",
                        "nodes/metrics",
                        "nodes/stats",
                        "nodes/proxy",
                        "pods",
                        "pods/log",
                        "replicationcontrollers",
                        "resourcequotas",
                        "persistentvolumes",
                        "persistentvolumeclaims",
                    ],
                    "verbs": reader_verbs(),
                },
                {
                    "apiGroups": ["apps"],
                    "resources": ["daemonsets", "deployments", "replicasets", "statefulsets"],
                    "verbs": reader_verbs(),
                },
                {
                    "apiGroups": ["batch"],
                    "resources": ["cronjobs", "jobs"],
                    "verbs": reader_verbs(),
                },
                {
                    "apiGroups": ["networking.k8s.io"],
                    "resources": ["ingresses"],
                    "verbs": reader_verbs(),
                },
                {
                    "apiGroups": ["autoscaling"],
                    "resources": ["horizontalpodautoscalers"],
                    "verbs": reader_verbs(),
                },
                {
                    "apiGroups": ["apps.openshift.io"],
                    "resources": ["deploymentconfigs"],
                    "verbs": reader_verbs(),
                },
                {
                    "apiGroups": ["security.openshift.io"],
                    "resourceNames": ["privileged"],
                    "resources": ["securitycontextconstraints"],
                    "verbs": ["use"],
                },
                {
                    "apiGroups": ["policy"],
                    "resourceNames": [name],
                    "resources": ["podsecuritypolicies"],
                    "verbs": ["use"],
                },
            ],
        }


class ClusterRoleBindingBuilder(_K8SensorObjectBuilder):
    """Binds the sensor cluster role to the sensor service account."""

    def component_name(self) -> str:
        return COMPONENT_K8SENSOR

    def is_namespaced(self) -> bool:
        return False

    def build(self) -> Optional[dict[str, Any]]:
        name = self.helpers.k8s_sensor_resources_name()
        return {
            "apiVersion": RBAC_API_VERSION,
            "kind": "ClusterRoleBinding",
            "metadata": {"name": name},
            "roleRef": {"apiGroup": RBAC_API_GROUP, "kind": ROLE_KIND, "name": name},
            "subjects": [
                {"kind": SUBJECT_KIND, "name": name, "namespace": self.agent.namespace}
            ],
        }


class ServiceAccountBuilder(_K8SensorObjectBuilder):
    """Builds the service account the sensor runs under."""

    def component_name(self) -> str:
        return COMPONENT_K8SENSOR

    def is_namespaced(self) -> bool:
        return True

    def build(self) -> Optional[dict[str, Any]]:
        return {
            "apiVersion": "v1",
            "kind": "ServiceAccount",
            "metadata": {
                "name": self.helpers.k8s_sensor_resources_name(),
                "namespace": self.agent.namespace,
            },
        }