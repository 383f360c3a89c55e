"""Derived names and settings of an InstanaAgent."""

from __future__ import annotations

from typing import Any, Optional

from agentobjects.model import InstanaAgent

CONTAINERS_INSTANA_IO_REGISTRY = "containers.instana.io"


class Helpers:
    """Answers common questions about an agent resource."""

    def __init__(self, agent: InstanaAgent) -> None:
        self.agent = agent

    def service_account_name(self) -> str:
        spec = self.agent.spec.service_account
        if spec.name:
            return spec.name
        return self.agent.name if spec.create else "default"

    def tls_is_enabled(self) -> bool:
        tls = self.agent.spec.agent.tls
        return bool(tls.secret_name) or (bool(tls.certificate) and bool(tls.key))

    def tls_secret_name(self) -> str:
        return self.agent.spec.agent.tls.secret_name or f"{self.agent.name}-tls"

    def headless_service_name(self) -> str:
        return f"{self.agent.name}-headless"

    def k8s_sensor_resources_name(self) -> str:
        return f"{self.agent.name}-k8sensor"

    def containers_secret_name(self) -> str:
        return f"{self.agent.name}-containers-instana-io"

    def use_containers_secret(self) -> bool:
        """Use the generated pull secret only if the user omitted pull secrets
        entirely (an explicit empty list opts out) and the image is hosted on
        the containers registry."""
        spec = self.agent.spec.agent
        return spec.pull_secrets is None and spec.image_name.startswith(
            CONTAINERS_INSTANA_IO_REGISTRY
        )

    def image_pull_secrets(self) -> Optional[list[dict[str, Any]]]:
        if self.use_containers_secret():
            return [{"name": self.containers_secret_name()}]
        return self.agent.spec.agent.pull_secrets

    def sort_env_vars_by_name(self, env_vars: list[dict[str, Any]]) -> None:
        """Sort environment variable entries in place by their name."""
        env_vars.sort(key=lambda env_var: env_var["name"])