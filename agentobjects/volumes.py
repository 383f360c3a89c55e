"""Host, config, TLS and repository volumes for the agent pods."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional

from agentobjects.helpers import Helpers
from agentobjects.model import InstanaAgent

INSTANA_CONFIG_DIRECTORY = "/opt/instana/agent/etc/instana-config-yml"
TLS_MOUNT_PATH = "/opt/instana/agent/etc/certs"
REPO_MOUNT_PATH = "/opt/instana/agent/data/repo"

MOUNT_PROPAGATION_HOST_TO_CONTAINER = "HostToContainer"
HOST_PATH_DIRECTORY_OR_CREATE = "DirectoryOrCreate"
SECRET_DEFAULT_MODE = 0o440

VolumePair = tuple[Optional[dict[str, Any]], Optional[dict[str, Any]]]


class Volume(IntEnum):
    """Volumes that can be requested from a VolumeBuilder."""

    DEV = 0
    RUN = 1
    VAR_RUN = 2
    VAR_RUN_KUBO = 3
    VAR_RUN_CONTAINERD = 4
    VAR_CONTAINERD_CONFIG = 5
    SYS = 6
    VAR_LOG = 7
    VAR_LIB = 8
    VAR_DATA = 9
    MACHINE_ID = 10
    CONFIG = 11
    TLS = 12
    REPO = 13


def _host_volume(
    name: str,
    path: str,
    mount_propagation: Optional[str] = None,
    host_path_type: Optional[str] = None,
) -> VolumePair:
    host_path: dict[str, Any] = {"path": path}
    if host_path_type is not None:
        host_path["type"] = host_path_type
    volume = {"name": name, "hostPath": host_path}
    mount: dict[str, Any] = {"name": name, "mountPath": path}
    if mount_propagation is not None:
        mount["mountPropagation"] = mount_propagation
    return volume, mount


def _secret_volume(name: str, reference: str) -> dict[str, Any]:
    """A volume backed by the Kubernetes Secret named by ``reference``."""
    source = dict(secretName=reference, defaultMode=SECRET_DEFAULT_MODE)
    return dict(name=name, secret=source)


class VolumeBuilder:
    """Builds volume and volume mount manifests for an agent."""

    def __init__(self, agent: InstanaAgent, is_openshift: bool = False) -> None:
        self.agent = agent
        self.helpers = Helpers(agent)
        self.is_not_openshift = not is_openshift

    def build(self, *args: int) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        """Volumes and mounts for the requested entries, skipping inapplicable ones.

        Raises ValueError for an unknown volume.
        """
        volumes: list[dict[str, Any]] = []
        mounts: list[dict[str, Any]] = []
        for requested in args:
            volume, mount = self._volume_for(requested)
            if volume is not None:
                volumes.append(volume)
            if mount is not None:
                mounts.append(mount)
        return volumes, mounts

    def build_from_user_config(self) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        """The volumes and mounts the user configured on the agent pod."""
        spec = self.agent.spec.agent
        return spec.volumes, spec.volume_mounts

    def _volume_for(self, requested: int) -> VolumePair:
        try:
            volume = Volume(requested)
        except ValueError:
            raise ValueError("unknown volume requested") from None

        propagate = MOUNT_PROPAGATION_HOST_TO_CONTAINER
        mkdir = HOST_PATH_DIRECTORY_OR_CREATE

        if volume is Volume.DEV:
            return _host_volume("dev", "/dev", propagate)
        if volume is Volume.RUN:
            return _host_volume("run", "/run", propagate)
        if volume is Volume.VAR_RUN:
            return _host_volume("var-run", "/var/run", propagate)
        if volume is Volume.VAR_RUN_KUBO:
            return self._unless_openshift(
                "var-run-kubo", "/var/vcap/sys/run/docker", propagate, mkdir
            )
        if volume is Volume.VAR_RUN_CONTAINERD:
            return self._unless_openshift(
                "var-run-containerd", "/var/vcap/sys/run/containerd", propagate, mkdir
            )
        if volume is Volume.VAR_CONTAINERD_CONFIG:
            return self._unless_openshift(
                "var-containerd-config", "/var/vcap/jobs/containerd/config", propagate, mkdir
            )
        if volume is Volume.SYS:
            return _host_volume("sys", "/sys", propagate)
        if volume is Volume.VAR_LOG:
            return _host_volume("var-log", "/var/log", propagate)
        if volume is Volume.VAR_LIB:
            return _host_volume("var-lib", "/var/lib", propagate)
        if volume is Volume.VAR_DATA:
            return _host_volume("var-data", "/var/data", propagate, mkdir)
        if volume is Volume.MACHINE_ID:
            return _host_volume("machine-id", "/etc/machine-id")
        if volume is Volume.CONFIG:
            return self._config_volume()
        if volume is Volume.TLS:
            return self._tls_volume()
        return self._repo_volume()

    def _unless_openshift(
        self, name: str, path: str, mount_propagation: str, host_path_type: str
    ) -> VolumePair:
        if self.is_not_openshift:
            return _host_volume(name, path, mount_propagation, host_path_type)
        return None, None

    def _config_volume(self) -> VolumePair:
        name = "config"
        config_reference = self.agent.name + "-config"
        volume = _secret_volume(name, config_reference)
        mount = {"name": name, "mountPath": INSTANA_CONFIG_DIRECTORY}
        return volume, mount

    def _tls_volume(self) -> VolumePair:
        if not self.helpers.tls_is_enabled():
            return None, None
        name = "instana-agent-tls"
        volume = _secret_volume(name, self.helpers.tls_secret_name())
        mount = {"name": name, "mountPath": TLS_MOUNT_PATH, "readOnly": True}
        return volume, mount

    def _repo_volume(self) -> VolumePair:
        repository = self.agent.spec.agent.host_repository
        if not repository:
            return None, None
        name = "repo"
        volume = {"name": name, "hostPath": {"path": repository}}
        mount = {"name": name, "mountPath": REPO_MOUNT_PATH}
        return volume, mount