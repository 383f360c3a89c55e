import json

import pytest

from agentobjects.model import AgentSpec, InstanaAgent, InstanaAgentSpec, TlsSpec
from agentobjects.volumes import Volume, VolumeBuilder

NUM_DEFINED_VOLUMES = 14


def all_volumes():
    return list(range(NUM_DEFINED_VOLUMES))


def unique_count(items):
    return len({json.dumps(item, sort_keys=True) for item in items})


def test_every_volume_enum_member_builds():
    volumes, mounts = VolumeBuilder(InstanaAgent(), False).build(*list(Volume))
    assert len(volumes) == NUM_DEFINED_VOLUMES - 2
    assert len(mounts) == NUM_DEFINED_VOLUMES - 2


def test_builds_are_unique():
    volumes, mounts = VolumeBuilder(InstanaAgent(), False).build(*all_volumes())
    assert len(volumes) == NUM_DEFINED_VOLUMES - 2
    assert len(mounts) == NUM_DEFINED_VOLUMES - 2
    assert unique_count(volumes) == len(volumes)
    assert unique_count(mounts) == len(mounts)


def test_unknown_volume_raises():
    with pytest.raises(ValueError, match="unknown volume requested"):
        VolumeBuilder(InstanaAgent(), False).build(9999)


@pytest.mark.parametrize("is_openshift, expected", [(True, 9), (False, 12)])
def test_build_counts(is_openshift, expected):
    volumes, mounts = VolumeBuilder(InstanaAgent(), is_openshift).build(*all_volumes())
    assert len(volumes) == expected
    assert len(mounts) == expected


@pytest.mark.parametrize("is_openshift", [True, False])
def test_build_from_user_config(is_openshift):
    agent = InstanaAgent(
        spec=InstanaAgentSpec(
            agent=AgentSpec(
                volumes=[{"name": "testVolume"}],
                volume_mounts=[{"name": "testVolume"}],
            )
        )
    )
    volumes, mounts = VolumeBuilder(agent, is_openshift).build_from_user_config()
    assert volumes[0]["name"] == "testVolume"
    assert mounts[0]["name"] == "testVolume"


def test_tls_volume_when_secret_name_set():
    agent = InstanaAgent(
        spec=InstanaAgentSpec(agent=AgentSpec(tls=TlsSpec(secret_name="very-secret")))
    )
    volumes, mounts = VolumeBuilder(agent, False).build(Volume.TLS)
    assert len(volumes) == 1
    assert len(mounts) == 1
    assert volumes[0]["name"] == "instana-agent-tls"
    assert volumes[0]["secret"] == {"secretName": "very-secret", "defaultMode": 0o440}
    assert mounts[0] == {
        "name": "instana-agent-tls",
        "mountPath": "/opt/instana/agent/etc/certs",
        "readOnly": True,
    }


def test_no_tls_volume_without_tls_settings():
    volumes, mounts = VolumeBuilder(InstanaAgent(), False).build(Volume.TLS)
    assert volumes == []
    assert mounts == []


def test_repository_volume():
    agent = InstanaAgent(
        spec=InstanaAgentSpec(agent=AgentSpec(host_repository="very-repository"))
    )
    volumes, mounts = VolumeBuilder(agent, False).build(Volume.REPO)
    assert volumes == [{"name": "repo", "hostPath": {"path": "very-repository"}}]
    assert mounts == [{"name": "repo", "mountPath": "/opt/instana/agent/data/repo"}]


def test_dev_volume_manifest():
    volumes, mounts = VolumeBuilder(InstanaAgent(), False).build(Volume.DEV)
    assert volumes == [{"name": "dev", "hostPath": {"path": "/dev"}}]
    assert mounts == [
        {"name": "dev", "mountPath": "/dev", "mountPropagation": "HostToContainer"}
    ]


def test_machine_id_has_no_propagation():
    _, mounts = VolumeBuilder(InstanaAgent(), False).build(Volume.MACHINE_ID)
    assert mounts == [{"name": "machine-id", "mountPath": "/etc/machine-id"}]


def test_kubo_volume_only_outside_openshift():
    volumes, _ = VolumeBuilder(InstanaAgent(), False).build(Volume.VAR_RUN_KUBO)
    assert volumes == [
        {
            "name": "var-run-kubo",
            "hostPath": {"path": "/var/vcap/sys/run/docker", "type": "DirectoryOrCreate"},
        }
    ]
    volumes, mounts = VolumeBuilder(InstanaAgent(), True).build(Volume.VAR_RUN_KUBO)
    assert volumes == []
    assert mounts == []


def test_config_volume_uses_agent_name():
    volumes, mounts = VolumeBuilder(InstanaAgent(name="agent"), True).build(Volume.CONFIG)
    assert volumes[0]["secret"]["secretName"] == "agent-config"
    assert mounts[0]["mountPath"] == "/opt/instana/agent/etc/instana-config-yml"


def test_order_follows_request():
    volumes, _ = VolumeBuilder(InstanaAgent(), False).build(Volume.SYS, Volume.DEV)
    assert [v["name"] for v in volumes] == ["sys", "dev"]