import pytest

from agentobjects.model import InstanaAgent, Zone
from agentobjects.transformations import (
    Transformations,
    pod_selector_labels,
)

DEFAULT_POD_LABELS = {
    "app.kubernetes.io/name": "instana-agent",
    "app.kubernetes.io/part-of": "instana",
    "app.kubernetes.io/managed-by": "instana-agent-operator",
}


@pytest.mark.parametrize(
    "initial_labels, agent, component, version, expected",
    [
        (
            None,
            InstanaAgent(name="asdf", generation=4),
            "eoisdijsdf",
            "v0.0.1",
            {
                "app.kubernetes.io/name": "instana-agent",
                "app.kubernetes.io/component": "eoisdijsdf",
                "app.kubernetes.io/instance": "asdf",
                "app.kubernetes.io/version": "v0.0.1",
                "app.kubernetes.io/part-of": "instana",
                "app.kubernetes.io/managed-by": "instana-agent-operator",
                "agent.instana.io/generation": "4",
            },
        ),
        (
            {"foo": "bar", "hello": "world"},
            InstanaAgent(name="yrsthsdht", generation=3),
            "roisoijdsf",
            "v0.0.2",
            {
                "foo": "bar",
                "hello": "world",
                "app.kubernetes.io/name": "instana-agent",
                "app.kubernetes.io/component": "roisoijdsf",
                "app.kubernetes.io/instance": "yrsthsdht",
                "app.kubernetes.io/version": "v0.0.2",
                "app.kubernetes.io/part-of": "instana",
                "app.kubernetes.io/managed-by": "instana-agent-operator",
                "agent.instana.io/generation": "3",
            },
        ),
    ],
)
def test_add_common_labels(initial_labels, agent, component, version, expected):
    obj = {"apiVersion": "v1", "kind": "ConfigMap", "metadata": {"labels": initial_labels}}
    Transformations(agent, version=version).add_common_labels(obj, component)
    assert obj["metadata"]["labels"] == expected


OWNER_REF = {
    "apiVersion": "instana.io/v1",
    "kind": "InstanaAgent",
    "name": "instana-agent",
    "uid": "iowegihsdgoijwefoih",
    "controller": True,
    "blockOwnerDeletion": True,
}

OTHER_REF = {
    "apiVersion": "adsf",
    "kind": "pojg",
    "name": "ojregoi",
    "uid": "owjgepos",
    "controller": False,
    "blockOwnerDeletion": False,
}


@pytest.mark.parametrize(
    "existing, expected",
    [
        (None, [OWNER_REF]),
        ([OTHER_REF], [OTHER_REF, OWNER_REF]),
        ([OTHER_REF, OWNER_REF], [OTHER_REF, OWNER_REF]),
    ],
)
def test_add_owner_reference(existing, expected):
    agent = InstanaAgent(
        api_version="instana.io/v1",
        kind="InstanaAgent",
        name="instana-agent",
        uid="iowegihsdgoijwefoih",
    )
    metadata = {} if existing is None else {"ownerReferences": [dict(r) for r in existing]}
    obj = {"metadata": metadata}
    Transformations(agent, version="v1").add_owner_reference(obj)
    assert obj["metadata"]["ownerReferences"] == expected


def test_previous_generations_selector():
    agent = InstanaAgent(name="myagent", generation=7)
    selector = Transformations(agent, version="v1").previous_generations_selector()
    base = {"app.kubernetes.io/name": "instana-agent", "app.kubernetes.io/instance": "myagent"}
    assert selector.matches({**base, "agent.instana.io/generation": "6"})
    assert selector.matches(base)
    assert not selector.matches({**base, "agent.instana.io/generation": "7"})
    assert not selector.matches(
        {**base, "app.kubernetes.io/instance": "other", "agent.instana.io/generation": "6"}
    )


def test_previous_generations_selector_matches_labeled_previous_object():
    old = Transformations(InstanaAgent(name="a", generation=1), version="v1")
    new = Transformations(InstanaAgent(name="a", generation=2), version="v1")
    obj = {"metadata": {}}
    old.add_common_labels(obj, "k8sensor")
    assert new.previous_generations_selector().matches(obj["metadata"]["labels"])
    assert not old.previous_generations_selector().matches(obj["metadata"]["labels"])


@pytest.mark.parametrize(
    "user_labels, expected_len",
    [
        (None, 5),
        ({"userkeya": "va", "userkeyb": "vb", "userkeyc": "vc"}, 8),
        (
            {
                "app.kubernetes.io/name": "abd",
                "app.kubernetes.io/instance": "def",
                "app.kubernetes.io/component": "ghi",
                "app.kubernetes.io/part-of": "jkl",
                "app.kubernetes.io/managed-by": "mno",
            },
            5,
        ),
    ],
)
def test_get_pod_labels(user_labels, expected_len):
    original = dict(user_labels) if user_labels is not None else None
    agent = InstanaAgent(name="agentname")
    actual = pod_selector_labels(agent, "comp").get_pod_labels(user_labels)

    expected_defaults = {
        **DEFAULT_POD_LABELS,
        "app.kubernetes.io/instance": "agentname",
        "app.kubernetes.io/component": "comp",
    }
    for key, value in expected_defaults.items():
        assert actual[key] == value
    assert len(actual) == expected_len
    if user_labels is not None:
        assert actual is not user_labels
        assert user_labels == original
        for key, value in user_labels.items():
            if not key.startswith("app.kubernetes.io/"):
                assert actual[key] == value


def test_get_pod_selector_labels():
    agent = InstanaAgent(name="agentname")
    assert pod_selector_labels(agent, "comp").get_pod_selector_labels() == {
        "app.kubernetes.io/name": "instana-agent",
        "app.kubernetes.io/instance": "agentname",
        "app.kubernetes.io/component": "comp",
    }


def test_zone_label_added_when_zone_given():
    gen = pod_selector_labels(InstanaAgent(name="a"), "comp", Zone(name="zone-a"))
    assert gen.get_pod_selector_labels()["io.instana/zone"] == "zone-a"
    assert gen.get_pod_labels(None)["io.instana/zone"] == "zone-a"