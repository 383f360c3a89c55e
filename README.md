# agentobjects

Builders for the Kubernetes object manifests needed to run a host monitoring
agent and its cluster sensor. You describe the agent custom resource with plain
Python dataclasses. The package returns each object as a plain dictionary, which
you can serialise to YAML or JSON.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `agentobjects.model`

The agent resource, made of the dataclasses `InstanaAgent`, `InstanaAgentSpec`,
`AgentSpec`, `K8sSensorSpec`, `TlsSpec`, `ServiceAccountSpec`, `OpenTelemetry`
and `Zone`.

`OpenTelemetry.grpc_is_enabled()` and `OpenTelemetry.http_is_enabled()` work as
follows:

- A per-protocol setting wins.
- If there is none, the legacy `enabled` switch decides.
- If neither is set, the protocol is enabled.

### `agentobjects.helpers`

`Helpers` derives names and settings from an agent:

- `service_account_name()`
- `tls_is_enabled()` and `tls_secret_name()`
- `headless_service_name()`
- `k8s_sensor_resources_name()`
- `containers_secret_name()`, `use_containers_secret()` and
  `image_pull_secrets()`
- `sort_env_vars_by_name()`, which sorts a list of env-var dicts in place

The generated containers pull secret is used only when two things hold:

- `pull_secrets` is `None`. An explicit empty list opts out.
- The image name starts with `containers.instana.io`.

### `agentobjects.transformations`

`Transformations` has three methods:

- `add_common_labels(obj, component)` sets the standard `app.kubernetes.io/*`
  labels and the generation label. It keeps any other labels already on the
  object.
- `add_owner_reference(obj)` appends the agent as a controlling owner. It does
  nothing if an owner with the agent's uid is already there.
- `previous_generations_selector()` returns a `LabelSelector`. It matches this
  agent's objects whose generation label differs from the current one, and
  offers `matches(labels)` and a string form.

The version label comes from the `version` argument. If that is omitted, it
comes from the `OPERATOR_VERSION` environment variable, and is empty when that
variable is not set.

`pod_selector_labels(agent, component, zone=None)` returns a
`PodSelectorLabelGenerator`. Its methods are `get_pod_labels(user_labels)` and
`get_pod_selector_labels()`. When a zone is given, both add the
`io.instana/zone` label.

### `agentobjects.ports`

- `InstanaAgentPort` lists the agent's named ports.
- `port_number(port)` returns a port's number. It raises `ValueError` for an
  unknown port.
- `port_is_enabled(port, open_telemetry)` tells whether a port is on.
- `PortsBuilder` has `get_service_ports(*ports)` and
  `get_container_ports(*ports)`. These return TCP port entries for the enabled
  ports only, in the order they were requested.

### `agentobjects.volumes`

`VolumeBuilder(agent, is_openshift=False)` has two methods:

- `build(*volumes)` returns a pair `(volumes, volume_mounts)` for the requested
  `Volume` entries. It raises `ValueError` for an unknown volume. Some entries
  are left out:
  - the three `/var/vcap` host paths, on OpenShift;
  - the TLS volume, when TLS is not configured;
  - the repository volume, when no host repository is set.
- `build_from_user_config()` returns the volumes and mounts that the user
  configured on the agent.

### `agentobjects.builder`

`ObjectBuilder` is an abstract base class with three methods: `build()`,
`component_name()` and `is_namespaced()`.

`BuilderTransformer(transformations).apply(builder)` builds the object and adds
the common labels. It adds the owner reference only to namespaced objects. A
`None` result is passed through unchanged.

### `agentobjects.k8sensor`

Builders for the cluster sensor:

- `ConfigMapBuilder` builds the config map. Each backend becomes an entry named
  `backend<suffix>` with the value `host:port`.
- `PodDisruptionBudgetBuilder` builds a pod disruption budget only when it is
  enabled and there are more than one replica.
- `ClusterRoleBuilder` builds the cluster role.
- `ClusterRoleBindingBuilder` builds the cluster role binding.
- `ServiceAccountBuilder` builds the service account.

### `agentobjects.constants`

Component names, data keys, RBAC names, the `K8SensorBackend` dataclass and
`reader_verbs()`.

## Example

```python
from agentobjects.model import InstanaAgent
from agentobjects.k8sensor import ServiceAccountBuilder
from agentobjects.builder import BuilderTransformer
from agentobjects.transformations import Transformations

agent = InstanaAgent(name="instana-agent", namespace="instana-agent", uid="made-up-uid")
transformer = BuilderTransformer(Transformations(agent, version="v0.0.1"))

service_account = transformer.apply(ServiceAccountBuilder(agent))
print(service_account["metadata"]["name"])   # instana-agent-k8sensor
```

## What it does not do

This package only produces manifests. It has no Kubernetes client and no
reconcile loop, and it does not watch resources or apply anything to a cluster.
It has no command-line tool. It covers only the cluster sensor's objects listed
above. The agent daemon set, its services and secrets are not built here.