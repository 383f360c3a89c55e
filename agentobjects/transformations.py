"""Common labels, owner references and pod selector labels for built objects."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from agentobjects.model import InstanaAgent, Zone

NAME_LABEL = "app.kubernetes.io/name"
INSTANCE_LABEL = "app.kubernetes.io/instance"
VERSION_LABEL = "app.kubernetes.io/version"
COMPONENT_LABEL = "app.kubernetes.io/component"
PART_OF_LABEL = "app.kubernetes.io/part-of"
MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"
GENERATION_LABEL = "agent.instana.io/generation"
ZONE_LABEL = "io.instana/zone"

NAME = "instana-agent"
PART_OF = "instana"
MANAGED_BY = "instana-agent-operator"

VERSION_ENV_VAR = "OPERATOR_VERSION"


class Operator(Enum):
    """Set-based label selector operators."""

    IN = "in"
    NOT_IN = "notin"


@dataclass(frozen=True)
class Requirement:
    """A single set-based label requirement."""

    key: str
    operator: Operator
    values: tuple[str, ...]

    def matches(self, labels: Mapping[str, str]) -> bool:
        if self.operator is Operator.IN:
            return self.key in labels and labels[self.key] in self.values
        return self.key not in labels or labels[self.key] not in self.values

    def __str__(self) -> str:
        return f"{self.key} {self.operator.value} ({','.join(sorted(self.values))})"


@dataclass(frozen=True)
class LabelSelector:
    """A conjunction of label requirements, kept sorted by key."""

    requirements: tuple[Requirement, ...]

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.requirements, key=lambda r: r.key))
        object.__setattr__(self, "requirements", ordered)

    def matches(self, labels: Mapping[str, str]) -> bool:
        return all(r.matches(labels) for r in self.requirements)

    def __str__(self) -> str:
        return ",".join(str(r) for r in self.requirements)


def _metadata(obj: dict[str, Any]) -> dict[str, Any]:
    metadata = obj.get("metadata")
    if metadata is None:
        metadata = obj["metadata"] = {}
    return metadata


class Transformations:
    """Applies agent-wide labels and ownership to generated objects."""

    def __init__(self, agent: InstanaAgent, version: Optional[str] = None) -> None:
        self.name = agent.name
        self.generation = str(agent.generation)
        self.version = version if version is not None else os.environ.get(VERSION_ENV_VAR, "")
        self.owner_reference = {
            "apiVersion": agent.api_version,
            "kind": agent.kind,
            "name": agent.name,
            "uid": agent.uid,
            "controller": True,
            "blockOwnerDeletion": True,
        }

    def add_common_labels(self, obj: dict[str, Any], component: str) -> None:
        """Set the standard labels on the object's metadata, keeping others."""
        metadata = _metadata(obj)
        labels = metadata.get("labels")
        if labels is None:
            labels = {}
        labels.update(
            {
                NAME_LABEL: NAME,
                INSTANCE_LABEL: self.name,
                VERSION_LABEL: self.version,
                COMPONENT_LABEL: component,
                PART_OF_LABEL: PART_OF,
                MANAGED_BY_LABEL: MANAGED_BY,
                GENERATION_LABEL: self.generation,
            }
        )
        metadata["labels"] = labels

    def add_owner_reference(self, obj: dict[str, Any]) -> None:
        """Append the agent as owner unless an owner with its uid is present."""
        metadata = _metadata(obj)
        refs = metadata.get("ownerReferences") or []
        if any(ref.get("uid") == self.owner_reference["uid"] for ref in refs):
            return
        metadata["ownerReferences"] = [*refs, dict(self.owner_reference)]

    def previous_generations_selector(self) -> LabelSelector:
        """Selects this agent's objects that belong to another generation."""
        return LabelSelector(
            (
                Requirement(NAME_LABEL, Operator.IN, (NAME,)),
                Requirement(INSTANCE_LABEL, Operator.IN, (self.name,)),
                Requirement(GENERATION_LABEL, Operator.NOT_IN, (self.generation,)),
            )
        )


class PodSelectorLabelGenerator:
    """Produces pod labels and selector labels for one agent component."""

    def __init__(
        self, agent: InstanaAgent, component: str, zone: Optional[Zone] = None
    ) -> None:
        self.agent = agent
        self.component = component
        self.zone = zone

    def get_pod_labels(self, user_labels: Optional[Mapping[str, str]]) -> dict[str, str]:
        labels = dict(user_labels or {})
        labels.update(
            {
                NAME_LABEL: NAME,
                INSTANCE_LABEL: self.agent.name,
                COMPONENT_LABEL: self.component,
                PART_OF_LABEL: PART_OF,
                MANAGED_BY_LABEL: MANAGED_BY,
            }
        )
        if self.zone is not None:
            labels[ZONE_LABEL] = self.zone.name
        return labels

    def get_pod_selector_labels(self) -> dict[str, str]:
        labels = {
            NAME_LABEL: NAME,
            INSTANCE_LABEL: self.agent.name,
            COMPONENT_LABEL: self.component,
        }
        if self.zone is not None:
            labels[ZONE_LABEL] = self.zone.name
        return labels


def pod_selector_labels(
    agent: InstanaAgent, component: str, zone: Optional[Zone] = None
) -> PodSelectorLabelGenerator:
    """Create a label generator for the component, optionally zone-aware."""
    return PodSelectorLabelGenerator(agent, component, zone)