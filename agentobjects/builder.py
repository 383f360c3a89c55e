"""Object builders and the transformer that labels and owns their output."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from agentobjects.transformations import Transformations


class ObjectBuilder(ABC):
    """Builds one Kubernetes object manifest, or nothing when not applicable."""

    @abstractmethod
    def build(self) -> Optional[dict[str, Any]]:
        """The object manifest, or None if the object should not exist."""

    @abstractmethod
    def component_name(self) -> str:
        """The component label value for the object."""

    @abstractmethod
    def is_namespaced(self) -> bool:
        """Whether the object lives in a namespace."""


class BuilderTransformer:
    """Runs a builder and applies common labels and owner references."""

    def __init__(self, transformations: Transformations) -> None:
        self.transformations = transformations

    def apply(self, builder: ObjectBuilder) -> Optional[dict[str, Any]]:
        obj = builder.build()
        if obj is None:
            return None
        self.transformations.add_common_labels(obj, builder.component_name())
        if builder.is_namespaced():
            self.transformations.add_owner_reference(obj)
        return obj