"""PersistentVolumeClaim wrappers, predicates, builder and list builder.

Claims are held as dictionaries in Kubernetes API shape
(``metadata``, ``spec``, ``status``).
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from localpvkit.quantity import QuantityError, parse_quantity

_PREFIX = "failed to build PVC object: "

Predicate = Callable[["PVC"], bool]


class BuildError(Exception):
    """Raised when a PVC or PVC list cannot be built."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


@dataclass
class PVC:
    """A single PersistentVolumeClaim API object (possibly absent)."""

    obj: Optional[dict]

    def is_bound(self) -> bool:
        status = (self.obj or {}).get("status") or {}
        return status.get("phase") == "Bound"

    def is_nil(self) -> bool:
        return self.obj is None

    @property
    def name(self) -> str:
        return ((self.obj or {}).get("metadata") or {}).get("name", "")


@dataclass
class PVCList:
    """An ordered collection of PVCs."""

    items: list = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[PVC]:
        return iter(self.items)

    def to_api_list(self) -> dict:
        """Return independent copies of the claims as an API list."""
        return {"items": [copy.deepcopy(pvc.obj) for pvc in self.items]}


def is_bound() -> Predicate:
    return lambda pvc: pvc.is_bound()


def is_nil() -> Predicate:
    return lambda pvc: pvc.is_nil()


def contains_name(name: str) -> Predicate:
    return lambda pvc: name in pvc.name


class PVCBuilder:
    """Accumulates PVC fields and errors, then builds the claim."""

    def __init__(self) -> None:
        self._pvc = PVC({"metadata": {}, "spec": {}})
        self.errors: list = []

    @classmethod
    def build_from(cls, pvc: Optional[dict]) -> "PVCBuilder":
        """Start from an existing claim object, which is modified in place."""
        builder = cls()
        if pvc is None:
            return builder._fail("nil pvc")
        pvc.setdefault("metadata", {})
        pvc.setdefault("spec", {})
        builder._pvc = PVC(pvc)
        return builder

    @property
    def _meta(self) -> dict:
        return self._pvc.obj.setdefault("metadata", {})

    @property
    def _spec(self) -> dict:
        return self._pvc.obj.setdefault("spec", {})

    def _fail(self, reason: str) -> "PVCBuilder":
        self.errors.append(_PREFIX + reason)
        return self

    def with_name(self, name: str) -> "PVCBuilder":
        if not name:
            return self._fail("missing PVC name")
        self._meta["name"] = name
        return self

    def with_generate_name(self, name: str) -> "PVCBuilder":
        if not name:
            return self._fail("missing PVC generateName")
        self._meta["generateName"] = name
        return self

    def with_namespace(self, namespace: str) -> "PVCBuilder":
        """Set the namespace; an empty one means ``default``."""
        self._meta["namespace"] = namespace or "default"
        return self

    def with_annotations(self, annotations: Optional[dict]) -> "PVCBuilder":
        if not annotations:
            return self._fail("missing annotations")
        self._meta["annotations"] = annotations
        return self

    def with_labels(self, labels: Optional[dict]) -> "PVCBuilder":
        """Merge the labels into any already set."""
        if not labels:
            return self._fail("missing labels")
        existing = self._meta.get("labels")
        if existing is None:
            existing = self._meta["labels"] = {}
        existing.update(labels)
        return self

    def with_labels_new(self, labels: Optional[dict]) -> "PVCBuilder":
        """Replace any labels with a copy of the given ones."""
        if not labels:
            return self._fail("missing labels")
        self._meta["labels"] = dict(labels)
        return self

    def with_storage_class(self, sc_name: str) -> "PVCBuilder":
        """Set the storage class; an empty name leaves it unset."""
        if sc_name:
            self._spec["storageClassName"] = sc_name
        return self

    def with_access_modes(self, access_modes: Optional[list]) -> "PVCBuilder":
        if not access_modes:
            return self._fail("missing accessmodes")
        self._spec["accessModes"] = access_modes
        return self

    def with_access_mode_rwo(self) -> "PVCBuilder":
        return self.with_access_modes(["ReadWriteOnce"])

    def with_capacity(self, capacity: str) -> "PVCBuilder":
        try:
            quantity = parse_quantity(capacity)
        except QuantityError as err:
            return self._fail(f"failed to parse capacity {{{capacity}}}: {err}")
        self._spec.setdefault("resources", {})["requests"] = {"storage": quantity}
        return self

    def with_volume_mode(self, volume_mode: str) -> "PVCBuilder":
        self._spec["volumeMode"] = volume_mode
        return self

    def build(self) -> dict:
        """Return the claim object, or raise BuildError listing every problem."""
        if self.errors:
            raise BuildError("; ".join(self.errors), self.errors)
        return self._pvc.obj


class PVCListBuilder:
    """Builds a PVCList from objects or a template, optionally filtered."""

    def __init__(self) -> None:
        self.template: Optional[dict] = None
        self.count = 0
        self._list = PVCList()
        self._filters: list = []
        self.errors: list = []

    @classmethod
    def from_template(cls, pvc: Optional[dict]) -> "PVCListBuilder":
        """Build ``count`` claims (one by default) from a template."""
        builder = cls()
        if pvc is None:
            builder.errors.append("failed to build pvc list: nil pvc template")
            return builder
        builder.template = pvc
        builder.count = 1
        return builder

    @classmethod
    def for_api_objects(cls, pvcs: Optional[dict]) -> "PVCListBuilder":
        builder = cls()
        if pvcs is None:
            builder.errors.append("failed to build pvc list: missing api list")
            return builder
        builder._list = PVCList([PVC(item) for item in pvcs.get("items") or []])
        return builder

    @classmethod
    def for_objects(cls, pvcs: Optional[PVCList]) -> "PVCListBuilder":
        builder = cls()
        if pvcs is None:
            builder.errors.append("failed to build pvc list: missing object list")
            return builder
        builder._list = pvcs
        return builder

    def with_filter(self, *args: Predicate) -> "PVCListBuilder":
        self._filters.extend(args)
        return self

    def with_count(self, count: int) -> "PVCListBuilder":
        self.count = count
        return self

    def _fill_from_template(self) -> None:
        if self._list.items or self.template is None:
            return
        self._list.items.extend(PVC(self.template) for _ in range(self.count))

    def list(self) -> PVCList:
        """Return the claims that satisfy every filter."""
        if self.errors:
            raise BuildError(
                f"failed to build pvc list: {'; '.join(self.errors)}", self.errors
            )
        self._fill_from_template()
        if not self._filters:
            return self._list
        return PVCList(
            [pvc for pvc in self._list if all(pred(pvc) for pred in self._filters)]
        )

    def length(self) -> int:
        return len(self.list())

    def api_list(self) -> dict:
        return self.list().to_api_list()