"""PersistentVolume wrappers, predicates, builder and list builder.

PersistentVolumes are held as dictionaries in Kubernetes API shape;
volume sources (``local``, ``hostPath``, ``nfs`` …) sit inline in ``spec``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from localpvkit.quantity import Quantity, QuantityError, parse_quantity

KEY_NODE = "kubernetes.io/hostname"
"""Node label key used for hostname based node affinity."""

_VOLUME_SOURCE_KEYS = (
    "gcePersistentDisk",
    "awsElasticBlockStore",
    "hostPath",
    "glusterfs",
    "nfs",
    "rbd",
    "iscsi",
    "cinder",
    "cephfs",
    "fc",
    "flocker",
    "flexVolume",
    "azureFile",
    "vsphereVolume",
    "quobyte",
    "azureDisk",
    "photonPersistentDisk",
    "portworxVolume",
    "scaleIO",
    "local",
    "storageos",
    "csi",
)

_PREFIX = "failed to build PV object: "

Predicate = Callable[["PV"], bool]


class BuildError(Exception):
    """Raised when a PV or PV list cannot be built."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


@dataclass
class PV:
    """A single PersistentVolume API object (possibly absent)."""

    obj: Optional[dict]

    def is_nil(self) -> bool:
        return self.obj is None

    def _spec(self) -> dict:
        return (self.obj or {}).get("spec") or {}

    def path(self) -> str:
        """Path of the local or host-path volume source, or ``""``."""
        spec = self._spec()
        local = spec.get("local")
        if local is not None:
            return local.get("path", "")
        host_path = spec.get("hostPath")
        if host_path is not None:
            return host_path.get("path", "")
        return ""

    def _required(self) -> Optional[dict]:
        affinity = self._spec().get("nodeAffinity")
        if affinity is None:
            return None
        return affinity.get("required")

    def affinited_node_hostname(self) -> str:
        """The single hostname the volume is pinned to, or ``""``."""
        required = self._required()
        if required is None:
            return ""
        for term in required.get("nodeSelectorTerms") or []:
            hostname = ""
            for expr in term.get("matchExpressions") or []:
                if expr.get("key") == KEY_NODE and expr.get("operator") == "In":
                    values = expr.get("values") or []
                    if len(values) != 1:
                        return ""
                    hostname = values[0]
                    break
            if hostname:
                return hostname
        return ""

    def affinited_node_labels(self) -> Optional[dict]:
        """Node labels from ``In`` expressions; ``None`` if absent or ambiguous."""
        required = self._required()
        if required is None:
            return None
        labels: dict = {}
        for term in required.get("nodeSelectorTerms") or []:
            for expr in term.get("matchExpressions") or []:
                if expr.get("operator") == "In":
                    values = expr.get("values") or []
                    if len(values) != 1:
                        return None
                    labels[expr.get("key")] = values[0]
        return labels


@dataclass
class PVList:
    """An ordered collection of PVs."""

    items: list = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[PV]:
        return iter(self.items)

    def to_api_list(self) -> dict:
        """Return the PVs as an API PersistentVolumeList."""
        return {"items": [pv.obj for pv in self.items]}


def is_nil() -> Predicate:
    return lambda pv: pv.is_nil()


def contains_name(name: str) -> Predicate:
    return lambda pv: name in ((pv.obj or {}).get("metadata") or {}).get("name", "")


class PVBuilder:
    """Accumulates PV fields and errors, then builds the PV."""

    def __init__(self) -> None:
        self._pv = PV({"metadata": {}, "spec": {}})
        self.errors: list = []

    @property
    def _meta(self) -> dict:
        return self._pv.obj["metadata"]

    @property
    def _spec(self) -> dict:
        return self._pv.obj["spec"]

    def _fail(self, reason: str) -> "PVBuilder":
        self.errors.append(_PREFIX + reason)
        return self

    def _set_source(self, source: dict) -> "PVBuilder":
        for key in _VOLUME_SOURCE_KEYS:
            self._spec.pop(key, None)
        self._spec.update(source)
        return self

    def with_name(self, name: str) -> "PVBuilder":
        if not name:
            return self._fail("missing PV name")
        self._meta["name"] = name
        return self

    def with_annotations(self, annotations: Optional[dict]) -> "PVBuilder":
        if not annotations:
            return self._fail("missing annotations")
        self._meta["annotations"] = annotations
        return self

    def with_labels(self, labels: Optional[dict]) -> "PVBuilder":
        if not labels:
            return self._fail("missing labels")
        self._meta["labels"] = labels
        return self

    def with_reclaim_policy(self, reclaim_policy: str) -> "PVBuilder":
        self._spec["persistentVolumeReclaimPolicy"] = reclaim_policy
        return self

    def with_volume_mode(self, volume_mode: str) -> "PVBuilder":
        self._spec["volumeMode"] = volume_mode
        return self

    def with_access_modes(self, access_modes: Optional[list]) -> "PVBuilder":
        if not access_modes:
            return self._fail("missing accessmodes")
        self._spec["accessModes"] = access_modes
        return self

    def with_capacity(self, capacity: str) -> "PVBuilder":
        try:
            quantity = parse_quantity(capacity)
        except QuantityError as err:
            return self._fail(f"failed to parse capacity {{{capacity}}}: {err}")
        return self.with_capacity_qty(quantity)

    def with_capacity_qty(self, quantity: Quantity) -> "PVBuilder":
        self._spec["capacity"] = {"storage": quantity}
        return self

    def with_local_host_directory(self, path: str) -> "PVBuilder":
        return self.with_local_host_path_format(path, "")

    def with_local_host_path_format(self, path: str, fstype: str) -> "PVBuilder":
        """Use a local volume; an empty fstype lets the filesystem be detected."""
        if not path:
            return self._fail("missing PV path")
        return self._set_source({"local": {"path": path, "fsType": fstype}})

    def with_persistent_volume_source(self, source: Optional[dict]) -> "PVBuilder":
        if source is None:
            return self._fail("missing PV source")
        return self._set_source(copy.deepcopy(source))

    def with_node_affinity_hostname(self, node_name: str) -> "PVBuilder":
        if not node_name:
            return self._fail("missing PV node name")
        self._spec["nodeAffinity"] = {
            "required": {
                "nodeSelectorTerms": [
                    {
                        "matchExpressions": [
                            {"key": KEY_NODE, "operator": "In", "values": [node_name]}
                        ]
                    }
                ]
            }
        }
        return self

    def with_node_affinity(self, labels: Optional[dict]) -> "PVBuilder":
        if not labels:
            return self._fail("missing PV node labels")
        expressions = [
            {"key": key, "operator": "In", "values": [value]}
            for key, value in labels.items()
            if value
        ]
        if not expressions:
            return self._fail("missing PV node label values")
        self._spec["nodeAffinity"] = {
            "required": {"nodeSelectorTerms": [{"matchExpressions": expressions}]}
        }
        return self

    def with_nfs(self, server: str, path: str, read_only: bool = False) -> "PVBuilder":
        if not server:
            return self._fail("missing NFS Server address")
        if not path:
            return self._fail("missing NFS Path")
        return self._set_source(
            {"nfs": {"server": server, "path": path, "readOnly": read_only}}
        )

    def build(self) -> dict:
        """Return the PV object, or raise BuildError listing every problem."""
        if self.errors:
            raise BuildError("; ".join(self.errors), self.errors)
        return self._pv.obj


class PVListBuilder:
    """Builds a PVList, optionally filtered by predicates."""

    def __init__(self, pv_list: Optional[PVList] = None, errors: Optional[list] = None) -> None:
        self._list = pv_list if pv_list is not None else PVList()
        self._filters: list = []
        self.errors = list(errors or [])

    @classmethod
    def for_api_objects(cls, pvs: Optional[dict]) -> "PVListBuilder":
        if pvs is None:
            return cls(errors=["failed to build pv list: missing api list"])
        return cls(PVList([PV(item) for item in pvs.get("items") or []]))

    @classmethod
    def for_objects(cls, pvs: Optional[PVList]) -> "PVListBuilder":
        if pvs is None:
            return cls(errors=["failed to build pv list: missing object list"])
        return cls(pvs)

    def with_filter(self, *args: Predicate) -> "PVListBuilder":
        self._filters.extend(args)
        return self

    def list(self) -> PVList:
        """Return the PVs that satisfy every filter."""
        if self.errors:
            raise BuildError(f"failed to list pv: {'; '.join(self.errors)}", self.errors)
        if not self._filters:
            return self._list
        return PVList([pv for pv in self._list if all(pred(pv) for pred in self._filters)])

    def length(self) -> int:
        return len(self.list())

    def api_list(self) -> dict:
        return self.list().to_api_list()