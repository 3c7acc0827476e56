"""Builder for container specifications.

Containers are produced as dictionaries in Kubernetes API shape
(``name``, ``image``, ``command``, ``env``, ``volumeMounts`` and so on);
fields that were never set are left out.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Optional

Predicate = Callable[[dict], "tuple[str, bool]"]
OptionFunc = Callable[[dict], None]


class ContainerValidationError(Exception):
    """Raised when a container cannot be built or fails its checks."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


def predicate_failed_error(message: str) -> ContainerValidationError:
    """Return the error for a failed predicate."""
    return ContainerValidationError(f"predicatefailed: {message}")


def with_name(name: str) -> OptionFunc:
    def apply(container: dict) -> None:
        container["name"] = name

    return apply


def with_image(image: str) -> OptionFunc:
    def apply(container: dict) -> None:
        container["image"] = image

    return apply


def new_container(*args: OptionFunc) -> dict:
    """Return a container with each option applied in turn."""
    container: dict = {}
    for option in args:
        option(container)
    return container


_PREFIX = "failed to build container object: "


class ContainerBuilder:
    """Accumulates container fields and errors, then builds the container."""

    def __init__(self) -> None:
        self._con: dict = {}
        self.checks: list = []
        self.errors: list = []

    def _fail(self, reason: str) -> "ContainerBuilder":
        self.errors.append(_PREFIX + reason)
        return self

    def _set_list(self, key: str, label: str, values: Optional[Iterable[Any]]) -> "ContainerBuilder":
        if values is None:
            return self._fail(f"nil {label}")
        items = list(values)
        if not items:
            return self._fail(f"missing {label}")
        self._con[key] = items
        return self

    def build(self) -> dict:
        """Run the checks and return the container, or raise."""
        for check in self.checks:
            message, ok = check(self._con)
            if not ok:
                self.errors.append(str(predicate_failed_error(message)))
        if self.errors:
            raise ContainerValidationError("container validation failed", self.errors)
        return copy.deepcopy(self._con)

    def add_check(self, predicate: Predicate) -> "ContainerBuilder":
        self.checks.append(predicate)
        return self

    def add_checks(self, predicates: Iterable[Predicate]) -> "ContainerBuilder":
        for predicate in predicates:
            self.add_check(predicate)
        return self

    def with_name(self, name: str) -> "ContainerBuilder":
        if not name:
            return self._fail("missing name")
        with_name(name)(self._con)
        return self

    def with_image(self, image: str) -> "ContainerBuilder":
        if not image:
            return self._fail("missing image")
        with_image(image)(self._con)
        return self

    def with_command_new(self, command: Optional[Iterable[str]]) -> "ContainerBuilder":
        return self._set_list("command", "command", command)

    def with_arguments_new(self, args: Optional[Iterable[str]]) -> "ContainerBuilder":
        return self._set_list("args", "arguments", args)

    def with_volume_mounts_new(self, volume_mounts: Optional[Iterable[dict]]) -> "ContainerBuilder":
        return self._set_list("volumeMounts", "volumemounts", volume_mounts)

    def with_volume_devices(self, volume_devices: Optional[Iterable[dict]]) -> "ContainerBuilder":
        return self._set_list("volumeDevices", "volumedevices", volume_devices)

    def with_image_pull_policy(self, policy: str) -> "ContainerBuilder":
        if not policy:
            return self._fail("missing imagepullpolicy")
        self._con["imagePullPolicy"] = policy
        return self

    def with_privileged_security_context(self, privileged: Optional[bool]) -> "ContainerBuilder":
        if privileged is None:
            return self._fail("missing securitycontext")
        self._con["securityContext"] = {"privileged": bool(privileged)}
        return self

    def with_resources(self, resources: Optional[dict]) -> "ContainerBuilder":
        if resources is None:
            return self._fail("missing resources")
        self._con["resources"] = copy.deepcopy(resources)
        return self

    def with_resources_by_value(self, resources: dict) -> "ContainerBuilder":
        self._con["resources"] = resources
        return self

    def with_ports_new(self, ports: Optional[Iterable[dict]]) -> "ContainerBuilder":
        return self._set_list("ports", "ports", ports)

    def with_envs_new(self, envs: Optional[Iterable[dict]]) -> "ContainerBuilder":
        return self._set_list("env", "envs", envs)

    def with_envs(self, envs: Optional[Iterable[dict]]) -> "ContainerBuilder":
        """Append environment variables to any already set."""
        if envs is None:
            return self._fail("nil envs")
        items = list(envs)
        if not items:
            return self._fail("missing envs")
        if "env" not in self._con:
            return self.with_envs_new(items)
        self._con["env"].extend(items)
        return self

    def with_liveness_probe(self, liveness: Optional[dict]) -> "ContainerBuilder":
        if liveness is None:
            return self._fail("nil liveness probe")
        self._con["livenessProbe"] = liveness
        return self

    def with_life_cycle(self, lifecycle: Optional[dict]) -> "ContainerBuilder":
        if lifecycle is None:
            return self._fail("nil lifecycle")
        self._con["lifecycle"] = lifecycle
        return self