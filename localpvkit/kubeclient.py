"""Client plumbing shared by the resource clients, and the Event client.

A *clientset* is any object that performs the actual API calls. The
resource clients never build one themselves: they receive one directly
or obtain it lazily from a factory, which may take a kubeconfig path.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

ClientsetFactory = Callable[[], Any]
ClientsetForPathFactory = Callable[[str], Any]
KubeConfigFactory = Callable[[], Any]
KubeConfigForPathFactory = Callable[[str], Any]
EventListFn = Callable[[Any, str, Optional[dict]], dict]


class KubeClientError(Exception):
    """Raised when a client cannot obtain its clientset or configuration."""


def _default_list_events(clientset: Any, namespace: str, options: Optional[dict]) -> dict:
    return clientset.list_events(namespace, options)


class KubeClientBase:
    """Lazily obtains and caches a clientset, preferring a kubeconfig path."""

    def __init__(
        self,
        clientset: Any = None,
        kubeconfig_path: str = "",
        get_clientset: Optional[ClientsetFactory] = None,
        get_clientset_for_path: Optional[ClientsetForPathFactory] = None,
    ) -> None:
        self._clientset = clientset
        self.kubeconfig_path = kubeconfig_path
        self._get_clientset = get_clientset
        self._get_clientset_for_path = get_clientset_for_path

    def _fetch_clientset(self) -> Any:
        if self.kubeconfig_path:
            if self._get_clientset_for_path is None:
                raise KubeClientError(
                    f"no clientset factory configured for kubeconfig {self.kubeconfig_path!r}"
                )
            return self._get_clientset_for_path(self.kubeconfig_path)
        if self._get_clientset is None:
            raise KubeClientError("no clientset factory configured")
        return self._get_clientset()

    def clientset(self) -> Any:
        """Return the cached clientset, fetching it on first use."""
        if self._clientset is not None:
            return self._clientset
        try:
            fetched = self._fetch_clientset()
        except Exception as err:
            raise KubeClientError("failed to get clientset") from err
        self._clientset = fetched
        return fetched


class EventClient(KubeClientBase):
    """Lists Event objects in a namespace."""

    def __init__(
        self,
        clientset: Any = None,
        kubeconfig_path: str = "",
        namespace: str = "",
        kube_config: Any = None,
        get_clientset: Optional[ClientsetFactory] = None,
        get_clientset_for_path: Optional[ClientsetForPathFactory] = None,
        get_kube_config: Optional[KubeConfigFactory] = None,
        get_kube_config_for_path: Optional[KubeConfigForPathFactory] = None,
        list_fn: Optional[EventListFn] = None,
    ) -> None:
        super().__init__(clientset, kubeconfig_path, get_clientset, get_clientset_for_path)
        self.namespace = namespace
        self._kube_config = kube_config
        self._get_kube_config = get_kube_config
        self._get_kube_config_for_path = get_kube_config_for_path
        self._list = list_fn or _default_list_events

    def with_namespace(self, namespace: str) -> "EventClient":
        self.namespace = namespace
        return self

    def with_kube_config(self, config: Any) -> "EventClient":
        self._kube_config = config
        return self

    def _fetch_kube_config(self) -> Any:
        if self.kubeconfig_path:
            if self._get_kube_config_for_path is None:
                raise KubeClientError(
                    f"no kube config factory configured for kubeconfig {self.kubeconfig_path!r}"
                )
            return self._get_kube_config_for_path(self.kubeconfig_path)
        if self._get_kube_config is None:
            raise KubeClientError("no kube config factory configured")
        return self._get_kube_config()

    def kube_config(self) -> Any:
        """Return the cached kube config, fetching it on first use."""
        if self._kube_config is not None:
            return self._kube_config
        try:
            fetched = self._fetch_kube_config()
        except Exception as err:
            raise KubeClientError("failed to get kube config") from err
        self._kube_config = fetched
        return fetched

    def list(self, options: Optional[dict] = None) -> dict:
        """List events in the client's namespace."""
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError("failed to list Events") from err
        return self._list(cli, self.namespace, options)