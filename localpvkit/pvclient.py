"""Client for PersistentVolume API operations."""

from __future__ import annotations

from typing import Any, Callable, Optional

from localpvkit.kubeclient import KubeClientBase, KubeClientError


def _default_get(clientset: Any, name: str, options: Optional[dict]) -> dict:
    return clientset.get_persistent_volume(name, options)


def _default_list(clientset: Any, options: Optional[dict]) -> dict:
    return clientset.list_persistent_volumes(options)


def _default_create(clientset: Any, pv: Optional[dict]) -> dict:
    return clientset.create_persistent_volume(pv)


def _default_delete(clientset: Any, name: str, delete_options: Optional[dict]) -> None:
    return clientset.delete_persistent_volume(name, delete_options)


def _default_delete_collection(
    clientset: Any, list_options: Optional[dict], delete_options: Optional[dict]
) -> None:
    return clientset.delete_collection_persistent_volumes(list_options, delete_options)


def _pv_name(pv: Optional[dict]) -> str:
    return ((pv or {}).get("metadata") or {}).get("name", "")


class PVClient(KubeClientBase):
    """Gets, lists, creates and deletes PersistentVolumes."""

    def __init__(
        self,
        clientset: Any = None,
        kubeconfig_path: str = "",
        get_clientset: Optional[Callable[[], Any]] = None,
        get_clientset_for_path: Optional[Callable[[str], Any]] = None,
        get_fn: Optional[Callable[..., dict]] = None,
        list_fn: Optional[Callable[..., dict]] = None,
        create_fn: Optional[Callable[..., dict]] = None,
        delete_fn: Optional[Callable[..., Any]] = None,
        delete_collection_fn: Optional[Callable[..., Any]] = None,
    ) -> None:
        super().__init__(clientset, kubeconfig_path, get_clientset, get_clientset_for_path)
        self._get = get_fn or _default_get
        self._list = list_fn or _default_list
        self._create = create_fn or _default_create
        self._delete = delete_fn or _default_delete
        self._delete_collection = delete_collection_fn or _default_delete_collection

    def get(self, name: str, options: Optional[dict] = None) -> dict:
        if not name.strip():
            raise ValueError("failed to get pv: missing pv name")
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError(f"failed to get pv {{{name}}}") from err
        return self._get(cli, name, options)

    def list(self, options: Optional[dict] = None) -> dict:
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError(f"failed to list pv listoptions: '{options}'") from err
        return self._list(cli, options)

    def delete(self, name: str, delete_options: Optional[dict] = None) -> Any:
        if not name.strip():
            raise ValueError("failed to delete pv: missing pv name")
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError(f"failed to delete pv {{{name}}}") from err
        return self._delete(cli, name, delete_options)

    def create(self, pv: Optional[dict]) -> dict:
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError(f"failed to create pv {{{_pv_name(pv)}}}") from err
        return self._create(cli, pv)

    def delete_collection(
        self, list_options: Optional[dict] = None, delete_options: Optional[dict] = None
    ) -> Any:
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError("failed to delete the collection of pvs") from err
        return self._delete_collection(cli, list_options, delete_options)