"""Client for PersistentVolumeClaim API operations in one namespace."""

from __future__ import annotations

from typing import Any, Callable, Optional

from localpvkit.kubeclient import KubeClientBase, KubeClientError


def _default_get(clientset: Any, name: str, namespace: str, options: Optional[dict]) -> dict:
    return clientset.get_persistent_volume_claim(namespace, name, options)


def _default_list(clientset: Any, namespace: str, options: Optional[dict]) -> dict:
    return clientset.list_persistent_volume_claims(namespace, options)


def _default_create(clientset: Any, namespace: str, pvc: dict) -> dict:
    return clientset.create_persistent_volume_claim(namespace, pvc)


def _default_update(clientset: Any, namespace: str, pvc: dict) -> dict:
    return clientset.update_persistent_volume_claim(namespace, pvc)


def _default_delete(
    clientset: Any, namespace: str, name: str, delete_options: Optional[dict]
) -> Any:
    return clientset.delete_persistent_volume_claim(namespace, name, delete_options)


def _default_delete_collection(
    clientset: Any,
    namespace: str,
    list_options: Optional[dict],
    delete_options: Optional[dict],
) -> Any:
    return clientset.delete_collection_persistent_volume_claims(
        namespace, list_options, delete_options
    )


def _name_and_namespace(pvc: dict) -> tuple:
    meta = pvc.get("metadata") or {}
    return meta.get("name", ""), meta.get("namespace", "")


class PVCClient(KubeClientBase):
    """Gets, lists, creates, updates and deletes PersistentVolumeClaims."""

    def __init__(
        self,
        clientset: Any = None,
        kubeconfig_path: str = "",
        namespace: str = "",
        get_clientset: Optional[Callable[[], Any]] = None,
        get_clientset_for_path: Optional[Callable[[str], Any]] = None,
        get_fn: Optional[Callable[..., dict]] = None,
        list_fn: Optional[Callable[..., dict]] = None,
        create_fn: Optional[Callable[..., dict]] = None,
        update_fn: Optional[Callable[..., dict]] = None,
        delete_fn: Optional[Callable[..., Any]] = None,
        delete_collection_fn: Optional[Callable[..., Any]] = None,
    ) -> None:
        super().__init__(clientset, kubeconfig_path, get_clientset, get_clientset_for_path)
        self.namespace = namespace
        self._get = get_fn or _default_get
        self._list = list_fn or _default_list
        self._create = create_fn or _default_create
        self._update = update_fn or _default_update
        self._delete = delete_fn or _default_delete
        self._delete_collection = delete_collection_fn or _default_delete_collection

    def with_namespace(self, namespace: str) -> "PVCClient":
        self.namespace = namespace
        return self

    def get(self, name: str, options: Optional[dict] = None) -> dict:
        if not name.strip():
            raise ValueError("failed to get pvc: missing pvc name")
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError(f"failed to get pvc {{{name}}}") from err
        return self._get(cli, name, self.namespace, options)

    def list(self, options: Optional[dict] = None) -> dict:
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError(f"failed to list pvc listoptions: '{options}'") from err
        return self._list(cli, self.namespace, options)

    def delete(self, name: str, delete_options: Optional[dict] = None) -> Any:
        if not name.strip():
            raise ValueError("failed to delete pvc: missing pvc name")
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError(f"failed to delete pvc {{{name}}}") from err
        return self._delete(cli, self.namespace, name, delete_options)

    def create(self, pvc: Optional[dict]) -> dict:
        if pvc is None:
            raise ValueError("failed to create pvc: nil pvc object")
        try:
            cli = self.clientset()
        except KubeClientError as err:
            name, namespace = _name_and_namespace(pvc)
            raise KubeClientError(
                f"failed to create pvc {{{name}}} in namespace {{{namespace}}}"
            ) from err
        return self._create(cli, self.namespace, pvc)

    def update(self, pvc: Optional[dict]) -> dict:
        if pvc is None:
            raise ValueError("failed to update pvc: nil pvc object")
        try:
            cli = self.clientset()
        except KubeClientError as err:
            name, namespace = _name_and_namespace(pvc)
            raise KubeClientError(
                f"failed to update pvc {{{name}}} in namespace {{{namespace}}}"
            ) from err
        return self._update(cli, self.namespace, pvc)

    def create_collection(self, pvc_list: Optional[dict]) -> dict:
        """Create every claim of an API list, stopping at the first failure."""
        if pvc_list is None or not pvc_list.get("items"):
            raise ValueError("failed to create list of pvcs: nil pvc list provided")
        return {"items": [self.create(item) for item in pvc_list["items"]]}

    def delete_collection(
        self, list_options: Optional[dict] = None, delete_options: Optional[dict] = None
    ) -> Any:
        try:
            cli = self.clientset()
        except KubeClientError as err:
            raise KubeClientError("failed to delete the collection of pvcs") from err
        return self._delete_collection(cli, self.namespace, list_options, delete_options)