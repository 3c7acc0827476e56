# localpvkit

Helpers for describing the Kubernetes objects that local volume
provisioning works with: containers, events, persistent volumes (PVs) and
persistent volume claims (PVCs). Objects are plain Python dictionaries
shaped like the Kubernetes API (`metadata`, `spec`, `status`, …). Storage
sizes are kept as `Quantity` values; `str()` on one gives its canonical
text form, such as `10Ti`.

The package has no runtime dependencies.

## Installing

```
pip install localpvkit
```

To run the tests:

```
pip install "localpvkit[test]"
pytest
```

## Modules

### `localpvkit.container`

`ContainerBuilder` sets a container's name, image, command
(`with_command_new`), arguments (`with_arguments_new`), volume mounts,
volume devices, image pull policy, privileged security context, resources,
ports, environment (`with_envs_new` replaces it, `with_envs` appends to
it), liveness probe and lifecycle. Empty or missing values are recorded
as errors and do not raise straight away. `add_check` / `add_checks` add
predicates. Each one takes the container dictionary and returns a
`(message, ok)` pair. `build()` runs the checks and raises
`ContainerValidationError` (with an `errors` list) if anything went
wrong. Otherwise it returns a copy of the container.

`new_container(with_name("nginx"), with_image("nginx:1.0.0"))` builds a
container from option functions, with no validation.

### `localpvkit.event`

`Event` wraps one event dictionary and exposes `kind`, the kind of the
involved object. `EventList` can be iterated and sorts itself in place by
`lastTimestamp` with `latest_first_sort()` or `latest_last_sort()`. The
sort is stable. The predicate factories are `is_bdc_event`, `is_bd_event`,
`is_pod_event`, `has_reason`, `has_string_in_message` and `is_type`.
`EventListBuilder.from_api_list(api_list).with_filter(...).list()` returns
the events that match every filter.

### `localpvkit.quantity`

`parse_quantity("5G")` returns a `Quantity`. It accepts binary suffixes
(`Ki` … `Ei`), decimal SI suffixes (`n` … `E`) and decimal exponents
(`e3`). Malformed text raises `QuantityError`, a `ValueError`.

### `localpvkit.persistentvolume`

`PVBuilder` sets the name, annotations, labels, reclaim policy, volume
mode, access modes and capacity. For the volume source it offers
`with_local_host_directory`, `with_local_host_path_format`, `with_nfs` or
`with_persistent_volume_source`, and for node affinity
`with_node_affinity_hostname` or `with_node_affinity`. `build()` raises
`BuildError` that lists every recorded problem. `PV` gives `path()`,
`affinited_node_hostname()`, `affinited_node_labels()` and `is_nil()`.
`PVListBuilder.for_api_objects` / `for_objects` take a list and filter it
with `is_nil()` or `contains_name(name)`. They return it through
`list()`, `length()` or `api_list()`. A missing input list makes these
raise `BuildError`.

### `localpvkit.persistentvolumeclaim`

`PVCBuilder` (or `PVCBuilder.build_from(existing)`) sets the name,
generate-name, namespace (empty means `default`), annotations, labels
(`with_labels` merges, `with_labels_new` replaces), storage class,
access modes (`with_access_mode_rwo`), capacity and volume mode.
`PVCListBuilder` works from API lists, from `PVCList` objects or from a
template (`from_template(pvc).with_count(n)` gives `n` claims). It
filters with `is_bound()`, `is_nil()` and `contains_name(name)`.

### `localpvkit.kubeclient`, `localpvkit.pvclient`, `localpvkit.pvcclient`

`EventClient`, `PVClient` and `PVCClient` perform API operations through a
*clientset*. You pass the clientset directly, or you pass factories:
`get_clientset()`, or `get_clientset_for_path(path)` when
`kubeconfig_path` is set. The client fetches the clientset on first use
and then caches it. If the fetch fails, the client raises
`KubeClientError`. `PVClient.get`/`delete` and `PVCClient.get`/`delete`
raise `ValueError` for a blank name. `PVCClient.create`/`update` raise
`ValueError` for `None`, and `create_collection` raises it for an empty
list. Each operation can be replaced with a function (`list_fn`, `get_fn`,
`create_fn`, `update_fn`, `delete_fn`, `delete_collection_fn`). By
default the client calls methods on the clientset, such as
`list_events(namespace, options)`, `get_persistent_volume(name, options)`
or `create_persistent_volume_claim(namespace, pvc)`. `EventClient` also
caches a kube config obtained from `get_kube_config` /
`get_kube_config_for_path`.

## Example

```python
from localpvkit.persistentvolume import PVBuilder

pv = (
    PVBuilder()
    .with_name("pvc-1234")
    .with_capacity("10Gi")
    .with_local_host_directory("/var/openebs/local/pvc-1234")
    .with_node_affinity_hostname("node1")
    .build()
)
print(pv["spec"]["nodeAffinity"])
print(str(pv["spec"]["capacity"]["storage"]))  # 10Gi
```

Filtering claims:

```python
from localpvkit.persistentvolumeclaim import PVCListBuilder, is_bound

bound = PVCListBuilder.for_api_objects(api_list).with_filter(is_bound()).list()
print(len(bound))
```

## What it does not do

The package has no way of its own to reach a cluster. It does not read
kubeconfig files and does not open HTTP connections. The clients only
call the clientset or functions that you supply. It has no command-line
program and does not run a provisioner. It builds and inspects objects
and passes them on.