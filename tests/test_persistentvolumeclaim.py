import pytest

from localpvkit.persistentvolumeclaim import (
    PVC,
    BuildError,
    PVCBuilder,
    PVCList,
    PVCListBuilder,
    contains_name,
    is_bound,
    is_nil,
)
from localpvkit.quantity import parse_quantity


def fake_api_pvc_list(names):
    if not names:
        return None
    return {"items": [{"metadata": {"name": name}} for name in names]}


def fake_api_pvc_list_from_phases(phases):
    if not phases:
        return None
    return {
        "items": [
            {"metadata": {"name": name}, "status": {"phase": phase}}
            for name, phase in phases.items()
        ]
    }


@pytest.mark.parametrize(
    "name, expected",
    [("PVC1", []), ("", ["failed to build PVC object: missing PVC name"])],
)
def test_builder_with_name(name, expected):
    assert PVCBuilder().with_name(name).errors == expected


@pytest.mark.parametrize(
    "namespace, expected", [("jiva-ns", "jiva-ns"), ("", "default")]
)
def test_builder_with_namespace(namespace, expected):
    b = PVCBuilder().with_namespace(namespace)
    assert b.errors == []
    assert b.build()["metadata"]["namespace"] == expected


@pytest.mark.parametrize(
    "annotations, expected",
    [
        ({"persistent-volume": "PV", "application": "percona"}, []),
        ({}, ["failed to build PVC object: missing annotations"]),
    ],
)
def test_builder_with_annotations(annotations, expected):
    assert PVCBuilder().with_annotations(annotations).errors == expected


@pytest.mark.parametrize(
    "labels, expected",
    [
        ({"persistent-volume": "PV", "application": "percona"}, []),
        ({}, ["failed to build PVC object: missing labels"]),
    ],
)
def test_builder_with_labels(labels, expected):
    assert PVCBuilder().with_labels(labels).errors == expected


def test_with_labels_merges():
    pvc = PVCBuilder().with_labels({"a": "1"}).with_labels({"b": "2", "a": "3"}).build()
    assert pvc["metadata"]["labels"] == {"a": "3", "b": "2"}


@pytest.mark.parametrize(
    "labels, expected",
    [
        ({"persistent-volume": "PV", "application": "percona"}, []),
        ({}, ["failed to build PVC object: missing labels"]),
        (None, ["failed to build PVC object: missing labels"]),
    ],
)
def test_builder_with_labels_new(labels, expected):
    assert PVCBuilder().with_labels_new(labels).errors == expected


def test_with_labels_new_replaces_with_copy():
    labels = {"b": "2"}
    pvc = PVCBuilder().with_labels({"a": "1"}).with_labels_new(labels).build()
    labels["c"] = "3"
    assert pvc["metadata"]["labels"] == {"b": "2"}


@pytest.mark.parametrize(
    "modes, expected",
    [
        (["ReadWriteOnce", "ReadOnlyMany"], []),
        ([], ["failed to build PVC object: missing accessmodes"]),
    ],
)
def test_builder_with_access_modes(modes, expected):
    assert PVCBuilder().with_access_modes(modes).errors == expected


def test_with_access_mode_rwo():
    pvc = PVCBuilder().with_access_mode_rwo().build()
    assert pvc["spec"]["accessModes"] == ["ReadWriteOnce"]


@pytest.mark.parametrize("sc_name", ["single-replica", ""])
def test_builder_with_storage_class(sc_name):
    b = PVCBuilder().with_storage_class(sc_name)
    assert b.errors == []
    pvc = b.build()
    if sc_name:
        assert pvc["spec"]["storageClassName"] == sc_name
    else:
        assert "storageClassName" not in pvc["spec"]


def test_builder_with_capacity():
    pvc = PVCBuilder().with_capacity("5G").build()
    assert pvc["spec"]["resources"]["requests"] == {"storage": parse_quantity("5G")}


def test_builder_without_capacity():
    assert len(PVCBuilder().with_capacity("").errors) == 1


def test_with_volume_mode():
    pvc = PVCBuilder().with_volume_mode("Block").build()
    assert pvc["spec"]["volumeMode"] == "Block"


def test_build_with_correct_details():
    pvc = PVCBuilder().with_name("PVC1").with_capacity("10Ti").build()
    assert pvc == {
        "metadata": {"name": "PVC1"},
        "spec": {"resources": {"requests": {"storage": parse_quantity("10Ti")}}},
    }


def test_build_with_error():
    with pytest.raises(BuildError) as info:
        PVCBuilder().with_name("").with_capacity("500Gi").build()
    assert info.value.errors == ["failed to build PVC object: missing PVC name"]


def test_build_from_existing_object():
    existing = {"metadata": {"name": "old"}}
    pvc = PVCBuilder.build_from(existing).with_generate_name("gen-").build()
    assert pvc is existing
    assert pvc["metadata"] == {"name": "old", "generateName": "gen-"}


def test_build_from_none():
    with pytest.raises(BuildError):
        PVCBuilder.build_from(None).build()


def test_with_generate_name_empty():
    assert PVCBuilder().with_generate_name("").errors == [
        "failed to build PVC object: missing PVC generateName"
    ]


@pytest.mark.parametrize("count", range(10))
def test_list_builder_for_api_objects_length(count):
    names = [f"pvc{i}" for i in range(1, count + 1)]
    b = PVCListBuilder.for_api_objects(fake_api_pvc_list(names))
    if count == 0:
        with pytest.raises(BuildError):
            b.length()
    else:
        assert b.length() == count


@pytest.mark.parametrize(
    "names, expected_len, expect_err",
    [
        ([], 0, True),
        (["pvc1"], 1, False),
        (["pvc1", "pvc2"], 2, False),
        (["pvc1", "pvc2", "pvc3"], 3, False),
        (["pvc1", "pvc2", "pvc3", "pvc4"], 4, False),
    ],
)
def test_list_builder_api_list(names, expected_len, expect_err):
    b = PVCListBuilder.for_api_objects(fake_api_pvc_list(names))
    if expect_err:
        with pytest.raises(BuildError):
            b.api_list()
    else:
        assert len(b.api_list()["items"]) == expected_len


@pytest.mark.parametrize(
    "phases, expected_names, expect_err",
    [
        ({"PVC5": "Bound", "PVC6": "Pending", "PVC7": "Lost"}, ["PVC5"], False),
        ({"PVC3": "Bound", "PVC4": "Bound"}, ["PVC3", "PVC4"], False),
        ({"PVC1": "Lost", "PVC2": "Pending", "PVC3": "Pending"}, [], False),
        ({}, [], True),
    ],
)
def test_filter_list(phases, expected_names, expect_err):
    b = PVCListBuilder.for_api_objects(fake_api_pvc_list_from_phases(phases)).with_filter(
        is_bound()
    )
    if expect_err:
        with pytest.raises(BuildError):
            b.list()
    else:
        assert sorted(pvc.name for pvc in b.list()) == expected_names


def test_from_template_with_count():
    template = {"metadata": {"generateName": "PVC-"}}
    api = PVCListBuilder.from_template(template).with_count(3).api_list()
    assert api["items"] == [template] * 3
    api["items"][0]["metadata"]["generateName"] = "changed"
    assert api["items"][1]["metadata"]["generateName"] == "PVC-"


def test_from_template_default_count_is_one():
    assert PVCListBuilder.from_template({"metadata": {}}).length() == 1


def test_from_template_none():
    with pytest.raises(BuildError):
        PVCListBuilder.from_template(None).with_count(10).api_list()


def test_for_objects():
    pvcs = PVCList([PVC({"metadata": {"name": "a"}}), PVC(None)])
    assert PVCListBuilder.for_objects(pvcs).with_filter(is_nil()).length() == 1
    with pytest.raises(BuildError):
        PVCListBuilder.for_objects(None).list()


def test_contains_name_predicate():
    pvcs = PVCList([PVC({"metadata": {"name": "data-pvc-1"}}), PVC({"metadata": {"name": "logs"}})])
    result = PVCListBuilder.for_objects(pvcs).with_filter(contains_name("pvc")).list()
    assert [pvc.name for pvc in result] == ["data-pvc-1"]