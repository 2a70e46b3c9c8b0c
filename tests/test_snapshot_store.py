import json
import os
from pathlib import Path

import pytest

from dunix.closure import build_closure, closure_size
from dunix.errors import ResolutionError, StoreQueryError
from dunix.store import SnapshotStore, format_path, path_name, to_store_path

HELLO = "/nix/store/0123456789abcdfghijklmnpqrsvwxyz-hello-2.12.1"
GLIBC = "/nix/store/aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa-glibc-2.39"
ICU = "/nix/store/bbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb-icu4c-74.2"


def _list_layout() -> list[dict]:
    return [
        {"path": HELLO, "narSize": 226560, "references": [GLIBC, HELLO], "valid": True},
        {"path": GLIBC, "narSize": 31_000_000, "references": [GLIBC]},
    ]


def test_loads_list_layout(tmp_path: Path) -> None:
    snapshot = tmp_path / "closure.json"
    snapshot.write_text(json.dumps(_list_layout()), encoding="utf-8")

    store = SnapshotStore.from_json(snapshot)
    graph = build_closure(store, HELLO)

    assert len(store) == 2
    assert closure_size(graph.root) == 226560 + 31_000_000
    assert [v.path for v in graph.root.references] == [GLIBC]


def test_loads_keyed_layout_with_invalid_entries(tmp_path: Path) -> None:
    snapshot = tmp_path / "closure.json"
    snapshot.write_text(
        json.dumps(
            {
                HELLO: {"narSize": 10, "references": [GLIBC, ICU]},
                GLIBC: {"narSize": 20, "references": []},
                ICU: None,
            }
        ),
        encoding="utf-8",
    )

    store = SnapshotStore.from_json(snapshot)

    assert store.query_info(GLIBC).nar_size == 20
    with pytest.raises(StoreQueryError):
        store.query_info(ICU)
    with pytest.raises(StoreQueryError):
        build_closure(store, HELLO)
    with pytest.raises(ResolutionError):
        store.resolve(ICU)


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        json.dumps(42),
        json.dumps([{"narSize": 1}]),
        json.dumps({HELLO: {"narSize": -1}}),
        json.dumps({HELLO: {"narSize": 1, "references": "glibc"}}),
    ],
)
def test_rejects_malformed_snapshots(tmp_path: Path, payload: str) -> None:
    snapshot = tmp_path / "bad.json"
    snapshot.write_text(payload, encoding="utf-8")

    with pytest.raises(ValueError):
        SnapshotStore.from_json(snapshot)


def test_resolve_accepts_paths_basenames_and_names() -> None:
    store = SnapshotStore.from_data(_list_layout())

    assert store.resolve(HELLO) == HELLO
    assert store.resolve(HELLO + "/bin/hello") == HELLO
    assert store.resolve(os.path.basename(HELLO)) == HELLO
    assert store.resolve("glibc-2.39") == GLIBC

    with pytest.raises(ResolutionError):
        store.resolve("firefox")


def test_resolve_follows_result_symlinks(tmp_path: Path) -> None:
    store_dir = tmp_path / "store"
    target = store_dir / "cccccccccccccccccccccccccccccccc-app-1.0"
    (target / "bin").mkdir(parents=True)
    link = tmp_path / "result"
    link.symlink_to(target)

    store = SnapshotStore.from_data({str(target): {"narSize": 1, "references": []}}, store_dir=str(store_dir))

    assert store.resolve(str(link)) == str(target)


def test_resolve_rejects_ambiguous_names() -> None:
    other = "/nix/store/dddddddddddddddddddddddddddddddd-glibc-2.39"
    store = SnapshotStore.from_data(
        {GLIBC: {"narSize": 1}, other: {"narSize": 2}},
    )

    with pytest.raises(ResolutionError, match="ambiguous"):
        store.resolve("glibc-2.39")


def test_path_helpers() -> None:
    assert to_store_path(HELLO + "/share/man/../doc") == HELLO
    assert to_store_path("/usr/bin/env") is None
    assert to_store_path("/nix/store/") is None
    assert path_name(HELLO) == "hello-2.12.1"
    assert path_name("/nix/store/short-name") == "short-name"
    assert format_path(HELLO, full_path=True) == HELLO
    assert format_path(HELLO, full_path=False) == "hello-2.12.1"


def test_unreadable_snapshot_is_a_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="cannot read"):
        SnapshotStore.from_json(tmp_path)

    undecodable = tmp_path / "closure.json"
    undecodable.write_bytes(b"\xff\xfe{}")
    with pytest.raises(ValueError, match="not valid UTF-8"):
        SnapshotStore.from_json(undecodable)
