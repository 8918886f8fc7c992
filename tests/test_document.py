"""Tests for themedicons.core.document."""

from __future__ import annotations

import pytest

from themedicons.core.bundles import ResourceBundle
from themedicons.core.document import EventKind, find_document, iter_elements
from themedicons.errors import DocumentParseError, ErrorCode

from conftest import HOST_PACKAGE, PACK_PACKAGE, write_bundle


def _handle(tmp_path, document: str):
    bundle = ResourceBundle.load(write_bundle(tmp_path / "host", HOST_PACKAGE, icon_map=document))
    handle = find_document(bundle, "grayscale_icon_map", HOST_PACKAGE)
    assert handle is not None
    return handle


def test_find_document_respects_namespace(tmp_path) -> None:
    bundle = ResourceBundle.load(write_bundle(tmp_path / "host", HOST_PACKAGE, icon_map="<icons/>"))

    assert find_document(bundle, "grayscale_icon_map", HOST_PACKAGE) is not None
    assert find_document(bundle, "grayscale_icon_map", PACK_PACKAGE) is None
    assert find_document(bundle, "other_map", HOST_PACKAGE) is None


def test_events_carry_depth_and_requested_attributes(tmp_path) -> None:
    handle = _handle(
        tmp_path,
        '<icons><icon package="a" drawable="@drawable/x" extra="1"><meta/></icon></icons>',
    )

    events = list(iter_elements(handle, ("package", "drawable")))

    assert [(e.kind, e.name, e.depth) for e in events] == [
        (EventKind.START, "icons", 1),
        (EventKind.START, "icon", 2),
        (EventKind.START, "meta", 3),
        (EventKind.END, "meta", 3),
        (EventKind.END, "icon", 2),
        (EventKind.END, "icons", 1),
    ]
    icon = events[1]
    assert icon.attributes == {"package": "a", "drawable": "@drawable/x"}
    assert icon.attribute("extra") is None
    assert events[2].attribute("package") is None


def test_stream_is_lazy_and_forward_only(tmp_path) -> None:
    handle = _handle(tmp_path, "<icons><icon/><icon/></icons>")
    stream = iter_elements(handle)

    first = next(stream)
    assert first.name == "icons"
    remaining = list(stream)
    assert len(remaining) == 5
    assert list(stream) == []


def test_malformed_document_raises_at_fault(tmp_path) -> None:
    handle = _handle(tmp_path, '<icons><icon package="a"/><icon package=</icons>')
    stream = iter_elements(handle, ("package",))

    assert next(stream).name == "icons"
    assert next(stream).attribute("package") == "a"
    with pytest.raises(DocumentParseError) as excinfo:
        list(stream)
    assert excinfo.value.code is ErrorCode.PARSE_FAILED
    assert "grayscale_icon_map" in excinfo.value.message


def test_empty_document_is_an_error(tmp_path) -> None:
    handle = _handle(tmp_path, "")
    with pytest.raises(DocumentParseError):
        list(iter_elements(handle))


def test_declared_encoding_is_honoured(tmp_path) -> None:
    root = write_bundle(tmp_path / "host", HOST_PACKAGE, icon_map="<icons/>")
    document = '<?xml version="1.0" encoding="ISO-8859-1"?><icons><icon package="café"/></icons>'
    (root / "res" / "xml" / "grayscale_icon_map.xml").write_bytes(document.encode("latin-1"))
    handle = find_document(ResourceBundle.load(root), "grayscale_icon_map", HOST_PACKAGE)

    events = list(iter_elements(handle, ("package",)))

    assert [e.name for e in events if e.kind is EventKind.START] == ["icons", "icon"]
    assert events[1].attribute("package") == "café"


def test_builtin_host_map_streams_all_icons() -> None:
    from themedicons.runtime_paths import host_bundle_root

    bundle = ResourceBundle.load(host_bundle_root())
    handle = find_document(bundle, "grayscale_icon_map", bundle.package)

    icons = [e for e in iter_elements(handle, ("package",)) if e.kind is EventKind.START and e.name == "icon"]
    assert len(icons) == 4
    assert icons[0].attribute("package") == "org.mozilla.firefox"
