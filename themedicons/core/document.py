"""Locate XML resource documents and stream their elements."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Mapping

from PySide6.QtCore import QBuffer, QByteArray, QXmlStreamReader

from themedicons.core.bundles import ResourceBundle
from themedicons.errors import DocumentParseError

XML_RESOURCE_TYPE = "xml"


class EventKind(Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True, slots=True)
class ElementEvent:
    """One element boundary. ``depth`` is 1 for the root element."""

    kind: EventKind
    name: str
    depth: int
    attributes: Mapping[str, str] = field(default_factory=dict)

    def attribute(self, name: str) -> str | None:
        return self.attributes.get(name)


@dataclass(frozen=True, slots=True)
class DocumentHandle:
    bundle: ResourceBundle
    res_id: int
    name: str

    def read(self) -> bytes:
        return self.bundle.open_xml(self.res_id)


def find_document(
    bundle: ResourceBundle,
    name: str,
    namespace_owner: str,
) -> DocumentHandle | None:
    """Return a handle to the ``xml`` resource ``name`` owned by ``namespace_owner``."""
    res_id = bundle.get_identifier(name, XML_RESOURCE_TYPE, namespace_owner)
    if res_id == 0:
        return None
    return DocumentHandle(bundle, res_id, name)


def iter_elements(
    handle: DocumentHandle,
    attribute_names: Iterable[str] = (),
) -> Iterator[ElementEvent]:
    """Yield start and end events for every element of the document, in order.

    Only the attributes listed in ``attribute_names`` are captured on start
    events. The stream is lazy and forward-only; a malformed document raises
    ``DocumentParseError`` once the reader reaches the fault.
    """
    wanted = tuple(attribute_names)
    buffer = QBuffer()
    buffer.setData(QByteArray(handle.read()))
    buffer.open(QBuffer.OpenModeFlag.ReadOnly)
    reader = QXmlStreamReader(buffer)
    depth = 0
    while True:
        token = reader.readNext()
        if token == QXmlStreamReader.TokenType.StartElement:
            depth += 1
            attrs = reader.attributes()
            captured = {
                attr_name: str(attrs.value(attr_name))
                for attr_name in wanted
                if attrs.hasAttribute(attr_name)
            }
            yield ElementEvent(EventKind.START, str(reader.name()), depth, captured)
        elif token == QXmlStreamReader.TokenType.EndElement:
            yield ElementEvent(EventKind.END, str(reader.name()), depth)
            depth -= 1
        elif token == QXmlStreamReader.TokenType.EndDocument:
            return
        elif token == QXmlStreamReader.TokenType.Invalid or reader.hasError():
            raise DocumentParseError(
                f"Malformed document {handle.name}: {reader.errorString()}",
                line=reader.lineNumber(),
                column=reader.columnNumber(),
            )
