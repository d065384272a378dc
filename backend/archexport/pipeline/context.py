from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from archexport.ir.model import (
    Document,
    Element,
    ElementType,
    Layer,
    Relationship,
    RelationshipType,
)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


class IdGenerator:
    """
    Monotonic identifier source owned by a single export call.

    ``next("acomp")`` -> ``id-acomp-000001``. Two exports never share an
    instance, so they may run concurrently.
    """

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self._counter = 0

    def next(self, category: str) -> str:
        self._counter += 1
        return f"{self.prefix}-{category}-{to_base36(self._counter).zfill(6)}"

    @property
    def issued(self) -> int:
        return self._counter


@dataclass
class ExtractionContext:
    # Inputs in caller order (authoritative for id assignment)
    documents: List[Document] = field(default_factory=list)

    ids: IdGenerator = field(default_factory=IdGenerator)
    elements: List[Element] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)

    # (source, name) -> first element with that name from that document
    _document_index: Dict[Tuple[Optional[str], str], Element] = field(default_factory=dict)
    # name -> first element with that name in the whole run
    _name_index: Dict[str, Element] = field(default_factory=dict)

    def add_element(
        self,
        category: str,
        type: ElementType,
        name: str,
        layer: Layer,
        source: Optional[str] = None,
        documentation: Optional[str] = None,
        properties: Optional[Dict[str, str]] = None,
    ) -> Element:
        element = Element(
            id=self.ids.next(category),
            type=type,
            name=name,
            layer=layer,
            documentation=documentation or None,
            source=source,
            properties={k: v for k, v in (properties or {}).items() if v},
        )
        self.elements.append(element)
        self._document_index.setdefault((source, name), element)
        self._name_index.setdefault(name, element)
        return element

    def add_relationship(
        self,
        type: RelationshipType,
        source: str,
        target: str,
        name: Optional[str] = None,
        category: str = "rel",
    ) -> Relationship:
        relationship = Relationship(
            id=self.ids.next(category),
            type=type,
            source=source,
            target=target,
            name=name or None,
        )
        self.relationships.append(relationship)
        return relationship

    # ---------- lookups ----------

    def find_in_document(self, source: Optional[str], name: str) -> Optional[Element]:
        return self._document_index.get((source, name))

    def find_by_name(self, name: str) -> Optional[Element]:
        return self._name_index.get(name)

    def find_containing(self, fragment: str) -> Optional[Element]:
        """Exact name first, then the first element whose name contains *fragment*."""
        exact = self.find_by_name(fragment)
        if exact:
            return exact
        for element in self.elements:
            if fragment in element.name:
                return element
        return None

    def has_name_prefix(self, prefix: str) -> bool:
        return any(el.name.startswith(prefix) for el in self.elements)

    def elements_from(self, source: str) -> List[Element]:
        return [el for el in self.elements if el.source == source]
