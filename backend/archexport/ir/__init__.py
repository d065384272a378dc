from archexport.ir.errors import ExportError, InvalidDocumentError, InvalidModelError
from archexport.ir.model import (
    LAYER_ORDER,
    Document,
    Element,
    ElementType,
    Layer,
    Model,
    ModelMetadata,
    Relationship,
    RelationshipType,
    View,
    ViewConnection,
    ViewNode,
)

__all__ = [
    "LAYER_ORDER",
    "Document",
    "Element",
    "ElementType",
    "ExportError",
    "InvalidDocumentError",
    "InvalidModelError",
    "Layer",
    "Model",
    "ModelMetadata",
    "Relationship",
    "RelationshipType",
    "View",
    "ViewConnection",
    "ViewNode",
]
