from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from .errors import InvalidDocumentError


class Layer(Enum):
    MOTIVATION = "Motivation"
    STRATEGY = "Strategy"
    BUSINESS = "Business"
    APPLICATION = "Application"
    TECHNOLOGY = "Technology"
    IMPLEMENTATION = "Implementation"


# Top-to-bottom order used by every layout.
LAYER_ORDER: List[Layer] = [
    Layer.MOTIVATION,
    Layer.STRATEGY,
    Layer.BUSINESS,
    Layer.APPLICATION,
    Layer.TECHNOLOGY,
    Layer.IMPLEMENTATION,
]


class ElementType(Enum):
    # Business
    BUSINESS_ACTOR = "BusinessActor"
    BUSINESS_ROLE = "BusinessRole"
    BUSINESS_PROCESS = "BusinessProcess"
    BUSINESS_SERVICE = "BusinessService"
    BUSINESS_OBJECT = "BusinessObject"
    BUSINESS_FUNCTION = "BusinessFunction"
    BUSINESS_EVENT = "BusinessEvent"
    BUSINESS_COLLABORATION = "BusinessCollaboration"
    # Application
    APPLICATION_COMPONENT = "ApplicationComponent"
    APPLICATION_SERVICE = "ApplicationService"
    APPLICATION_INTERFACE = "ApplicationInterface"
    APPLICATION_FUNCTION = "ApplicationFunction"
    DATA_OBJECT = "DataObject"
    # Technology
    NODE = "Node"
    SYSTEM_SOFTWARE = "SystemSoftware"
    ARTIFACT = "Artifact"
    TECHNOLOGY_SERVICE = "TechnologyService"
    TECHNOLOGY_INTERFACE = "TechnologyInterface"
    COMMUNICATION_NETWORK = "CommunicationNetwork"
    DEVICE = "Device"
    # Motivation
    STAKEHOLDER = "Stakeholder"
    PRINCIPLE = "Principle"
    REQUIREMENT = "Requirement"
    CONSTRAINT = "Constraint"
    GOAL = "Goal"
    ASSESSMENT = "Assessment"
    DRIVER = "Driver"
    VALUE = "Value"
    # Strategy
    RESOURCE = "Resource"
    CAPABILITY = "Capability"
    COURSE_OF_ACTION = "CourseOfAction"
    # Implementation & Migration
    WORK_PACKAGE = "WorkPackage"
    DELIVERABLE = "Deliverable"
    PLATEAU = "Plateau"
    GAP = "Gap"


class RelationshipType(Enum):
    COMPOSITION = "CompositionRelationship"
    AGGREGATION = "AggregationRelationship"
    ASSIGNMENT = "AssignmentRelationship"
    REALIZATION = "RealizationRelationship"
    SERVING = "ServingRelationship"
    ACCESS = "AccessRelationship"
    INFLUENCE = "InfluenceRelationship"
    TRIGGERING = "TriggeringRelationship"
    FLOW = "FlowRelationship"
    SPECIALIZATION = "SpecializationRelationship"
    ASSOCIATION = "AssociationRelationship"


@dataclass
class Document:
    """One input markdown file."""
    name: str
    content: str

    @classmethod
    def coerce(cls, item: Union["Document", Tuple[str, str]]) -> "Document":
        if isinstance(item, Document):
            return item
        if isinstance(item, (tuple, list)) and len(item) == 2:
            name, content = item
            if isinstance(name, str) and isinstance(content, str):
                return cls(name=name, content=content)
        raise InvalidDocumentError(
            f"expected Document or (name, content) pair, got {type(item).__name__}"
        )


@dataclass
class Element:
    id: str
    type: ElementType
    name: str
    layer: Layer
    documentation: Optional[str] = None
    source: Optional[str] = None
    properties: Dict[str, str] = field(default_factory=dict)


@dataclass
class Relationship:
    id: str
    type: RelationshipType
    source: str  # element id
    target: str  # element id
    name: Optional[str] = None
    documentation: Optional[str] = None


@dataclass(frozen=True)
class ViewNode:
    element_ref: str
    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class ViewConnection:
    relationship_ref: str
    source_ref: str  # element id of the source node
    target_ref: str  # element id of the target node


@dataclass(frozen=True)
class View:
    id: str
    name: str
    viewpoint: Optional[str] = None
    nodes: Tuple[ViewNode, ...] = ()
    connections: Tuple[ViewConnection, ...] = ()


@dataclass(frozen=True)
class ModelMetadata:
    exported_at: str
    document_count: int
    generator_version: str


@dataclass(frozen=True)
class Model:
    name: str
    metadata: ModelMetadata
    documentation: Optional[str] = None
    elements: Tuple[Element, ...] = ()
    relationships: Tuple[Relationship, ...] = ()
    views: Tuple[View, ...] = ()

    def element_ids(self) -> set:
        return {el.id for el in self.elements}

    def dangling_relationships(self) -> List[Relationship]:
        """Relationships whose source or target does not resolve to an element."""
        ids = self.element_ids()
        return [
            rel for rel in self.relationships
            if rel.source not in ids or rel.target not in ids
        ]
