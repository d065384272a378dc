"""
Cross-layer relationship inference.

Advisory linking pass: any two elements from paired layers whose names
share a significant word get a relationship. False positives are accepted.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Set

from archexport.ir.model import Element, ElementType, Layer, RelationshipType
from archexport.pipeline.context import ExtractionContext

logger = logging.getLogger(__name__)

TOKEN_SPLIT_RE = re.compile(r"[\s_\-/]+")
STOP_WORDS = {"the", "and", "for", "from", "with", "that", "this", "are", "was", "not", "but", "has"}

ElementFilter = Callable[[Element], bool]


def significant_tokens(name: str) -> Set[str]:
    return {
        token for token in TOKEN_SPLIT_RE.split(name.lower())
        if len(token) > 3 and token not in STOP_WORDS
    }


def name_overlap(a: str, b: str) -> bool:
    return bool(significant_tokens(a) & significant_tokens(b))


def in_layer(layer: Layer) -> ElementFilter:
    return lambda el: el.layer is layer


def of_type(*types: ElementType) -> ElementFilter:
    return lambda el: el.type in types


@dataclass
class LayerPair:
    sources: ElementFilter
    targets: ElementFilter
    relationship_type: RelationshipType


LAYER_PAIRS: List[LayerPair] = [
    # application components serve business processes
    LayerPair(in_layer(Layer.APPLICATION), in_layer(Layer.BUSINESS), RelationshipType.SERVING),
    # technology realizes application
    LayerPair(in_layer(Layer.TECHNOLOGY), in_layer(Layer.APPLICATION), RelationshipType.REALIZATION),
    # requirements and constraints influence principles
    LayerPair(
        of_type(ElementType.REQUIREMENT, ElementType.CONSTRAINT),
        of_type(ElementType.PRINCIPLE),
        RelationshipType.INFLUENCE,
    ),
]


class CrossLayerInferenceStage:
    name = "cross_layer_inference"

    def __init__(self, pairs: Optional[List[LayerPair]] = None):
        self.pairs = pairs if pairs is not None else LAYER_PAIRS

    def run(self, context: ExtractionContext) -> int:
        added = 0
        for pair in self.pairs:
            sources = [el for el in context.elements if pair.sources(el)]
            targets = [el for el in context.elements if pair.targets(el)]
            target_tokens = [(el, significant_tokens(el.name)) for el in targets]

            for source in sources:
                tokens = significant_tokens(source.name)
                if not tokens:
                    continue
                for target, candidate in target_tokens:
                    if tokens & candidate:
                        context.add_relationship(
                            pair.relationship_type,
                            source.id,
                            target.id,
                            category="xrel",
                        )
                        added += 1

        logger.debug("Inferred %d cross-layer relationships", added)
        return added
