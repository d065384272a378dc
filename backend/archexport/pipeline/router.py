"""
Phase router.

Routing is data: an ordered list of rules, first match wins.

1. filename keywords (stakeholders, principles, governance)
2. ``togaf_phase`` front matter (keyword or bare phase letter)
3. filename prefix token (``B1_...``, ``X2_...``) and filename keywords
"""

import logging
import posixpath
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from archexport.ir.model import Document
from archexport.parsing.markdown import parse_front_matter
from archexport.pipeline.application_stage import ApplicationStage
from archexport.pipeline.business_stage import BusinessStage
from archexport.pipeline.decision_stage import DecisionStage
from archexport.pipeline.governance_stage import GovernanceStage
from archexport.pipeline.principle_stage import PrincipleStage
from archexport.pipeline.requirement_stage import RequirementStage
from archexport.pipeline.risk_stage import RiskStage
from archexport.pipeline.roadmap_stage import RoadmapStage
from archexport.pipeline.solution_stage import SolutionStage
from archexport.pipeline.stage import ExtractionStage
from archexport.pipeline.stakeholder_stage import StakeholderStage
from archexport.pipeline.technology_stage import TechnologyStage

logger = logging.getLogger(__name__)

PHASE_LETTER_RE = re.compile(r"^(?:phase\s*)?([A-Z])$", re.IGNORECASE)


@dataclass
class RoutingInput:
    document: Document
    front_matter: Dict[str, str]

    @property
    def filename(self) -> str:
        return posixpath.basename(self.document.name.replace("\\", "/"))

    @property
    def lowered_name(self) -> str:
        return self.filename.lower()

    @property
    def phase(self) -> str:
        return self.front_matter.get("togaf_phase", "").strip()

    @property
    def prefix(self) -> str:
        return self.filename.split("_")[0].upper()


Predicate = Callable[[RoutingInput], bool]


@dataclass
class RoutingRule:
    name: str
    predicate: Predicate
    stage: ExtractionStage

    def matches(self, item: RoutingInput) -> bool:
        return self.predicate(item)


# ---------- predicate builders ----------

def name_contains(*words: str) -> Predicate:
    return lambda item: any(w in item.lowered_name for w in words)


def phase_mentions(*words: str) -> Predicate:
    return lambda item: any(w in item.phase.lower() for w in words)


def phase_letter(letter: str) -> Predicate:
    def predicate(item: RoutingInput) -> bool:
        match = PHASE_LETTER_RE.match(item.phase)
        return bool(match) and match.group(1).upper() == letter
    return predicate


def prefix_startswith(*prefixes: str) -> Predicate:
    return lambda item: any(item.prefix.startswith(p) for p in prefixes)


def any_of(*predicates: Predicate) -> Predicate:
    return lambda item: any(p(item) for p in predicates)


def default_rules() -> List[RoutingRule]:
    stakeholders = StakeholderStage()
    principles = PrincipleStage()
    governance = GovernanceStage()
    business = BusinessStage()
    application = ApplicationStage()
    technology = TechnologyStage()
    solutions = SolutionStage()
    requirements = RequirementStage()
    decisions = DecisionStage()
    risks = RiskStage()
    roadmap = RoadmapStage()

    return [
        # 1. filename keywords
        RoutingRule("name:stakeholder", name_contains("stakeholder"), stakeholders),
        RoutingRule("name:principle", name_contains("principle"), principles),
        RoutingRule("name:governance", name_contains("governance"), governance),
        # 2. togaf_phase front matter
        RoutingRule("phase:business", any_of(phase_mentions("business"), phase_letter("B")), business),
        RoutingRule(
            "phase:application",
            any_of(phase_mentions("application", "information", "data"), phase_letter("C")),
            application,
        ),
        RoutingRule("phase:technology", any_of(phase_mentions("technology"), phase_letter("D")), technology),
        RoutingRule(
            "phase:solutions",
            any_of(phase_mentions("solution", "opportunit"), phase_letter("E")),
            solutions,
        ),
        RoutingRule("phase:requirements", any_of(phase_mentions("requirement"), phase_letter("R")), requirements),
        # "Implementation Governance" is phase G, not an implementation roadmap
        RoutingRule("phase:governance", any_of(phase_mentions("governance"), phase_letter("G")), governance),
        RoutingRule(
            "phase:roadmap",
            any_of(phase_mentions("migration", "roadmap", "implementation"), phase_letter("F")),
            roadmap,
        ),
        # 3. filename prefix token
        RoutingRule("prefix:B", prefix_startswith("B"), business),
        RoutingRule("prefix:C", prefix_startswith("C"), application),
        RoutingRule("prefix:D", prefix_startswith("D"), technology),
        RoutingRule("prefix:E", prefix_startswith("E"), solutions),
        RoutingRule("prefix:R", prefix_startswith("R"), requirements),
        RoutingRule("prefix:X1", any_of(prefix_startswith("X1"), name_contains("decision", "adr")), decisions),
        RoutingRule("prefix:X2", any_of(prefix_startswith("X2"), name_contains("risk")), risks),
        RoutingRule("prefix:F", any_of(prefix_startswith("F"), name_contains("roadmap", "migration")), roadmap),
        RoutingRule("prefix:G", prefix_startswith("G"), governance),
    ]


class PhaseRouter:
    def __init__(self, rules: Optional[List[RoutingRule]] = None):
        self.rules = rules if rules is not None else default_rules()

    def match(self, document: Document) -> Optional[RoutingRule]:
        item = RoutingInput(document=document, front_matter=parse_front_matter(document.content))
        for rule in self.rules:
            if rule.matches(item):
                return rule
        return None

    def route(self, document: Document) -> Optional[ExtractionStage]:
        rule = self.match(document)
        if rule is None:
            logger.debug("No extractor for %s", document.name)
            return None
        logger.debug("Routing %s via %s -> %s", document.name, rule.name, rule.stage.name)
        return rule.stage
