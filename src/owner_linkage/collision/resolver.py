"""Fire-number collision resolution and collision-case classification.

When a property record arrives with a fire number whose base is already
taken, it is scored against every owner at that base. A close enough match
is folded into that owner; otherwise the record becomes a new owner under the
next free suffix ("72" -> "72A").
"""

from __future__ import annotations

from enum import Enum

import structlog
from pydantic import BaseModel, ConfigDict, Field

from owner_linkage.config import CONFIG, MatchingConfig
from owner_linkage.models.contact import Address
from owner_linkage.models.entity import (
    LOCATION_IDENTIFIER_PATTERN,
    DataSource,
    Entity,
    LocationIdentifier,
)
from owner_linkage.similarity.address import is_local_address
from owner_linkage.similarity.entity import entity_comparison

from .registry import CollisionRegistry

logger = structlog.get_logger(__name__)


class ResolutionOutcome(str, Enum):
    NO_IDENTIFIER = "no_identifier"
    REGISTERED = "registered"
    MERGED = "merged"
    CREATED_WITH_SUFFIX = "created_with_suffix"


class CandidateScore(BaseModel):
    """Score of the incoming record against one registered owner."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    external_id: str | None = None
    score: float


class ResolutionResult(BaseModel):
    outcome: ResolutionOutcome
    entity: Entity  # the registered owner the record now lives under
    identifier: str | None = None
    suffix: str | None = None
    merged_external_id: str | None = None
    best_score: float | None = None
    comparisons: list[CandidateScore] = Field(default_factory=list)
    message: str = ""


def _subdivision_key(owner: Entity, merged: Entity) -> str:
    if merged.external_id:
        return merged.external_id
    return f"unidentified-{len(owner.subdivisions) + 1}"


def resolve(
    registry: CollisionRegistry,
    new_entity: Entity,
    raw_identifier: str | int | None,
    config: MatchingConfig | None = None,
) -> ResolutionResult:
    """Register ``new_entity`` under ``raw_identifier``, merging or suffixing on collision.

    Raises:
        SuffixExhausted: a 27th distinct owner arrives at one base.
    """
    config = config or CONFIG
    parsed = LocationIdentifier.parse(raw_identifier)
    if parsed is None:
        logger.info("collision_no_identifier", external_id=new_entity.external_id)
        return ResolutionResult(
            outcome=ResolutionOutcome.NO_IDENTIFIER,
            entity=new_entity,
            message="No fire number provided",
        )

    base = parsed.base
    if not registry.is_registered(base):
        registry.register(LocationIdentifier(base=base), new_entity)
        logger.info("collision_registered", identifier=base, external_id=new_entity.external_id)
        return ResolutionResult(
            outcome=ResolutionOutcome.REGISTERED,
            entity=new_entity,
            identifier=base,
            message=f"Fire number {base} registered",
        )

    registry.mark_collision(base)
    entries = registry.entries_at(base)
    comparisons: list[CandidateScore] = []
    best_index, best_score = -1, -1.0
    for index, entry in enumerate(entries):
        score = entity_comparison(entry.entity, new_entity, config).overall
        comparisons.append(
            CandidateScore(identifier=entry.identifier(base), external_id=entry.entity.external_id, score=score)
        )
        if score > best_score:
            best_index, best_score = index, score

    if best_score >= config.same_owner_threshold:
        winner = entries[best_index]
        key = _subdivision_key(winner.entity, new_entity)
        winner.entity.add_subdivision(key, new_entity)
        identifier = winner.identifier(base)
        logger.info(
            "collision_merged",
            identifier=identifier,
            merged_external_id=key,
            score=best_score,
        )
        return ResolutionResult(
            outcome=ResolutionOutcome.MERGED,
            entity=winner.entity,
            identifier=identifier,
            suffix=winner.suffix,
            merged_external_id=key,
            best_score=best_score,
            comparisons=comparisons,
            message=f"Merged {key} into owner at fire number {identifier} ({best_score:.1%})",
        )

    suffix = registry.next_suffix(base)
    new_entity.location_identifier = LocationIdentifier(base=base, suffix=suffix)
    registry.register(new_entity.location_identifier, new_entity)
    identifier = new_entity.location_identifier.value
    logger.info(
        "collision_suffixed",
        identifier=identifier,
        external_id=new_entity.external_id,
        best_score=best_score,
        owners=len(entries) + 1,
    )
    return ResolutionResult(
        outcome=ResolutionOutcome.CREATED_WITH_SUFFIX,
        entity=new_entity,
        identifier=identifier,
        suffix=suffix,
        best_score=best_score,
        comparisons=comparisons,
        message=(
            f"Created owner at suffixed fire number {identifier} "
            f"(no match among {len(entries)} existing owners)"
        ),
    )


class CollisionCase(str, Enum):
    """How a pair of addresses relates to the collision bases.

    a: neither address is at a collision base
    b: exactly one is
    c: both are, at different bases
    d: both at the same base, both primary addresses of appraisal records
    e: both at the same base otherwise
    """

    NEITHER = "a"
    ONE = "b"
    DIFFERENT_BASES = "c"
    SAME_BASE_APPRAISAL_PRIMARIES = "d"
    SAME_BASE = "e"

    @property
    def excludes_comparison(self) -> bool:
        """The pair splits one fire number between owners and must not be matched."""
        return self is CollisionCase.SAME_BASE_APPRAISAL_PRIMARIES

    @property
    def ignores_identifier(self) -> bool:
        """The pair is compared with the fire number left out."""
        return self is CollisionCase.SAME_BASE


def address_collision_base(
    address: Address | None,
    registry: CollisionRegistry,
    config: MatchingConfig | None = None,
) -> str | None:
    """Base fire number of an island address sitting at a collision base, else None."""
    config = config or CONFIG
    if address is None or address.street_number is None or address.street_number.is_blank():
        return None
    if not is_local_address(address, config):
        return None
    match = LOCATION_IDENTIFIER_PATTERN.match(address.street_number.text.strip().upper())
    if match is None:
        return None
    base = match.group(1)
    return base if registry.is_collision_base(base) else None


def _is_appraisal_primary(address: Address, entity: Entity | None) -> bool:
    if entity is None or entity.source != DataSource.VISION_APPRAISAL or entity.contact_info is None:
        return False
    return entity.contact_info.primary_address is address


def classify(
    addr1: Address | None,
    addr2: Address | None,
    entity1: Entity | None = None,
    entity2: Entity | None = None,
    *,
    registry: CollisionRegistry,
    config: MatchingConfig | None = None,
) -> CollisionCase:
    base1 = address_collision_base(addr1, registry, config)
    base2 = address_collision_base(addr2, registry, config)

    if base1 is None and base2 is None:
        return CollisionCase.NEITHER
    if base1 is None or base2 is None:
        return CollisionCase.ONE
    if base1 != base2:
        return CollisionCase.DIFFERENT_BASES
    if _is_appraisal_primary(addr1, entity1) and _is_appraisal_primary(addr2, entity2):
        return CollisionCase.SAME_BASE_APPRAISAL_PRIMARIES
    return CollisionCase.SAME_BASE
