"""Export recommendations as plain JSON-ready data.

This is the shape handed to the persistence/sharing layer and the web
front end; nothing here writes to disk.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from d2_planner.engine.ui_model import BuildUiModel
from d2_planner.models.build import Build, ScoreResult
from d2_planner.models.constants import ARMOR_SLOTS, WEAPON_SLOTS
from d2_planner.models.item import Ability, Armor, Weapon
from d2_planner.models.request import BuildRequest


def _ability_payload(ability: Ability | None) -> dict[str, Any] | None:
    if ability is None:
        return None
    return {"hash": ability.item_hash, "name": ability.name}


def _item_payload(item: Armor | Weapon | None) -> dict[str, Any] | None:
    if item is None:
        return None
    payload: dict[str, Any] = {
        "hash": item.item_hash,
        "name": item.name,
        "tier": item.tier,
    }
    if isinstance(item, Weapon):
        payload["archetype"] = item.archetype
        payload["element"] = item.element or "kinetic"
    return payload


def request_to_dict(request: BuildRequest) -> dict[str, Any]:
    return {
        "class": request.class_type,
        "element": request.element,
        "activity": request.activity,
        "playstyle": request.playstyle,
        "focusStats": list(request.ordered_focus()),
        "lockedExotic": request.locked_exotic,
        "useInventoryOnly": request.constraints.use_inventory_only,
        "weaponTypes": list(request.weapon_archetypes),
        "text": request.source_text,
    }


def score_to_dict(score: ScoreResult | None) -> dict[str, Any] | None:
    if score is None:
        return None
    payload = asdict(score)
    payload["strengths"] = list(score.strengths)
    payload["weaknesses"] = list(score.weaknesses)
    payload["recommendations"] = list(score.recommendations)
    payload["optimizations"] = list(score.optimizations)
    return payload


def build_to_dict(build: Build) -> dict[str, Any]:
    loadout = build.loadout
    sub = loadout.subclass
    return {
        "name": build.name,
        "description": build.description,
        "request": request_to_dict(build.request),
        "subclass": {
            "class": sub.class_type,
            "element": sub.element,
            "subclass": _ability_payload(sub.subclass),
            "super": _ability_payload(sub.super_ability),
            "aspects": [_ability_payload(a) for a in sub.aspects],
            "fragments": [_ability_payload(f) for f in sub.fragments],
            "grenade": _ability_payload(sub.grenade),
            "melee": _ability_payload(sub.melee),
            "classAbility": _ability_payload(sub.class_ability),
        },
        "weapons": {slot: _item_payload(loadout.weapons.get(slot)) for slot in WEAPON_SLOTS},
        "armor": {slot: _item_payload(loadout.armor.get(slot)) for slot in ARMOR_SLOTS},
        "mods": {
            slot: [{"hash": m.item_hash, "name": m.name} for m in loadout.mods.get(slot, [])]
            for slot in ARMOR_SLOTS
        },
        "stats": [asdict(row) for row in BuildUiModel(build).stat_rows()],
        "synergies": [
            {
                "type": s.kind,
                "participants": list(s.participants),
                "strength": s.strength,
                "description": s.description,
            }
            for s in build.synergies
        ],
        "score": score_to_dict(build.score),
        "emptySlots": build.empty_slots(),
    }


def recommendation_to_dict(recommendation) -> dict[str, Any]:
    """Snapshot of a Recommendation, stamped with its export time."""
    return {
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "confidence": recommendation.confidence,
        "warnings": list(recommendation.warnings),
        "suggestions": list(recommendation.suggestions),
        "primary": build_to_dict(recommendation.primary),
        "alternatives": [build_to_dict(b) for b in recommendation.alternatives],
    }
