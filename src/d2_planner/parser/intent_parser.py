"""Turn free text or filter-UI fields into a BuildRequest.

Neither entry point raises on user input: unknown words are ignored and
invalid field values fall back to the request defaults.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from d2_planner.models.constants import (
    ACTIVITIES,
    CLASS_TYPES,
    DEFAULT_ACTIVITY,
    DEFAULT_CLASS,
    DEFAULT_ELEMENT,
    DEFAULT_PLAYSTYLE,
    ELEMENTS,
    PLAYSTYLES,
    STATS,
    WEAPON_ARCHETYPES,
)
from d2_planner.models.request import BuildRequest, Constraints
from d2_planner.parser.keywords import (
    ACTIVITY_KEYWORDS,
    CLASS_KEYWORDS,
    ELEMENT_KEYWORDS,
    PLAYSTYLE_KEYWORDS,
    STAT_KEYWORDS,
    WEAPON_KEYWORDS,
)


logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9']+")

# Bungie API class codes.
_CLASS_CODES = {0: "titan", 1: "hunter", 2: "warlock", 3: "any"}

_PVE_ACTIVITIES = {"raid", "dungeon", "nightfall"}
_PVP_ACTIVITIES = {"pvp", "trials"}

_MISSING = object()


@dataclass(frozen=True, slots=True)
class _PhraseTable:
    phrases: dict[tuple[str, ...], str]
    lengths: tuple[int, ...]     # longest first

    @classmethod
    def compile(cls, table: Mapping[str, str]) -> "_PhraseTable":
        phrases = {tuple(key.split()): value for key, value in table.items()}
        lengths = tuple(sorted({len(p) for p in phrases}, reverse=True))
        return cls(phrases=phrases, lengths=lengths)

    def lookup(self, text: str) -> str | None:
        return self.phrases.get(tuple(tokenize(text)))


_CLASSES = _PhraseTable.compile(CLASS_KEYWORDS)
_ELEMENTS = _PhraseTable.compile(ELEMENT_KEYWORDS)
_ACTIVITIES = _PhraseTable.compile(ACTIVITY_KEYWORDS)
_PLAYSTYLES = _PhraseTable.compile(PLAYSTYLE_KEYWORDS)
_STATS = _PhraseTable.compile(STAT_KEYWORDS)
_WEAPONS = _PhraseTable.compile(WEAPON_KEYWORDS)


def tokenize(text: Any) -> list[str]:
    if not isinstance(text, str):
        return []
    return _TOKEN_RE.findall(text.lower())


def _scan(
    tokens: list[str],
    table: _PhraseTable,
    consumed: set[int] | None = None,
) -> list[tuple[int, int, str]]:
    """Return (start, length, value) for every match, in text order.

    At each position the longest phrase wins; tokens in ``consumed`` never
    take part in a match.
    """
    consumed = consumed or set()
    matches: list[tuple[int, int, str]] = []
    i = 0
    while i < len(tokens):
        matched = 0
        for n in table.lengths:
            span = range(i, i + n)
            if i + n > len(tokens) or consumed.intersection(span):
                continue
            value = table.phrases.get(tuple(tokens[i:i + n]))
            if value is not None:
                matches.append((i, n, value))
                matched = n
                break
        i += matched or 1
    return matches


def _first(tokens: list[str], table: _PhraseTable, consumed: set[int], default: str) -> str:
    matches = _scan(tokens, table, consumed)
    return matches[0][2] if matches else default


# ---------------------------------------------------------------------------
# Free text
# ---------------------------------------------------------------------------


def parse(text: str | None) -> BuildRequest:
    """Parse a free-text request.

    Class, element, activity and playstyle take the first match in the
    text; every stat keyword found is added to ``focus_stats``.
    """
    tokens = tokenize(text)
    consumed: set[int] = set()

    # Weapon phrases go first so "grenade launcher" is not read as a
    # discipline focus.
    weapon_hits = _scan(tokens, _WEAPONS)
    for start, length, _ in weapon_hits:
        consumed.update(range(start, start + length))
    archetypes = tuple(dict.fromkeys(value for _, _, value in weapon_hits))

    request = BuildRequest(
        class_type=_first(tokens, _CLASSES, consumed, DEFAULT_CLASS),
        element=_first(tokens, _ELEMENTS, consumed, DEFAULT_ELEMENT),
        activity=_first(tokens, _ACTIVITIES, consumed, DEFAULT_ACTIVITY),
        playstyle=_first(tokens, _PLAYSTYLES, consumed, DEFAULT_PLAYSTYLE),
        focus_stats=frozenset(value for _, _, value in _scan(tokens, _STATS, consumed)),
        weapon_archetypes=archetypes,
        source_text=text.strip() if isinstance(text, str) and text.strip() else None,
    )
    logger.debug("Parsed %r -> %s", text, request)
    return request


# ---------------------------------------------------------------------------
# Structured fields
# ---------------------------------------------------------------------------


def _field(fields: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in fields:
            return fields[name]
    return _MISSING


def _coerce_choice(value: Any, allowed: Iterable[str], table: _PhraseTable) -> str | None:
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower().replace("-", "_")
    if lowered in allowed:
        return lowered
    return table.lookup(value)


def _coerce_class(value: Any) -> str | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return _CLASS_CODES.get(value)
    return _coerce_choice(value, CLASS_TYPES, _CLASSES)


def _coerce_hash(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip():
        try:
            parsed = int(value.strip(), 0)
        except ValueError:
            logger.debug("Ignoring non-numeric item hash %r", value)
            return None
        return parsed if parsed > 0 else None
    return None


def _as_list(value: Any) -> list[Any]:
    if value is _MISSING or value is None:
        return []
    if isinstance(value, (str, int)):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return []


def parse_structured(fields: Mapping[str, Any] | None) -> BuildRequest:
    """Build a request from filter-UI fields.

    Accepts camelCase or snake_case keys. A ``text`` field is parsed first
    and explicit fields override what it produced.
    """
    if not isinstance(fields, Mapping):
        return BuildRequest()

    text = _field(fields, "text")
    base = parse(text) if isinstance(text, str) else BuildRequest()

    class_type = _coerce_class(_field(fields, "class", "classType", "class_type"))
    element = _coerce_choice(_field(fields, "element"), ELEMENTS, _ELEMENTS)
    activity = _coerce_choice(_field(fields, "activity"), ACTIVITIES, _ACTIVITIES)
    playstyle = _coerce_choice(_field(fields, "playstyle"), PLAYSTYLES, _PLAYSTYLES)

    focus_raw = _field(fields, "focusStats", "focus_stats")
    if focus_raw is _MISSING:
        focus_stats = base.focus_stats
    else:
        focus_stats = frozenset(
            stat
            for stat in (_coerce_choice(v, STATS, _STATS) for v in _as_list(focus_raw))
            if stat is not None
        )

    weapons_raw = _field(fields, "weaponTypes", "weapon_archetypes")
    if weapons_raw is _MISSING:
        archetypes = base.weapon_archetypes
    else:
        coerced = (_coerce_choice(v, WEAPON_ARCHETYPES, _WEAPONS) for v in _as_list(weapons_raw))
        archetypes = tuple(dict.fromkeys(a for a in coerced if a is not None))

    locked = _coerce_hash(_field(fields, "lockedExotic", "locked_exotic"))
    pinned = frozenset(
        h for h in (_coerce_hash(v) for v in _as_list(_field(fields, "pinnedItems", "pinned_items")))
        if h is not None
    )
    inventory_only = _field(fields, "useInventoryOnly", "use_inventory_only")

    return base.with_changes(
        class_type=class_type or base.class_type,
        element=element or base.element,
        activity=activity or base.activity,
        playstyle=playstyle or base.playstyle,
        focus_stats=focus_stats,
        weapon_archetypes=archetypes,
        locked_exotic=locked,
        pinned_items=pinned,
        constraints=Constraints(use_inventory_only=inventory_only is True),
    )


# ---------------------------------------------------------------------------
# Confidence & validation
# ---------------------------------------------------------------------------


def parse_confidence(request: BuildRequest) -> int:
    """0-100 estimate of how specific the request is."""
    confidence = 0
    if request.playstyle != DEFAULT_PLAYSTYLE:
        confidence += 30
    if request.activity != DEFAULT_ACTIVITY:
        confidence += 20
    if request.weapon_archetypes:
        confidence += 15
    if request.element != DEFAULT_ELEMENT:
        confidence += 10
    if request.class_type != DEFAULT_CLASS:
        confidence += 10
    if request.focus_stats or request.locked_exotic is not None:
        confidence += 15
    return min(100, confidence)


@dataclass(slots=True)
class RequestValidation:
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


def validate_request(request: BuildRequest) -> RequestValidation:
    result = RequestValidation()

    mentioned = {value for _, _, value in _scan(tokenize(request.source_text), _ACTIVITIES)}
    mentioned.add(request.activity)
    if mentioned & _PVP_ACTIVITIES and mentioned & _PVE_ACTIVITIES:
        result.warnings.append("PvP builds may not be optimal for PvE endgame content")
        result.suggestions.append("Consider separate builds for PvP and PvE activities")

    if parse_confidence(request) < 50:
        result.warnings.append("Build request may be too vague")
        result.suggestions.append("Try being more specific about the activity or playstyle you want")

    if len(request.weapon_archetypes) > 3:
        result.warnings.append("Too many weapon types specified")
        result.suggestions.append("A loadout holds only three weapons at once")

    return result
