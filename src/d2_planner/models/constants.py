"""Game constants: classes, elements, activities, stats, and lookup tables.

Every enumeration is a plain lowercase string so requests and builds stay
JSON-friendly. Tables below are pure data; nothing here inspects item names.
"""

from __future__ import annotations

from typing import Literal


ClassType = Literal["any", "titan", "hunter", "warlock"]
Element = Literal["any", "arc", "solar", "void", "stasis", "strand"]
Activity = Literal["general", "raid", "dungeon", "pvp", "nightfall", "gambit", "trials"]
Playstyle = Literal["balanced", "tank", "dps", "speed"]
Stat = Literal["mobility", "resilience", "recovery", "discipline", "intellect", "strength"]
Tier = Literal["common", "rare", "legendary", "exotic"]
WeaponSlot = Literal["kinetic", "energy", "power"]
ArmorSlot = Literal["helmet", "arms", "chest", "legs", "class_item"]
RangeBand = Literal["close", "medium", "long"]
ItemCategory = Literal[
    "armor",
    "weapon",
    "mod",
    "subclass",
    "super",
    "aspect",
    "fragment",
    "grenade",
    "melee",
    "class_ability",
]
WeaponArchetype = Literal[
    "hand_cannon",
    "pulse_rifle",
    "scout_rifle",
    "auto_rifle",
    "submachine_gun",
    "sidearm",
    "bow",
    "sniper_rifle",
    "shotgun",
    "fusion_rifle",
    "linear_fusion_rifle",
    "trace_rifle",
    "rocket_launcher",
    "grenade_launcher",
    "machine_gun",
    "sword",
    "glaive",
]


CLASS_TYPES: tuple[ClassType, ...] = ("any", "titan", "hunter", "warlock")
PLAYABLE_CLASSES: tuple[ClassType, ...] = ("titan", "hunter", "warlock")
ELEMENTS: tuple[Element, ...] = ("any", "arc", "solar", "void", "stasis", "strand")
SUBCLASS_ELEMENTS: tuple[Element, ...] = ("arc", "solar", "void", "stasis", "strand")
ACTIVITIES: tuple[Activity, ...] = (
    "general", "raid", "dungeon", "pvp", "nightfall", "gambit", "trials",
)
# Order doubles as the alternatives rotation.
PLAYSTYLES: tuple[Playstyle, ...] = ("balanced", "tank", "dps", "speed")
STATS: tuple[Stat, ...] = (
    "mobility", "resilience", "recovery", "discipline", "intellect", "strength",
)
TIERS: tuple[Tier, ...] = ("common", "rare", "legendary", "exotic")
WEAPON_SLOTS: tuple[WeaponSlot, ...] = ("kinetic", "energy", "power")
ARMOR_SLOTS: tuple[ArmorSlot, ...] = ("helmet", "arms", "chest", "legs", "class_item")
ABILITY_CATEGORIES: tuple[ItemCategory, ...] = (
    "subclass", "super", "aspect", "fragment", "grenade", "melee", "class_ability",
)

DEFAULT_CLASS: ClassType = "any"
DEFAULT_ELEMENT: Element = "any"
DEFAULT_ACTIVITY: Activity = "general"
DEFAULT_PLAYSTYLE: Playstyle = "balanced"


# ---------------------------------------------------------------------------
# Stat scale
# ---------------------------------------------------------------------------

STAT_MIN = 0
STAT_MAX = 200
TIER_SIZE = 20          # tier = value // 20, so 0..10
BREAKPOINT = 100        # secondary effects unlock at this value
MAX_TIER = STAT_MAX // TIER_SIZE

STAT_LABELS: dict[Stat, str] = {
    "mobility": "Mobility",
    "resilience": "Resilience",
    "recovery": "Recovery",
    "discipline": "Discipline",
    "intellect": "Intellect",
    "strength": "Strength",
}

# (primary effect, secondary effect past the breakpoint)
STAT_EFFECTS: dict[Stat, tuple[str, str]] = {
    "mobility": ("Weapon handling and reload speed", "Bonus boss damage and ammo chance"),
    "resilience": ("Flinch resistance and orb healing", "Shield capacity and recharge"),
    "recovery": ("Class ability cooldown", "Overshield on class ability"),
    "discipline": ("Grenade cooldown", "Grenade damage"),
    "intellect": ("Super energy gain", "Super damage"),
    "strength": ("Melee cooldown", "Melee damage"),
}


# ---------------------------------------------------------------------------
# Weapons
# ---------------------------------------------------------------------------

ARCHETYPE_RANGE: dict[WeaponArchetype, RangeBand] = {
    "hand_cannon": "medium",
    "pulse_rifle": "medium",
    "scout_rifle": "long",
    "auto_rifle": "medium",
    "submachine_gun": "close",
    "sidearm": "close",
    "bow": "long",
    "sniper_rifle": "long",
    "shotgun": "close",
    "fusion_rifle": "close",
    "linear_fusion_rifle": "long",
    "trace_rifle": "medium",
    "rocket_launcher": "long",
    "grenade_launcher": "medium",
    "machine_gun": "medium",
    "sword": "close",
    "glaive": "close",
}
WEAPON_ARCHETYPES: tuple[WeaponArchetype, ...] = tuple(ARCHETYPE_RANGE)

ARCHETYPE_LABELS: dict[WeaponArchetype, str] = {
    archetype: archetype.replace("_", " ").title() for archetype in WEAPON_ARCHETYPES
}


# ---------------------------------------------------------------------------
# Activity tables
# ---------------------------------------------------------------------------

ACTIVITY_STAT_PRIORITIES: dict[Activity, dict[Stat, float]] = {
    "general": {
        "mobility": 0.5, "resilience": 0.8, "recovery": 0.8,
        "discipline": 0.7, "intellect": 0.6, "strength": 0.6,
    },
    "raid": {
        "mobility": 0.4, "resilience": 1.0, "recovery": 0.8,
        "discipline": 0.7, "intellect": 0.6, "strength": 0.5,
    },
    "dungeon": {
        "mobility": 0.5, "resilience": 0.9, "recovery": 0.9,
        "discipline": 0.7, "intellect": 0.5, "strength": 0.6,
    },
    "pvp": {
        "mobility": 1.0, "resilience": 0.7, "recovery": 0.9,
        "discipline": 0.6, "intellect": 0.5, "strength": 0.4,
    },
    "nightfall": {
        "mobility": 0.4, "resilience": 0.9, "recovery": 0.9,
        "discipline": 0.7, "intellect": 0.6, "strength": 0.5,
    },
    "gambit": {
        "mobility": 0.5, "resilience": 0.7, "recovery": 0.9,
        "discipline": 0.6, "intellect": 0.8, "strength": 0.5,
    },
    "trials": {
        "mobility": 1.0, "resilience": 0.8, "recovery": 0.9,
        "discipline": 0.5, "intellect": 0.5, "strength": 0.4,
    },
}

# Stats an activity floors during armor selection and rewards as "activity fit".
ACTIVITY_FAVORED_STATS: dict[Activity, tuple[Stat, ...]] = {
    "general": (),
    "raid": ("recovery", "discipline"),
    "dungeon": ("resilience", "recovery"),
    "pvp": ("mobility", "resilience"),
    "nightfall": ("resilience", "recovery"),
    "gambit": ("recovery", "intellect"),
    "trials": ("mobility", "resilience"),
}

# Archetype bonus points for activity optimization. Unlisted archetypes earn
# WEAPON_FALLBACK_BONUS.
ACTIVITY_WEAPON_BONUS: dict[Activity, dict[WeaponArchetype, int]] = {
    "general": {},
    "raid": {"linear_fusion_rifle": 15, "scout_rifle": 10, "sniper_rifle": 10},
    "dungeon": {"sword": 15, "fusion_rifle": 10, "auto_rifle": 8},
    "pvp": {"hand_cannon": 15, "shotgun": 10, "pulse_rifle": 10},
    "nightfall": {"scout_rifle": 10, "linear_fusion_rifle": 10, "machine_gun": 8},
    "gambit": {"sniper_rifle": 10, "rocket_launcher": 10, "pulse_rifle": 8},
    "trials": {"hand_cannon": 15, "shotgun": 10, "pulse_rifle": 10},
}
WEAPON_FALLBACK_BONUS = 2

# Preferred engagement range per weapon slot.
ACTIVITY_SLOT_RANGE: dict[Activity, dict[WeaponSlot, RangeBand]] = {
    "general": {"kinetic": "medium", "energy": "close", "power": "long"},
    "raid": {"kinetic": "long", "energy": "close", "power": "long"},
    "dungeon": {"kinetic": "medium", "energy": "close", "power": "close"},
    "pvp": {"kinetic": "medium", "energy": "close", "power": "close"},
    "nightfall": {"kinetic": "long", "energy": "medium", "power": "medium"},
    "gambit": {"kinetic": "long", "energy": "medium", "power": "long"},
    "trials": {"kinetic": "medium", "energy": "close", "power": "close"},
}

ACTIVITY_LABELS: dict[Activity, str] = {
    "general": "General PvE",
    "raid": "Raid",
    "dungeon": "Dungeon",
    "pvp": "Crucible",
    "nightfall": "Nightfall",
    "gambit": "Gambit",
    "trials": "Trials",
}


# ---------------------------------------------------------------------------
# Playstyle tables
# ---------------------------------------------------------------------------

PLAYSTYLE_STATS: dict[Playstyle, tuple[Stat, ...]] = {
    "balanced": (),
    "tank": ("resilience", "recovery"),
    "dps": ("discipline", "intellect"),
    "speed": ("mobility",),
}

# Stat boosted by the playstyle's signature mod (None = no extra mod).
PLAYSTYLE_MOD_STAT: dict[Playstyle, Stat | None] = {
    "balanced": None,
    "tank": "resilience",
    "dps": "discipline",
    "speed": "mobility",
}

PLAYSTYLE_ELEMENTS: dict[Playstyle, Element] = {
    "balanced": "solar",
    "tank": "void",
    "dps": "solar",
    "speed": "arc",
}

PLAYSTYLE_LABELS: dict[Playstyle, str] = {
    "balanced": "Balanced",
    "tank": "Tank",
    "dps": "Damage",
    "speed": "Speed",
}
