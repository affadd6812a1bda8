"""Keyword tables for free-text build requests.

Keys are lowercase phrases (one or more words); values are the canonical
vocabulary from ``models.constants``. Community nicknames live here too,
so the parser itself stays table-driven.
"""

from d2_planner.models.constants import (
    Activity,
    ClassType,
    Element,
    Playstyle,
    Stat,
    WeaponArchetype,
)


CLASS_KEYWORDS: dict[str, ClassType] = {
    "titan": "titan",
    "titans": "titan",
    "crayon": "titan",
    "crayons": "titan",
    "hunter": "hunter",
    "hunters": "hunter",
    "cloak": "hunter",
    "warlock": "warlock",
    "warlocks": "warlock",
    "lock": "warlock",
    "dress": "warlock",
    "bond": "warlock",
    "space wizard": "warlock",
}

ELEMENT_KEYWORDS: dict[str, Element] = {
    "solar": "solar",
    "fire": "solar",
    "burn": "solar",
    "scorch": "solar",
    "void": "void",
    "purple": "void",
    "arc": "arc",
    "lightning": "arc",
    "electric": "arc",
    "stasis": "stasis",
    "ice": "stasis",
    "freeze": "stasis",
    "strand": "strand",
    "green": "strand",
    "suspend": "strand",
}

ACTIVITY_KEYWORDS: dict[str, Activity] = {
    "raid": "raid",
    "raids": "raid",
    "raiding": "raid",
    "vog": "raid",
    "vault of glass": "raid",
    "dsc": "raid",
    "deep stone crypt": "raid",
    "last wish": "raid",
    "kings fall": "raid",
    "king's fall": "raid",
    "root of nightmares": "raid",
    "salvation's edge": "raid",
    "dungeon": "dungeon",
    "dungeons": "dungeon",
    "duality": "dungeon",
    "prophecy": "dungeon",
    "pvp": "pvp",
    "crucible": "pvp",
    "comp": "pvp",
    "competitive": "pvp",
    "iron banner": "pvp",
    "trials": "trials",
    "trials of osiris": "trials",
    "osiris": "trials",
    "flawless": "trials",
    "nightfall": "nightfall",
    "nightfalls": "nightfall",
    "nf": "nightfall",
    "gm": "nightfall",
    "gms": "nightfall",
    "grandmaster": "nightfall",
    "grandmasters": "nightfall",
    "gambit": "gambit",
    "pve": "general",
    "patrol": "general",
    "general": "general",
}

PLAYSTYLE_KEYWORDS: dict[str, Playstyle] = {
    "balanced": "balanced",
    "hybrid": "balanced",
    "versatile": "balanced",
    "tank": "tank",
    "tanky": "tank",
    "survival": "tank",
    "survivability": "tank",
    "defensive": "tank",
    "dps": "dps",
    "damage": "dps",
    "boss damage": "dps",
    "aggressive": "dps",
    "speed": "speed",
    "fast": "speed",
    "mobile": "speed",
    "speedrun": "speed",
}

STAT_KEYWORDS: dict[str, Stat] = {
    "mobility": "mobility",
    "mob": "mobility",
    "resilience": "resilience",
    "res": "resilience",
    "health": "resilience",
    "recovery": "recovery",
    "rec": "recovery",
    "healing": "recovery",
    "discipline": "discipline",
    "disc": "discipline",
    "grenade": "discipline",
    "grenades": "discipline",
    "intellect": "intellect",
    "int": "intellect",
    "super": "intellect",
    "strength": "strength",
    "str": "strength",
    "melee": "strength",
    "punch": "strength",
}

WEAPON_KEYWORDS: dict[str, WeaponArchetype] = {
    "hand cannon": "hand_cannon",
    "hand cannons": "hand_cannon",
    "hc": "hand_cannon",
    "pulse": "pulse_rifle",
    "pulse rifle": "pulse_rifle",
    "scout": "scout_rifle",
    "scout rifle": "scout_rifle",
    "auto rifle": "auto_rifle",
    "smg": "submachine_gun",
    "smgs": "submachine_gun",
    "submachine gun": "submachine_gun",
    "sidearm": "sidearm",
    "bow": "bow",
    "bows": "bow",
    "sniper": "sniper_rifle",
    "sniper rifle": "sniper_rifle",
    "shotgun": "shotgun",
    "shotguns": "shotgun",
    "fusion": "fusion_rifle",
    "fusion rifle": "fusion_rifle",
    "linear fusion": "linear_fusion_rifle",
    "lfr": "linear_fusion_rifle",
    "trace rifle": "trace_rifle",
    "rocket": "rocket_launcher",
    "rockets": "rocket_launcher",
    "rocket launcher": "rocket_launcher",
    "grenade launcher": "grenade_launcher",
    "gl": "grenade_launcher",
    "machine gun": "machine_gun",
    "lmg": "machine_gun",
    "sword": "sword",
    "swords": "sword",
    "glaive": "glaive",
}

# Free-text words that earn a preference bonus when the paired stat is high.
PREFERENCE_KEYWORDS: dict[str, Stat] = {
    "tank": "resilience",
    "tanky": "resilience",
    "survival": "resilience",
    "fast": "mobility",
    "speed": "mobility",
    "grenade": "discipline",
    "grenades": "discipline",
    "ability": "discipline",
    "super": "intellect",
    "melee": "strength",
    "punch": "strength",
    "healing": "recovery",
    "heal": "recovery",
}
