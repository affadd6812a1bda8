"""Small built-in catalog usable without an external item loader.

Covers the arc, solar and void subclasses for all three classes, a legendary
armor set per stat archetype, a handful of exotics, weapons for every slot,
and the stat and utility mods. Hashes are stable so callers can lock items.
"""

from __future__ import annotations

from d2_planner.catalog.view import CatalogView
from d2_planner.models.constants import ARMOR_SLOTS, PLAYABLE_CLASSES, STATS
from d2_planner.models.item import Ability, Armor, Item, Mod, Weapon
from d2_planner.models.stats import StatBlock


# Exotic armor
HEART_OF_INMOST_LIGHT = 1100
SYNTHOCEPS = 1101
HELM_OF_SAINT_14 = 1102
ORPHEUS_RIG = 1200
CELESTIAL_NIGHTHAWK = 1201
WORMHUSK_CROWN = 1202
CONTRAVERSE_HOLD = 1300
PHOENIX_PROTOCOL = 1301
CROWN_OF_TEMPESTS = 1302

# Exotic weapons
ACE_OF_SPADES = 3100
WITHERHOARD = 3101
TRINITY_GHOUL = 3200
LE_MONARQUE = 3201
GJALLARHORN = 3300
SLEEPER_SIMULANT = 3301


_SUBCLASSES = {
    # (class, element): (subclass, super, melee, aspects)
    ("titan", "arc"): ("Striker", "Fists of Havoc", "Thunderclap",
                       (("Touch of Thunder", "discipline"), ("Juggernaut", "resilience"))),
    ("titan", "solar"): ("Sunbreaker", "Hammer of Sol", "Throwing Hammer",
                         (("Roaring Flames", "discipline"), ("Sol Invictus", "recovery"))),
    ("titan", "void"): ("Sentinel", "Ward of Dawn", "Shield Throw",
                        (("Bastion", "resilience"), ("Controlled Demolition", "discipline"))),
    ("hunter", "arc"): ("Arcstrider", "Arc Staff", "Combination Blow",
                        (("Flow State", "mobility"), ("Lethal Current", "strength"))),
    ("hunter", "solar"): ("Gunslinger", "Golden Gun", "Knife Trick",
                          (("Knock 'Em Down", "intellect"), ("On Your Mark", "mobility"))),
    ("hunter", "void"): ("Nightstalker", "Shadowshot", "Snare Bomb",
                         (("Vanishing Step", "mobility"), ("Stylish Executioner", "intellect"))),
    ("warlock", "arc"): ("Stormcaller", "Stormtrance", "Chain Lightning",
                         (("Electrostatic Mind", "intellect"), ("Arc Soul", "recovery"))),
    ("warlock", "solar"): ("Dawnblade", "Well of Radiance", "Incinerator Snap",
                           (("Icarus Dash", "mobility"), ("Heat Rises", "intellect"))),
    ("warlock", "void"): ("Voidwalker", "Nova Bomb", "Pocket Singularity",
                          (("Chaos Accelerant", "discipline"), ("Feed the Void", "recovery"))),
}

_GRENADES = {
    "arc": ("Pulse Grenade", "discipline"),
    "solar": ("Healing Grenade", "recovery"),
    "void": ("Vortex Grenade", "discipline"),
}

_FRAGMENTS = {
    "arc": (("Spark of Resistance", "resilience"), ("Spark of Shock", "discipline"),
            ("Spark of Ions", "strength"), ("Spark of Recharge", "recovery")),
    "solar": (("Ember of Torches", "strength"), ("Ember of Solace", "recovery"),
              ("Ember of Empyrean", "resilience"), ("Ember of Singeing", "mobility")),
    "void": (("Echo of Expulsion", "intellect"), ("Echo of Provision", "discipline"),
             ("Echo of Persistence", "recovery"), ("Echo of Undermining", "discipline")),
}

_CLASS_ABILITIES = {
    "titan": ("Towering Barricade", "resilience"),
    "hunter": ("Marksman's Dodge", "mobility"),
    "warlock": ("Healing Rift", "recovery"),
}

_PIECE_NAMES = {
    "titan": ("Helm", "Gauntlets", "Plate", "Greaves", "Mark"),
    "hunter": ("Mask", "Grips", "Vest", "Strides", "Cloak"),
    "warlock": ("Hood", "Gloves", "Robes", "Boots", "Bond"),
}

# Legendary armor sets: (set name, rolled stats)
_ARMOR_SETS = (
    ("Iron Forerunner", {"mobility": 20, "resilience": 24, "recovery": 6,
                         "discipline": 6, "intellect": 6, "strength": 6}),
    ("Deep Explorer", {"mobility": 6, "resilience": 6, "recovery": 24,
                       "discipline": 20, "intellect": 6, "strength": 6}),
    ("Dreambane", {"mobility": 6, "resilience": 6, "recovery": 6,
                   "discipline": 6, "intellect": 22, "strength": 22}),
)


def _exotic_armor() -> list[Armor]:
    return [
        Armor(HEART_OF_INMOST_LIGHT, "Heart of Inmost Light", "chest", "titan", "exotic",
              StatBlock(12, 18, 10, 16, 6, 16), stat_affinities=("discipline", "strength")),
        Armor(SYNTHOCEPS, "Synthoceps", "arms", "titan", "exotic",
              StatBlock(8, 16, 12, 6, 6, 22), stat_affinities=("strength",)),
        Armor(HELM_OF_SAINT_14, "Helm of Saint-14", "helmet", "titan", "exotic",
              StatBlock(6, 24, 14, 8, 12, 6), element_affinity="void",
              stat_affinities=("resilience",)),
        Armor(ORPHEUS_RIG, "Orpheus Rig", "legs", "hunter", "exotic",
              StatBlock(16, 10, 12, 8, 20, 6), element_affinity="void",
              stat_affinities=("intellect",)),
        Armor(CELESTIAL_NIGHTHAWK, "Celestial Nighthawk", "helmet", "hunter", "exotic",
              StatBlock(14, 8, 10, 8, 22, 8), element_affinity="solar",
              stat_affinities=("intellect",)),
        Armor(WORMHUSK_CROWN, "Wormhusk Crown", "helmet", "hunter", "exotic",
              StatBlock(18, 12, 20, 6, 6, 8), stat_affinities=("recovery", "mobility")),
        Armor(CONTRAVERSE_HOLD, "Contraverse Hold", "arms", "warlock", "exotic",
              StatBlock(6, 14, 16, 22, 8, 6), element_affinity="void",
              stat_affinities=("discipline",)),
        Armor(PHOENIX_PROTOCOL, "Phoenix Protocol", "chest", "warlock", "exotic",
              StatBlock(6, 12, 22, 8, 18, 6), element_affinity="solar",
              stat_affinities=("recovery", "intellect")),
        Armor(CROWN_OF_TEMPESTS, "Crown of Tempests", "helmet", "warlock", "exotic",
              StatBlock(8, 8, 12, 20, 18, 6), element_affinity="arc",
              stat_affinities=("discipline", "intellect")),
    ]


def _legendary_armor() -> list[Armor]:
    pieces: list[Armor] = []
    for class_index, class_type in enumerate(PLAYABLE_CLASSES):
        for slot_index, slot in enumerate(ARMOR_SLOTS):
            piece_name = _PIECE_NAMES[class_type][slot_index]
            for set_index, (set_name, stats) in enumerate(_ARMOR_SETS):
                pieces.append(
                    Armor(
                        item_hash=2000 + class_index * 100 + slot_index * 10 + set_index,
                        name=f"{set_name} {piece_name}",
                        slot=slot,
                        class_type=class_type,
                        stats=StatBlock.from_mapping(stats),
                    )
                )
    return pieces


def _weapons() -> list[Weapon]:
    return [
        Weapon(3000, "Austringer", "kinetic", "hand_cannon"),
        Weapon(3001, "Transfiguration", "kinetic", "scout_rifle"),
        Weapon(3002, "Bygones", "kinetic", "pulse_rifle"),
        Weapon(3003, "Heritage", "kinetic", "shotgun"),
        Weapon(ACE_OF_SPADES, "Ace of Spades", "kinetic", "hand_cannon", tier="exotic"),
        Weapon(WITHERHOARD, "Witherhoard", "kinetic", "grenade_launcher", tier="exotic"),
        Weapon(3010, "Riptide", "energy", "fusion_rifle", "arc"),
        Weapon(3011, "Calus Mini-Tool", "energy", "submachine_gun", "solar"),
        Weapon(3012, "Funnelweb", "energy", "submachine_gun", "void"),
        Weapon(3013, "Zaouli's Bane", "energy", "hand_cannon", "solar"),
        Weapon(3014, "Lingering Dread", "energy", "sniper_rifle", "void"),
        Weapon(TRINITY_GHOUL, "Trinity Ghoul", "energy", "bow", "arc", tier="exotic"),
        Weapon(LE_MONARQUE, "Le Monarque", "energy", "bow", "void", tier="exotic"),
        Weapon(3020, "Cataclysmic", "power", "linear_fusion_rifle", "solar"),
        Weapon(3021, "Apex Predator", "power", "rocket_launcher", "solar"),
        Weapon(3022, "Falling Guillotine", "power", "sword", "void"),
        Weapon(3023, "Hammerhead", "power", "machine_gun", "arc"),
        Weapon(GJALLARHORN, "Gjallarhorn", "power", "rocket_launcher", "solar", tier="exotic"),
        Weapon(SLEEPER_SIMULANT, "Sleeper Simulant", "power", "linear_fusion_rifle", "arc",
               tier="exotic"),
    ]


def _mods() -> list[Mod]:
    mods = [
        Mod(4000 + i, f"{stat.title()} Mod", stat=stat, bonus=10)
        for i, stat in enumerate(STATS)
    ]
    mods += [
        Mod(4100, "Ammo Finder", slot="helmet",
            activities=("raid", "dungeon", "nightfall", "gambit")),
        Mod(4101, "Harmonic Siphon", slot="helmet", activities=("general", "nightfall")),
        Mod(4102, "Targeting Adjuster", slot="arms", activities=("pvp", "trials")),
        Mod(4103, "Concussive Dampener", slot="chest", activities=("raid", "dungeon", "nightfall")),
        Mod(4104, "Unflinching Aim", slot="chest", activities=("pvp", "trials")),
        Mod(4105, "Recuperation", slot="legs", activities=("raid", "dungeon")),
        Mod(4106, "Elemental Charge", slot="class_item", activities=("general", "gambit")),
    ]
    return mods


def _abilities() -> list[Ability]:
    abilities: list[Ability] = []
    next_hash = 5000

    def add(name: str, category: str, class_type: str, element: str, stat: str | None) -> None:
        nonlocal next_hash
        abilities.append(Ability(next_hash, name, category, class_type, element, stat))
        next_hash += 1

    for (class_type, element), (subclass, super_name, melee, aspects) in _SUBCLASSES.items():
        add(subclass, "subclass", class_type, element, None)
        add(super_name, "super", class_type, element, "intellect")
        add(melee, "melee", class_type, element, "strength")
        for aspect, stat in aspects:
            add(aspect, "aspect", class_type, element, stat)
    for element, (grenade, stat) in _GRENADES.items():
        add(grenade, "grenade", "any", element, stat)
    for element, fragments in _FRAGMENTS.items():
        for fragment, stat in fragments:
            add(fragment, "fragment", "any", element, stat)
    for class_type, (name, stat) in _CLASS_ABILITIES.items():
        add(name, "class_ability", class_type, "any", stat)
    return abilities


def sample_items() -> list[Item]:
    return [
        *_abilities(),
        *_exotic_armor(),
        *_legendary_armor(),
        *_weapons(),
        *_mods(),
    ]


def sample_catalog() -> CatalogView:
    return CatalogView.from_items(sample_items())
