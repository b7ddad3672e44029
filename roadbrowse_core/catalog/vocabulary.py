"""RoadBrowse Vocabularies - Fixed Facet Vocabularies.

Compiled-in value lists for the controlled facets. Free tags are discovered
from the working set; FALLBACK_TAGS only populates the tag controls when
discovery comes back empty.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Tuple

CATEGORIES: Tuple[str, ...] = (
    "Art", "Insanity", "Action", "Martial Arts", "Vampires", "Military",
    "Harem", "Gender Bender", "Heroic Fantasy", "Demons", "Mystery",
    "Josei", "Drama", "Game", "Isekai", "Historical", "Cyberpunk",
    "Kodomo", "Comedy", "Space", "Magic", "Mahou Shoujo", "Cars", "Mecha",
    "Mysticism", "Music", "Sci-Fi", "Omegaverse", "Parody", "Slice of Life",
    "Police", "Post-Apocalyptic", "Adventure", "Psychological", "Romance",
    "Samurai", "Supernatural", "Shoujo", "Shounen", "Sports", "Super Power",
    "Seinen", "Tragedy", "Thriller", "Horror", "Fiction", "Fantasy",
    "School", "Erotica", "Ecchi",
)

FALLBACK_TAGS: Tuple[str, ...] = (
    "Gambling", "Alchemy", "Amnesia", "Angels", "Antihero", "Dystopia",
    "Apocalypse", "Army", "Artifacts", "Gods", "Sword Fights",
    "Power Struggle", "Siblings", "Future", "Witch", "Western",
    "Video Games", "Virtual Reality", "Demon Lord", "Soldiers", "War",
    "Wizards", "Magical Creatures", "Memories of Another World", "Survival",
    "Female Lead", "Overpowered Lead", "Male Lead", "Gamers", "Guilds",
    "Goblins", "Maids", "Guro", "Gyaru", "Dragons", "Friendship",
    "Cruel World", "Animal Companions", "World Conquest", "Beastfolk",
    "Evil Spirits", "Zombies", "Game Elements", "Empires", "Cooking",
    "Cultivation", "LGBT", "Legendary Weapon", "Magic Academy", "Mafia",
    "Medicine", "Revenge", "Monster Girls", "Monsters", "Murim",
    "Skills", "Mercenaries", "Violence", "Undead", "Ninja", "Body Swap",
    "Reverse Harem", "Firearms", "Office Workers", "Pirates", "Dungeons",
    "Politics", "Crime", "Ghosts", "Time Travel", "Slaves",
    "Sentient Races", "Power Ranks", "Regression", "Reincarnation",
    "Robots", "Knights", "Samurai", "AI Generated", "System",
    "Hidden Identity", "Profanity", "Saving the World", "Medieval",
    "Steampunk", "Superheroes", "Traditional Games", "Smart Lead",
    "Teacher", "Farming", "Philosophy", "Hikikomori", "Cold Weapons",
    "Blackmail", "Elves", "Yakuza", "Yandere", "Japan",
)

RELEASE_FORMATS: Tuple[str, ...] = (
    "4-koma", "Color", "Web", "Print", "Anthology", "Single",
)

DEFAULT_RELEASE_FORMAT = "Web"

OTHER_FLAGS: Tuple[str, ...] = (
    "Not translated", "Licensed", "Available for purchase",
)

USER_LISTS: Tuple[str, ...] = (
    "Reading", "Planned", "Favorite", "Dropped", "Completed",
)

__all__ = [
    "CATEGORIES",
    "FALLBACK_TAGS",
    "RELEASE_FORMATS",
    "DEFAULT_RELEASE_FORMAT",
    "OTHER_FLAGS",
    "USER_LISTS",
]
