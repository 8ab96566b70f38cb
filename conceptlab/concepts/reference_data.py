"""Pick lists offered by the UI."""

HEROES = [
    "Spider-Man",
    "Iron Man",
    "Captain America",
    "Thor",
    "Black Widow",
    "Hulk",
    "Black Panther",
    "Captain Marvel",
    "Doctor Strange",
    "Scarlet Witch",
    "Wolverine",
    "Ms. Marvel",
]

VILLAINS = [
    "Doctor Doom",
    "Loki",
    "Thanos",
    "Green Goblin",
    "Magneto",
    "Red Skull",
    "Ultron",
    "Kang the Conqueror",
    "Venom",
    "Mysterio",
]

THEMES = [
    "Betrayal from within",
    "A race against time",
    "Power comes at a cost",
    "Identity and secrets",
    "An unlikely alliance",
    "Redemption",
    "The multiverse unravels",
]

PANEL_OPTIONS = [2, 3, 4]

COMIC_STRIP_STYLES = [
    "Classic Comic",
    "Manga",
    "Noir",
    "Gritty 90s",
    "Sci-Fi Comic",
    "Fantasy Comic",
    "Superhero Comic",
]


def get_options() -> dict[str, list]:
    """All pick lists, keyed the way the UI expects them."""
    return {
        "heroes": HEROES,
        "villains": VILLAINS,
        "themes": THEMES,
        "panelOptions": PANEL_OPTIONS,
        "comicStripStyles": COMIC_STRIP_STYLES,
    }
