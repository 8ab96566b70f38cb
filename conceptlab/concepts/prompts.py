"""Prompt templates for each generation mode."""


def character_concept_prompt(description: str) -> str:
    return (
        "You are a lead character designer at Marvel Studios. "
        "Create an original character concept based on this pitch:\n\n"
        f"\"{description}\"\n\n"
        "Give the character a fitting name, a compelling origin story, a set of "
        "distinctive powers balanced by meaningful weaknesses, and a visual "
        "description detailed enough to brief a concept artist."
    )


def plot_outline_prompt(hero: str, villain: str, theme: str) -> str:
    return (
        "You are a head writer for a Marvel animated series. "
        f"Write three distinct episode plot outlines in which {hero} faces {villain}. "
        f"Every episode should explore the theme: \"{theme}\".\n\n"
        "Each outline needs a catchy title and three key plot points covering "
        "the beginning, the middle and the end of the story."
    )


def visual_style_prompt(description: str) -> str:
    return (
        "You are an art director defining the look of a new Marvel animated project. "
        "Develop a visual style guide inspired by this direction:\n\n"
        f"\"{description}\"\n\n"
        "Name the style and describe its overall aesthetic, its approach to "
        "character design, its color palette and the treatment of backgrounds "
        "and environments."
    )


def character_intel_prompt(character_name: str) -> str:
    return (
        "You are a S.H.I.E.L.D. intelligence analyst. "
        f"Compile a classified briefing on {character_name}.\n\n"
        "List known aliases and the base of operations, assess their abilities, "
        "write a psychological profile, and identify the weaknesses an agent "
        "could exploit in the field."
    )


def concept_art_prompt(description: str) -> str:
    return (
        "Marvel cinematic concept art, highly detailed digital painting, "
        f"dramatic lighting, dynamic composition: {description}"
    )


def comic_strip_prompt(story: str, panels: int, style: str) -> str:
    return (
        f"A single comic book panel in {style} style, one of a {panels}-panel strip "
        f"telling this story: {story}. Bold inks, expressive characters, "
        "clear visual storytelling, no speech bubbles or text."
    )


def video_shot_prompt(description: str) -> str:
    return f"Cinematic, high production value Marvel movie shot. {description}"
