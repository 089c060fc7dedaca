"""
Personas and Themes
===================
Lookup tables for the closed profile-icon and theme sets. Unknown keys are
rejected here, at the boundary, instead of being trusted as free strings.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.exceptions import ValidationError
from app.enums.common import Persona, ThemeColor


@dataclass(frozen=True)
class PersonaInfo:
    persona: Persona
    label: str
    color: str


PERSONAS: dict[Persona, PersonaInfo] = {
    Persona.PERSONA_1: PersonaInfo(Persona.PERSONA_1, "The Botanist", "emerald"),
    Persona.PERSONA_2: PersonaInfo(Persona.PERSONA_2, "The Plant Doc", "blue"),
    Persona.PERSONA_3: PersonaInfo(Persona.PERSONA_3, "Happy Harvester", "yellow"),
    Persona.PERSONA_4: PersonaInfo(Persona.PERSONA_4, "Seed Sower", "orange"),
    Persona.PERSONA_5: PersonaInfo(Persona.PERSONA_5, "Garden Guide", "purple"),
    Persona.PERSONA_6: PersonaInfo(Persona.PERSONA_6, "Flora Fanatic", "pink"),
    Persona.PERSONA_7: PersonaInfo(Persona.PERSONA_7, "Soil Scientist", "slate"),
    Persona.PERSONA_8: PersonaInfo(Persona.PERSONA_8, "Nature Ninja", "indigo"),
    Persona.PERSONA_9: PersonaInfo(Persona.PERSONA_9, "Bloom Buddy", "teal"),
    Persona.PERSONA_10: PersonaInfo(Persona.PERSONA_10, "Leaf Legend", "red"),
}

# Shade 600 of each palette, used for accents
THEME_ACCENTS: dict[ThemeColor, str] = {
    ThemeColor.GREEN: "#16a34a",
    ThemeColor.BLUE: "#2563eb",
    ThemeColor.PURPLE: "#9333ea",
    ThemeColor.ROSE: "#e11d48",
    ThemeColor.ORANGE: "#ea580c",
    ThemeColor.TEAL: "#0d9488",
}


def parse_persona(value: object) -> Persona:
    """Strict persona lookup; raises ValidationError for unknown keys."""
    try:
        return Persona(value)
    except ValueError:
        raise ValidationError(f"Unknown persona: {value!r}") from None


def parse_theme(value: object) -> ThemeColor:
    """Strict theme lookup; raises ValidationError for unknown keys."""
    try:
        return ThemeColor(value)
    except ValueError:
        raise ValidationError(f"Unknown theme color: {value!r}") from None


def persona_label(persona: Persona) -> str:
    return PERSONAS[persona].label
