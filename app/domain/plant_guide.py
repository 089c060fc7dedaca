"""
Plant Guide
===========
Static companion-planting reference: which plants grow well together,
which to keep apart, care tips and how readily each cross-breeds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PlantGuideEntry:
    id: str
    name: str
    category: str
    companions: tuple[str, ...]
    avoid: tuple[str, ...]
    tips: str
    hybrid_info: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "companions": list(self.companions),
            "avoid": list(self.avoid),
            "tips": self.tips,
            "hybridInfo": self.hybrid_info,
        }


PLANT_GUIDE: tuple[PlantGuideEntry, ...] = (
    PlantGuideEntry(
        id="tomato",
        name="Tomato",
        category="Nightshade",
        companions=("Basil", "Marigold", "Carrots", "Onions"),
        avoid=("Cabbage", "Corn", "Potatoes"),
        tips="Needs lots of sun and water. Cut extra stems to help air flow.",
        hybrid_info=(
            "Can mix with other tomatoes. Keep them 10 feet apart if you want to keep seeds pure. "
            "You can join them to eggplant roots."
        ),
    ),
    PlantGuideEntry(
        id="pepper",
        name="Pepper",
        category="Nightshade",
        companions=("Onions", "Basil", "Carrots", "Coriander"),
        avoid=("Beans", "Kale", "Fennel"),
        tips="Keep soil wet but not too much water. Peppers like heat.",
        hybrid_info="Hot and sweet peppers can mix. If they mix, your sweet peppers might taste spicy next year.",
    ),
    PlantGuideEntry(
        id="cucumber",
        name="Cucumber",
        category="Gourd",
        companions=("Beans", "Corn", "Peas", "Radishes"),
        avoid=("Potatoes", "Sage", "Strong Herbs"),
        tips="Needs something to climb on. Needs lots of water.",
        hybrid_info="Can mix with melons or other cucumbers if bees are nearby. Needs bees to make fruit.",
    ),
    PlantGuideEntry(
        id="eggplant",
        name="Eggplant",
        category="Nightshade",
        companions=("Beans", "Peppers", "Spinach", "Thyme"),
        avoid=("None specifically",),
        tips="Likes rich soil and lots of sun. Watch for tiny bugs.",
        hybrid_info="Pollinates itself but bees help. Can mix with wild nightshade plants.",
    ),
    PlantGuideEntry(
        id="strawberry",
        name="Strawberry",
        category="Rose Family",
        companions=("Borage", "Beans", "Lettuce", "Spinach"),
        avoid=("Cabbage", "Broccoli", "Cauliflower"),
        tips="Needs soil that lets water out. Put straw on the ground to keep fruit clean.",
        hybrid_info="Grows from seeds or baby plants. Different kinds of strawberries usually do not mix easily.",
    ),
    PlantGuideEntry(
        id="basil",
        name="Basil",
        category="Mint Family",
        companions=("Tomato", "Peppers", "Asparagus", "Oregano"),
        avoid=("Rue", "Sage"),
        tips="Cut off flowers so the leaves keep growing. Likes warm weather.",
        hybrid_info=(
            'Different basils mix very easily. High chance of making a new "mystery" basil '
            "if they flower together."
        ),
    ),
    PlantGuideEntry(
        id="monstera",
        name="Monstera",
        category="Arum Family",
        companions=("Pothos", "Philodendron"),
        avoid=("None",),
        tips="A climbing plant. Clean the leaves so they can breathe better.",
        hybrid_info="Mixing needs help by hand. Rare white-leaf versions only grow from stem cuttings.",
    ),
    PlantGuideEntry(
        id="rose",
        name="Rose",
        category="Rose Family",
        companions=("Garlic", "Chives", "Lavender", "Marigold"),
        avoid=("None",),
        tips="Water at the bottom, not on leaves. Cut back in early spring.",
        hybrid_info=(
            'Most garden roses are already mixed. We usually use "root-joining" to grow new ones '
            "that look the same."
        ),
    ),
)
