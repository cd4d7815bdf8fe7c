"""
Category icons.
"""

from enum import Enum


class CategoryIcon(str, Enum):
    BACKPACK = "backpack"
    SHOPPING_BAG = "shopping-bag"
    BRIEFCASE = "briefcase"

    @classmethod
    def default(cls) -> "CategoryIcon":
        return cls.SHOPPING_BAG

    @classmethod
    def from_key(cls, key) -> "CategoryIcon":
        """Unknown or missing keys fall back to the shopping bag."""
        try:
            return cls(key)
        except ValueError:
            return cls.default()

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()

    @property
    def glyph(self) -> str:
        """Material icon name rendered by ui.icon."""
        return _GLYPHS[self]


_GLYPHS = {
    CategoryIcon.BACKPACK: "backpack",
    CategoryIcon.SHOPPING_BAG: "shopping_bag",
    CategoryIcon.BRIEFCASE: "work",
}
