"""Name and symbol records attached to units and scales."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

DEFAULT_LANGUAGE = "en"


@dataclass(slots=True)
class Naming:
    """Names (per language) and symbols of a unit or scale.

    The record is purely descriptive; conversion never looks at it.
    """

    name: Optional[str] = None
    symbol: Optional[str] = None
    names: Dict[str, str] = field(default_factory=dict)
    alt_names: Dict[str, List[str]] = field(default_factory=dict)
    alt_symbols: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.name and DEFAULT_LANGUAGE not in self.names:
            self.names[DEFAULT_LANGUAGE] = self.name

    def name_in(self, language: str) -> Optional[str]:
        """Return the name in ``language``, or ``None`` if there is none."""
        return self.names.get(language)

    def set_name(self, name: str, language: str = DEFAULT_LANGUAGE) -> None:
        self.names[language] = name
        if language == DEFAULT_LANGUAGE:
            self.name = name

    def languages(self) -> List[str]:
        return sorted(set(self.names) | set(self.alt_names))

    def alternative_names(self, language: Optional[str] = None) -> List[str]:
        """Alternative names in ``language``, or in every language if omitted."""
        if language is not None:
            return list(self.alt_names.get(language, []))
        collected: List[str] = []
        for lang in sorted(self.alt_names):
            collected.extend(self.alt_names[lang])
        return collected

    def add_alternative_name(self, name: str, language: str = DEFAULT_LANGUAGE) -> None:
        bucket = self.alt_names.setdefault(language, [])
        if name not in bucket:
            bucket.append(name)

    def add_alternative_symbol(self, symbol: str) -> None:
        if symbol not in self.alt_symbols:
            self.alt_symbols.append(symbol)

    def matches(self, label: str) -> bool:
        """Return ``True`` when ``label`` is any name or symbol of this record."""
        if label in (self.name, self.symbol):
            return True
        if label in self.names.values() or label in self.alt_symbols:
            return True
        return any(label in names for names in self.alt_names.values())

    def __str__(self) -> str:
        return self.symbol or self.name or "?"
