"""
================================================================================
Locators and Locator Registry
================================================================================

Declarative element locators for Page Objects.

A Locator only *describes* how to find an element. It is immutable and is
resolved to a live element handle by the wait layer on every poll, never
cached.

Each Page Object builds its own LocatorRegistry in its constructor:

    >>> self.locators.register_all({
    ...     "full_name_input": Locator.by_id("userName"),
    ...     "submit_button": Locator.by_css("#submit"),
    ... })
    >>> self.locators["submit_button"]
    <Locator submit_button: css=#submit>

Supported strategies and their Playwright selector form:
    - id     -> id=<expr>
    - css    -> css=<expr>
    - xpath  -> xpath=<expr>
    - text   -> text=<expr>
    - name   -> css=[name="<expr>"]  (quotes and backslashes escaped)

xpath_literal() quotes arbitrary text for use inside an XPath expression.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Mapping

from loguru import logger


STRATEGIES = ("id", "css", "xpath", "text", "name")


def css_string(value: str) -> str:
    """Double-quoted CSS string literal for ``value``."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\a ")
    return f'"{escaped}"'


def xpath_literal(value: str) -> str:
    """
    XPath string literal for ``value``.

    XPath 1.0 has no escape sequences, so text holding both quote kinds is
    assembled with concat().
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = ", \"'\", ".join(f"'{part}'" for part in value.split("'"))
    return f"concat({parts})"


@dataclass(frozen=True, repr=False)
class Locator:
    """
    Immutable description of how to find an element.

    Attributes:
        strategy: One of STRATEGIES
        expression: Strategy-specific expression
        name: Semantic name (set when registered on a page)
    """
    strategy: str
    expression: str
    name: str = ""

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown locator strategy '{self.strategy}'. "
                f"Expected one of: {', '.join(STRATEGIES)}"
            )
        if not self.expression:
            raise ValueError("Locator expression must not be empty")

    @classmethod
    def by_id(cls, element_id: str) -> "Locator":
        return cls("id", element_id)

    @classmethod
    def by_css(cls, selector: str) -> "Locator":
        return cls("css", selector)

    @classmethod
    def by_xpath(cls, xpath: str) -> "Locator":
        return cls("xpath", xpath)

    @classmethod
    def by_text(cls, text: str) -> "Locator":
        return cls("text", text)

    @classmethod
    def by_name(cls, name: str) -> "Locator":
        return cls("name", name)

    @property
    def selector(self) -> str:
        """Playwright selector string for this locator."""
        if self.strategy == "name":
            return f"css=[name={css_string(self.expression)}]"
        return f"{self.strategy}={self.expression}"

    def named(self, name: str) -> "Locator":
        """Return a copy carrying a semantic name."""
        return replace(self, name=name)

    def __str__(self) -> str:
        if self.name:
            return f"'{self.name}'"
        return self.selector

    def __repr__(self) -> str:
        label = f"{self.name}: " if self.name else ""
        return f"<Locator {label}{self.strategy}={self.expression}>"


class LocatorRegistry:
    """
    Name -> Locator mapping owned by a single Page Object.

    Entries are write-once: a page declares its locators in its constructor
    and never re-binds them afterwards.
    """

    def __init__(self, owner: str, locators: Mapping[str, Locator] = None):
        """
        Initialize registry.

        Args:
            owner: Page name used in error messages
            locators: Optional initial name -> Locator mapping
        """
        self.owner = owner
        self._locators: Dict[str, Locator] = {}
        if locators:
            self.register_all(locators)

    def register(self, name: str, locator: Locator) -> Locator:
        """
        Register a locator under a semantic name.

        Args:
            name: Semantic element name, e.g. "submit_button"
            locator: Locator to bind

        Returns:
            The registered (named) locator

        Raises:
            ValueError: When the name is already registered
        """
        if name in self._locators:
            raise ValueError(f"{self.owner}: locator '{name}' is already registered")
        named = locator.named(name)
        self._locators[name] = named
        logger.debug(f"{self.owner}: registered locator {named!r}")
        return named

    def register_all(self, locators: Mapping[str, Locator]) -> None:
        for name, locator in locators.items():
            self.register(name, locator)

    def get(self, name: str) -> Locator:
        try:
            return self._locators[name]
        except KeyError:
            raise KeyError(
                f"{self.owner}: no locator named '{name}'. "
                f"Known: {', '.join(sorted(self._locators)) or '<none>'}"
            ) from None

    __getitem__ = get

    def __contains__(self, name: object) -> bool:
        return name in self._locators

    def __iter__(self) -> Iterator[str]:
        return iter(self._locators)

    def __len__(self) -> int:
        return len(self._locators)

    @property
    def names(self) -> List[str]:
        return list(self._locators)


__all__ = [
    "Locator",
    "LocatorRegistry",
    "STRATEGIES",
    "css_string",
    "xpath_literal",
]
