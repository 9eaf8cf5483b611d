"""
================================================================================
Test Data Factory
================================================================================

This module provides random user data for UI form scenarios.

Features:
- Random names, emails and addresses
- Reproducible output with a seed
- Fixed special-character payload for input acceptance checks

================================================================================
"""

from typing import Dict, Optional
import random
import string


# Payload used to check that free-text fields accept and echo symbols
SPECIAL_CHARACTERS = "!@!&^%%^#$@#$^#!"

FIRST_NAMES = [
    "Amira", "Bojan", "Chloe", "Dario", "Elena", "Filip", "Greta", "Hugo",
    "Ines", "Jonas", "Kaja", "Luka", "Maya", "Nikola", "Olga", "Petar",
]

LAST_NAMES = [
    "Andersen", "Bauer", "Costa", "Dimitrov", "Eriksen", "Fischer",
    "Horvat", "Ivanova", "Jensen", "Kovac", "Lindqvist", "Markovski",
]

STREETS = [
    "Main Street", "Oak Avenue", "Maple Road", "Station Square",
    "River Lane", "Hill Crescent", "Market Street",
]

CITIES = ["Skopje", "Berlin", "Lisbon", "Oslo", "Zagreb", "Vienna", "Prague"]


class UserDataFactory:
    """
    Factory for random user data.

    Example:
        factory = UserDataFactory(seed=42)
        factory.email()          # 'maya.kovac.x3k9@example.com'
        factory.text_box_form()  # full name, email and both addresses
    """

    EMAIL_DOMAIN = "example.com"

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize factory with optional random seed.

        Args:
            seed: Random seed for reproducible data generation
        """
        self._random = random.Random(seed)

    def _random_string(self, length: int = 4) -> str:
        """Generate random alphanumeric string."""
        chars = string.ascii_lowercase + string.digits
        return ''.join(self._random.choice(chars) for _ in range(length))

    def first_name(self) -> str:
        return self._random.choice(FIRST_NAMES)

    def last_name(self) -> str:
        return self._random.choice(LAST_NAMES)

    def full_name(self) -> str:
        return f"{self.first_name()} {self.last_name()}"

    def email(self) -> str:
        local = f"{self.first_name()}.{self.last_name()}.{self._random_string()}".lower()
        return f"{local}@{self.EMAIL_DOMAIN}"

    def address(self) -> str:
        number = self._random.randint(1, 250)
        return f"{number} {self._random.choice(STREETS)}, {self._random.choice(CITIES)}"

    def text_box_form(self) -> Dict[str, str]:
        """Data for every field of the Text Box form."""
        return {
            "full_name": self.full_name(),
            "email": self.email(),
            "current_address": self.address(),
            "permanent_address": self.address(),
        }
