"""Named personalities that shape responses to user input."""

from __future__ import annotations

import logging

__all__ = ["PersonalityManager", "NO_PERSONALITY"]

log = logging.getLogger(__name__)

NO_PERSONALITY = "No active personality set."


class PersonalityManager:
    """Stores behaviour scripts by name and answers as the active one."""

    def __init__(self) -> None:
        self.personalities: dict[str, str] = {}
        self.active: str | None = None

    def add_personality(self, name: str, behavior_script: str) -> None:
        """Register or replace the personality ``name``."""
        self.personalities[name] = behavior_script
        log.info("Added personality: %s", name)

    def set_active_personality(self, name: str) -> None:
        """Make ``name`` the active personality; it must have been added."""
        if name not in self.personalities:
            raise KeyError(f"Personality not found: {name}")
        self.active = name
        log.info("Active personality set to: %s", name)

    def respond(self, input_text: str) -> str:
        """Return the active personality's response to ``input_text``."""
        if self.active is None or self.active not in self.personalities:
            return NO_PERSONALITY
        return f"Response based on {self.active} personality to input: {input_text}"