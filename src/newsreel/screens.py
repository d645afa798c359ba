"""Screen shell: credential entry and results, as a closed set of variants."""

import asyncio
import logging
import os
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, replace
from typing import Any

from newsreel.state import ResultStateMachine

logger = logging.getLogger(__name__)

MachineFactory = Callable[[str], ResultStateMachine]
InitialLoad = Coroutine[Any, Any, list[asyncio.Task[None]]]


@dataclass(frozen=True)
class CredentialEntry:
    """Screen asking for the API key."""

    api_key: str = ""
    error: str | None = None

    @classmethod
    def from_env(cls) -> "CredentialEntry":
        return cls(api_key=os.environ.get("NEWS_API_TOKEN", ""))


@dataclass(frozen=True)
class Results:
    """Screen showing search results for an accepted API key."""

    api_key: str
    machine: ResultStateMachine


Screen = CredentialEntry | Results


def edit_credentials(screen: CredentialEntry, api_key: str) -> CredentialEntry:
    return replace(screen, api_key=api_key)


def submit_credentials(
    screen: CredentialEntry,
    build: MachineFactory,
) -> tuple[Screen, InitialLoad | None]:
    """Try to switch to the results screen with the entered key.

    Args:
        screen: Current credential screen.
        build: Builds a state machine for an API key; raises ValueError for
            a key it cannot use.

    Returns:
        The next screen and, when it is the results screen, the coroutine
        loading the initial top-headlines listing. The caller schedules it.
    """
    api_key = screen.api_key.strip()
    try:
        machine = build(api_key)
    except ValueError as e:
        logger.warning(f"Rejected credentials: {e}")
        return (replace(screen, error=str(e)), None)
    return (Results(api_key=api_key, machine=machine), machine.submit_search())


def navigate_back(screen: Screen) -> CredentialEntry:
    """Return to credential entry, keeping the last key prefilled."""
    if isinstance(screen, Results):
        return CredentialEntry(api_key=screen.api_key)
    return screen
