"""Two-button profile selector shown by the host.

Only the model lives here; the host draws the dialog and calls ``press``
with the label of the button that was clicked.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Final

from trackeq.common.enums import LoadOutcome, Profile

logger: Final = logging.getLogger(__name__)


class ProfileSelector:
    """Headphones / Speakers selector wired to a profile switch callback."""

    TITLE: Final = "EQ Profile"

    def __init__(
        self,
        on_select: Callable[[Profile], LoadOutcome],
        active: Profile = Profile.HEADPHONES,
    ) -> None:
        """Initialize the selector.

        Args:
            on_select: Called with the chosen profile (usually a store's
                ``switch_profile``)
            active: Profile highlighted initially
        """
        self._on_select = on_select
        self.active = active

    @property
    def labels(self) -> list[str]:
        """Button labels in display order."""
        return [profile.label for profile in Profile]

    def press(self, label: str) -> LoadOutcome:
        """Handle a button click.

        Raises:
            ValueError: If the label does not name a profile
        """
        profile = Profile.from_label(label)
        self.active = profile
        logger.debug("Profile button pressed: %s", profile.label)
        return self._on_select(profile)
