"""In-memory implementation of IProfileRepository for testing."""

from copy import deepcopy
from typing import Optional

from domain.gain_plan.core.entities.user_gain_profile import UserGainProfile
from domain.gain_plan.core.ports.repositories import IProfileRepository


class InMemoryProfileRepository(IProfileRepository):
    """
    In-memory implementation of profile repository.

    Uses a dictionary keyed by user id. Suitable for testing and
    development. Data is lost when the application stops.
    """

    def __init__(self) -> None:
        self._profiles: dict[str, UserGainProfile] = {}

    async def save(self, profile: UserGainProfile) -> None:
        # Deep copy to prevent external mutations
        self._profiles[profile.user_id] = deepcopy(profile)

    async def find_by_user_id(self, user_id: str) -> Optional[UserGainProfile]:
        """
        Find profile by user ID.

        Returns:
            Deep copy of profile if found, None otherwise
        """
        profile = self._profiles.get(user_id)
        return deepcopy(profile) if profile else None

    async def exists(self, user_id: str) -> bool:
        return user_id in self._profiles

    def clear(self) -> None:
        """Clear all profiles from memory. Useful for test cleanup."""
        self._profiles.clear()

    def count(self) -> int:
        return len(self._profiles)
