"""UpdateProfileCommand - create or update a user's profile and goal."""

from dataclasses import dataclass, fields
from typing import FrozenSet, Optional

import structlog

from domain.gain_plan.core.entities.user_gain_profile import UserGainProfile
from domain.gain_plan.core.exceptions.domain_errors import ProfileNotFoundError
from domain.gain_plan.core.ports.repositories import IProfileRepository, ISnapshotRepository
from domain.gain_plan.core.value_objects.biometric_profile import BiometricProfile
from domain.gain_plan.core.value_objects.goal import Goal
from domain.gain_plan.core.value_objects.profile_enums import ProteinPreference

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UpdateProfileCommand:
    """Command to create or update a user's profile.

    Attributes:
        user_id: Profile owner
        biometrics: Optional full replacement of the biometric profile
        goal: Optional new goal
        protein_preference: Optional new macro preference

    Note: creating a profile requires both biometrics and goal.
    """

    user_id: str
    biometrics: Optional[BiometricProfile] = None
    goal: Optional[Goal] = None
    protein_preference: Optional[ProteinPreference] = None

    def __post_init__(self) -> None:
        if self.biometrics is None and self.goal is None and self.protein_preference is None:
            raise ValueError("At least one field must be provided for update")


@dataclass(frozen=True)
class UpdateProfileResult:
    """Result of a profile update.

    Attributes:
        profile: Stored profile
        created: Whether the profile was created by this command
        changed_fields: Biometric fields whose value changed
        goal_changed: Whether the goal changed
        snapshot_invalidated: Whether the cached snapshot was dropped or flagged
    """

    profile: UserGainProfile
    created: bool
    changed_fields: FrozenSet[str]
    goal_changed: bool
    snapshot_invalidated: bool


class UpdateProfileHandler:
    """Handler for UpdateProfileCommand.

    A goal change deletes the snapshot (and with it the accumulated
    adaptation offset). A change to a calculation input or to the protein
    preference flags the snapshot for recomputation and keeps the offset.
    """

    def __init__(
        self,
        profile_repository: IProfileRepository,
        snapshot_repository: ISnapshotRepository,
    ):
        self._profiles = profile_repository
        self._snapshots = snapshot_repository

    async def handle(self, command: UpdateProfileCommand) -> UpdateProfileResult:
        """
        Handle profile update command.

        Raises:
            ProfileNotFoundError: If the profile does not exist and the
                command cannot create it
            ValidationError: If the new data is invalid
        """
        profile = await self._profiles.find_by_user_id(command.user_id)

        if profile is None:
            if command.biometrics is None or command.goal is None:
                raise ProfileNotFoundError(command.user_id)
            profile = UserGainProfile(
                user_id=command.user_id,
                biometrics=command.biometrics,
                goal=command.goal,
                protein_preference=command.protein_preference or ProteinPreference.MODERATE,
            )
            await self._profiles.save(profile)
            await self._snapshots.delete(command.user_id)
            logger.info("profile_created", user_id=command.user_id)
            return UpdateProfileResult(
                profile=profile,
                created=True,
                changed_fields=frozenset(),
                goal_changed=True,
                snapshot_invalidated=True,
            )

        biometric_changes = (
            {f.name: getattr(command.biometrics, f.name) for f in fields(command.biometrics)}
            if command.biometrics is not None
            else None
        )
        changed, goal_changed = profile.apply_changes(biometric_changes, command.goal)
        preference_changed = (
            command.protein_preference is not None
            and profile.update_protein_preference(command.protein_preference)
        )

        # The new inputs must be stored before the snapshot is dropped.
        await self._profiles.save(profile)
        if goal_changed:
            await self._snapshots.delete(command.user_id)
            invalidated = True
        elif profile.biometrics.requires_recalculation(changed) or preference_changed:
            await self._snapshots.invalidate(command.user_id)
            invalidated = True
        else:
            invalidated = False

        logger.info(
            "profile_updated",
            user_id=command.user_id,
            changed_fields=sorted(changed),
            goal_changed=goal_changed,
            snapshot_invalidated=invalidated,
        )
        return UpdateProfileResult(
            profile=profile,
            created=False,
            changed_fields=changed,
            goal_changed=goal_changed,
            snapshot_invalidated=invalidated,
        )
