"""RecalculationOrchestrator - read-through cache over the calculation pipeline."""

from datetime import date, datetime
from typing import List, Optional

import structlog

from domain.gain_plan.calculation.staleness import DEFAULT_STALE_HOURS, is_stale
from domain.gain_plan.core.clock import utc_now
from domain.gain_plan.core.entities.adaptation_record import AdaptationRecord
from domain.gain_plan.core.exceptions.domain_errors import (
    AdaptationAlreadyAppliedError,
    AdaptationNotFoundError,
    ProfileNotFoundError,
    SnapshotConflictError,
)
from domain.gain_plan.core.ports.repositories import (
    IAdaptationRepository,
    IProfileRepository,
    ISnapshotRepository,
)
from domain.gain_plan.core.value_objects.calculation_snapshot import CalculationSnapshot

from .calculation_pipeline import CalculationPipeline
from .user_locks import UserLocks

logger = structlog.get_logger(__name__)

MAX_WRITE_ATTEMPTS = 3


class RecalculationOrchestrator:
    """
    Keeps each user's calculation snapshot fresh.

    A snapshot is recomputed when it is missing, invalidated or older than
    the staleness threshold; otherwise the cached snapshot is returned
    without touching the store. Recomputes and adaptation folds for the
    same user are serialised with a per-user lock, and every write is a
    compare-and-swap on the snapshot version.
    """

    def __init__(
        self,
        pipeline: CalculationPipeline,
        profile_repository: IProfileRepository,
        snapshot_repository: ISnapshotRepository,
        adaptation_repository: IAdaptationRepository,
        stale_hours: float = DEFAULT_STALE_HOURS,
        locks: Optional[UserLocks] = None,
    ):
        self._pipeline = pipeline
        self._profiles = profile_repository
        self._snapshots = snapshot_repository
        self._adaptations = adaptation_repository
        self._stale_hours = stale_hours
        self._locks = locks or UserLocks()

    def needs_recalculation(
        self, snapshot: Optional[CalculationSnapshot], now: datetime
    ) -> bool:
        if snapshot is None or snapshot.invalidated:
            return True
        return is_stale(snapshot.last_calculated, now, self._stale_hours)

    async def get_snapshot(self, user_id: str) -> CalculationSnapshot:
        """
        Return the user's snapshot, recomputing it only when needed.

        Raises:
            ProfileNotFoundError: If the user has no profile on record
            ValidationError: If the stored inputs are inconsistent
        """
        current = await self._snapshots.get(user_id)
        if not self.needs_recalculation(current, utc_now()):
            logger.debug("snapshot_cache_hit", user_id=user_id, version=current.version)
            return current
        return await self.recalculate(user_id)

    async def recalculate(self, user_id: str, force: bool = False) -> CalculationSnapshot:
        """
        Recompute and store the snapshot.

        Without ``force`` the snapshot is re-checked under the user lock, so
        concurrent callers that lost the race reuse the winner's result.
        """
        async with self._locks.hold(user_id):
            return await self._refresh_locked(user_id, force=force)

    async def apply_adaptation(
        self, adaptation: AdaptationRecord, now: Optional[datetime] = None
    ) -> CalculationSnapshot:
        """
        Fold an adaptation's deltas into a new snapshot and mark it applied.

        The calorie delta moves surplus, target and adaptation offset
        together; macro deltas are added to the current gram targets.

        The stored record is re-read under the user lock and flipped to
        applied with a conditional write before the snapshot is touched,
        so each adaptation is folded at most once. If the fold fails the
        record is put back to pending.

        Raises:
            AdaptationAlreadyAppliedError: If the adaptation was already applied
            AdaptationNotFoundError: If the adaptation is not on record
            ProfileNotFoundError: If the user has no profile on record
        """
        if adaptation.applied:
            raise AdaptationAlreadyAppliedError(adaptation.adaptation_id)

        user_id = adaptation.user_id
        applied_at = now or utc_now()
        async with self._locks.hold(user_id):
            stored = await self._adaptations.get(adaptation.adaptation_id)
            if stored is None:
                raise AdaptationNotFoundError(adaptation.adaptation_id)
            if stored.applied or not await self._adaptations.mark_applied(
                stored.adaptation_id, applied_at
            ):
                raise AdaptationAlreadyAppliedError(adaptation.adaptation_id)

            try:
                saved = await self._fold_locked(stored)
            except Exception:
                logger.error(
                    "adaptation_fold_failed",
                    user_id=user_id,
                    adaptation_id=stored.adaptation_id,
                )
                await self._adaptations.save(stored)
                raise

        adaptation.mark_applied(applied_at)
        logger.info(
            "adaptation_applied",
            user_id=user_id,
            adaptation_id=adaptation.adaptation_id,
            trigger=adaptation.trigger.value,
            calorie_adjustment=adaptation.calorie_adjustment,
            target_calories=saved.target_calories,
            version=saved.version,
        )
        return saved

    async def apply_pending(
        self, user_id: str, as_of: Optional[date] = None
    ) -> List[AdaptationRecord]:
        """Apply every unapplied adaptation whose effective date has arrived.

        Adaptations applied concurrently by another caller are skipped.
        """
        as_of = as_of or utc_now().date()
        pending = await self._adaptations.find_pending(user_id, as_of)
        applied = []
        for adaptation in pending:
            try:
                await self.apply_adaptation(adaptation)
            except AdaptationAlreadyAppliedError:
                logger.info(
                    "adaptation_already_applied",
                    user_id=user_id,
                    adaptation_id=adaptation.adaptation_id,
                )
                continue
            applied.append(adaptation)
        if applied:
            logger.info("pending_adaptations_applied", user_id=user_id, count=len(applied))
        return applied

    async def _fold_locked(self, adaptation: AdaptationRecord) -> CalculationSnapshot:
        # Caller holds the user lock.
        user_id = adaptation.user_id
        current = await self._refresh_locked(user_id)
        for _ in range(MAX_WRITE_ATTEMPTS):
            folded = current.with_calorie_adjustment(
                adaptation.calorie_adjustment,
                current.macro_targets.with_adjustments(adaptation.macro_adjustments),
            )
            try:
                return await self._snapshots.save(folded, expected_version=current.version)
            except SnapshotConflictError:
                logger.info("snapshot_write_conflict", user_id=user_id, stage="apply")
                current = await self._refresh_locked(user_id)
        raise SnapshotConflictError(user_id, current.version)

    async def _refresh_locked(self, user_id: str, force: bool = False) -> CalculationSnapshot:
        # Caller holds the user lock.
        for _ in range(MAX_WRITE_ATTEMPTS):
            current = await self._snapshots.get(user_id)
            now = utc_now()
            if not force and not self.needs_recalculation(current, now):
                return current

            profile = await self._profiles.find_by_user_id(user_id)
            if profile is None:
                raise ProfileNotFoundError(user_id)

            fresh = self._pipeline.compute_calorie_plan(
                user_id,
                profile.biometrics,
                profile.goal,
                now,
                adaptation_offset=current.adaptation_offset if current else 0,
                protein_preference=profile.protein_preference,
            )
            expected = current.version if current else None
            try:
                saved = await self._snapshots.save(fresh, expected_version=expected)
            except SnapshotConflictError:
                logger.info("snapshot_write_conflict", user_id=user_id, stage="recalculate")
                force = False
                continue

            logger.info(
                "snapshot_recalculated",
                user_id=user_id,
                target_calories=saved.target_calories,
                version=saved.version,
                forced=force,
            )
            return saved

        raise SnapshotConflictError(user_id, expected)
