"""MongoDB implementation of IProfileRepository."""

from typing import Any, Dict, Optional

from domain.gain_plan.core.entities.user_gain_profile import UserGainProfile
from domain.gain_plan.core.ports.repositories import IProfileRepository
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoProfileRepository(MongoBaseRepository[UserGainProfile], IProfileRepository):
    """
    Profiles are stored one document per user, keyed by ``user_id``.

    Example document:
        {
            "_id": "user-123",
            "user_id": "user-123",
            "biometrics": {"age": 25, "biological_sex": "male", ...},
            "goal": {"target_weight_kg": 75.0, "weekly_gain_kg": 0.5, ...},
            "protein_preference": "moderate",
            "created_at": "2026-01-15T10:00:00+00:00",
            "updated_at": "2026-01-15T10:00:00+00:00"
        }
    """

    @property
    def collection_name(self) -> str:
        return "gain_profiles"

    def document_id(self, entity: UserGainProfile) -> str:
        return entity.user_id

    def from_document(self, doc: Dict[str, Any]) -> UserGainProfile:
        return UserGainProfile.from_dict(doc)

    async def save(self, profile: UserGainProfile) -> None:
        await self._replace_one({"_id": profile.user_id}, self.to_document(profile), upsert=True)

    async def find_by_user_id(self, user_id: str) -> Optional[UserGainProfile]:
        doc = await self._find_one({"_id": user_id})
        return self.from_document(doc) if doc else None

    async def exists(self, user_id: str) -> bool:
        return await self._count({"_id": user_id}) > 0
