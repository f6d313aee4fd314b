"""Entity (counterparty / business unit) domain service."""

from typing import Optional

from cajachica.database.base import Database
from cajachica.domain import errors
from cajachica.domain.entities import ActivityType, Entity, Page
from cajachica.domain.validation import coerce_enum, optional_text, paginate, require_text


class EntityService:
    """Service for managing entities."""

    def __init__(self, db: Database):
        """Initialize entity service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_entity(
        self,
        user_id: str,
        name: str,
        activity_type: ActivityType | str,
        description: Optional[str] = None,
        active: bool = True,
    ) -> int:
        """Create a new entity.

        Returns:
            Entity ID

        Raises:
            ValidationError: If the name is empty or the activity type unknown
            ConflictError: If the user already has an entity with that name
        """
        name = require_text(name, "El nombre", max_length=100)
        activity = coerce_enum(ActivityType, activity_type, "Tipo de actividad")

        if self.db.get_entity_by_name(user_id, name) is not None:
            raise errors.ConflictError(errors.duplicate_entity_name(name))

        return self.db.create_entity(
            user_id=user_id,
            name=name,
            activity_type=activity,
            description=optional_text(description),
            active=active,
        )

    def get_entity(self, user_id: str, entity_id: int) -> Optional[Entity]:
        """Get entity by ID, or None if missing or owned by someone else."""
        return self.db.get_entity(user_id, entity_id)

    def require_entity(self, user_id: str, entity_id: int) -> Entity:
        """Get entity by ID or raise NotFoundError."""
        entity = self.db.get_entity(user_id, entity_id)
        if entity is None:
            raise errors.NotFoundError(errors.ENTITY_NOT_FOUND)
        return entity

    def list_entities(
        self,
        user_id: str,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        activity_type: Optional[ActivityType | str] = None,
    ) -> list[Entity]:
        """List entities ordered by name."""
        activity = coerce_enum(ActivityType, activity_type, "Tipo de actividad") if activity_type else None
        return self.db.list_entities(user_id, active=active, search=optional_text(search), activity_type=activity)

    def list_entities_page(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        activity_type: Optional[ActivityType | str] = None,
    ) -> Page:
        """List entities one page at a time."""
        return paginate(self.list_entities(user_id, active, search, activity_type), page, limit)

    def update_entity(
        self,
        user_id: str,
        entity_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        activity_type: Optional[ActivityType | str] = None,
        active: Optional[bool] = None,
    ) -> Entity:
        """Update an entity and return the stored result.

        Raises:
            NotFoundError: If the entity does not exist for the user
            ConflictError: If the new name is already in use
        """
        self.require_entity(user_id, entity_id)

        if name is not None:
            name = require_text(name, "El nombre", max_length=100)
            existing = self.db.get_entity_by_name(user_id, name)
            if existing is not None and existing.id != entity_id:
                raise errors.ConflictError(errors.duplicate_entity_name(name))

        activity = coerce_enum(ActivityType, activity_type, "Tipo de actividad") if activity_type else None
        self.db.update_entity(
            user_id,
            entity_id,
            name=name,
            description=description,
            activity_type=activity,
            active=active,
        )
        return self.require_entity(user_id, entity_id)

    def delete_entity(self, user_id: str, entity_id: int) -> None:
        """Delete an entity that has no transactions.

        Raises:
            NotFoundError: If the entity does not exist for the user
            DependencyError: If transactions still reference the entity
        """
        self.require_entity(user_id, entity_id)

        transaction_count = self.db.count_transactions(user_id, entity_id=entity_id)
        if transaction_count > 0:
            raise errors.DependencyError(errors.delete_blocked("la entidad", transaction_count))

        self.db.delete_entity(user_id, entity_id)
