"""
ReferenceDataLoader -- idempotent bootstrap of categories and users.

Categories and users are reference data the engine reads but never manages.
This loader exists for setup scripts, the CLI ``seed`` command and tests:
each ``ensure_*`` call returns the id of the row with that name, creating it
on first use.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_engine.logging_config import get_logger
from inventory_engine.models.category import Category
from inventory_engine.models.user import User

logger = get_logger("services.reference_data")


class ReferenceDataLoader:
    """Creates categories and users by name if they do not exist yet."""

    def __init__(self, session: Session):
        self._session = session

    def ensure_category(self, name: str) -> int:
        """
        Return the id of category ``name``, inserting it if missing.

        Two loaders racing on the same name both end up with the same id: the
        loser's insert fails the unique constraint inside a savepoint and it
        re-reads the winner's row.
        """
        existing = self._session.execute(
            select(Category.id).where(Category.name == name)
        ).scalar_one_or_none()
        if existing is not None:
            return existing

        savepoint = self._session.begin_nested()
        try:
            category = Category(name=name)
            self._session.add(category)
            self._session.flush()
            savepoint.commit()
        except IntegrityError:
            savepoint.rollback()
            logger.debug("category_insert_race", extra={"category": name})
            return self._session.execute(
                select(Category.id).where(Category.name == name)
            ).scalar_one()

        logger.info("category_created", extra={"category_id": category.id, "category": name})
        return category.id

    def ensure_user(self, name: str) -> int:
        """Return the id of the first user called ``name``, inserting one if none."""
        existing = self._session.execute(
            select(User.id).where(User.name == name).order_by(User.id).limit(1)
        ).scalar_one_or_none()
        if existing is not None:
            return existing

        user = User(name=name)
        self._session.add(user)
        self._session.flush()
        logger.info("user_created", extra={"user_id": user.id})
        return user.id
