"""User storage, search and authentication on top of SQLAlchemy"""
from typing import List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from panel_api.core.config import settings
from panel_api.db.models.user import User
from panel_api.db.session import get_db
from panel_api.utils.exceptions import UserExistsError
from panel_api.utils.logger import logger


LIKE_ESCAPE = "\\"


def _like_pattern(value: str) -> str:
    escaped = (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return escaped.replace("*", "%")


class UserService:
    """
    Persistence operations for users.

    One instance wraps one SQLAlchemy session; the FastAPI dependency
    `get_user_service` builds a fresh one per request.
    """

    def __init__(self, db: Session):
        self.db = db

    def search(
        self,
        username_filter: str,
        email_filter: str,
        page_size: int,
        page: int
    ) -> Tuple[List[User], int]:
        """
        Find users matching both filters.

        A filter of "" or "*" matches everything; otherwise "*" acts as a
        wildcard for any run of characters. "%" and "_" match
        themselves literally.

        Returns:
            The requested page of users (ordered by id) and the total
            number of matches across all pages
        """
        query = select(User)

        if username_filter and username_filter != "*":
            query = query.where(User.username.like(_like_pattern(username_filter), escape=LIKE_ESCAPE))
        if email_filter and email_filter != "*":
            query = query.where(User.email.like(_like_pattern(email_filter), escape=LIKE_ESCAPE))

        total = self.db.scalar(select(func.count()).select_from(query.subquery())) or 0

        results = self.db.scalars(
            query.order_by(User.id).offset((page - 1) * page_size).limit(page_size)
        ).all()

        return list(results), total

    def get(self, username: str) -> Optional[User]:
        """Return the user with `username`, or None when there is none"""
        return self.db.scalar(select(User).where(User.username == username))

    def create(self, user: User) -> User:
        if not user.scopes:
            user.scopes = settings.DEFAULT_USER_SCOPES

        self.db.add(user)
        self._commit(user)
        return user

    def update(self, user: User) -> User:
        self._commit(user)
        return user

    def delete(self, username: str) -> bool:
        """Delete the user with `username`. Returns False when nothing was deleted."""
        user = self.get(username)
        if user is None:
            return False

        self.db.delete(user)
        self.db.commit()
        return True

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user when the password matches, otherwise None"""
        user = self.get(username)
        if user is None or not user.check_password(password):
            return None
        return user

    def ensure_admin(self, username: str, email: str, password: str, scopes: str) -> User:
        """Create the administrator account if it does not exist yet"""
        existing = self.db.scalar(
            select(User).where(or_(User.username == username, User.email == email))
        )
        if existing is not None:
            return existing

        admin = User(username=username, email=email, scopes=scopes)
        admin.set_password(password)
        return self.create(admin)

    def _commit(self, user: User) -> None:
        username = user.username
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error saving user {username}: {str(e.orig)}")
            raise UserExistsError("a user with that username or email already exists") from e
        self.db.refresh(user)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """FastAPI dependency providing a UserService bound to the request session"""
    return UserService(db)
