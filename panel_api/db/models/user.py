"""User database model"""
from typing import List

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from panel_api.core.security import get_password_hash, verify_password
from panel_api.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False, default="")
    scopes = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def set_password(self, password: str) -> None:
        self.hashed_password = get_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.hashed_password:
            return False
        return verify_password(password, self.hashed_password)

    @property
    def scope_list(self) -> List[str]:
        return (self.scopes or "").split()

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
