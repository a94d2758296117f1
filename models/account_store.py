"""
AccountStore: the narrow user-account interface the auth core depends on.
"""
from __future__ import annotations

import uuid

from sqlalchemy.exc import IntegrityError

from models.user import User
from utils.exceptions import AccountNotFoundError, EmailTakenError, PersistenceError


class AccountStore:
    def __init__(self, storage):
        self._storage = storage

    def find_by_email(self, email: str) -> User:
        with self._storage.guard() as session:
            user = session.query(User).filter(User.email == email).first()
        if user is None:
            raise AccountNotFoundError("no account for email")
        return user

    def get(self, user_id: uuid.UUID | str) -> User | None:
        with self._storage.guard():
            return self._storage.get(User, str(user_id))

    def create(self, email: str, password_hash: str) -> User:
        with self._storage.guard() as session:
            if session.query(User).filter(User.email == email).first():
                raise EmailTakenError("Email already registered")
        user = User(email=email, password_hash=password_hash)
        try:
            with self._storage.guard():
                self._storage.new(user)
                self._storage.save()
        except PersistenceError as exc:
            # lost a race against a concurrent registration for the same email
            if isinstance(exc.__cause__, IntegrityError):
                raise EmailTakenError("Email already registered") from exc
            raise
        return user

    def update(self, user_id: uuid.UUID | str, email: str, password_hash: str) -> User:
        with self._storage.guard() as session:
            user = self._storage.get(User, str(user_id))
            if user is None:
                raise AccountNotFoundError("account no longer exists")
            clash = session.query(User).filter(User.email == email, User.id != user.id).first()
            if clash:
                raise EmailTakenError("Email already registered")
            user.email = email
            user.password_hash = password_hash
            self._storage.save()
        return user

    def delete_all(self) -> int:
        with self._storage.guard() as session:
            deleted = session.query(User).delete()
            self._storage.save()
            # posts and refresh tokens went with them via ON DELETE CASCADE
            session.expunge_all()
        return deleted
