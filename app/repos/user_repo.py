from typing import Dict, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session
from app.data.models.user import UserModel

class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_username(self, username: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.username == username)
        ).scalar_one_or_none()

    def get_users(self, user_ids: Iterable[str]) -> Dict[str, UserModel]:
        ids = set(user_ids)
        if not ids:
            return {}
        rows = self.db.execute(select(UserModel).where(UserModel.id.in_(ids))).scalars().all()
        return {u.id: u for u in rows}

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
