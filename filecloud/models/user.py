from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from filecloud.models.database import Base


def login_key_for(login: str) -> str:
    return login.casefold()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    login = Column(String(255), unique=True, index=True, nullable=False)
    # casefolded login; SQLite lower() only folds ASCII
    login_key = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # One user → at most one active session
    session = relationship(
        "AuthSession",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<User {self.login}>"
