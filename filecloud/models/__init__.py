from filecloud.models.database import Base
from filecloud.models.user import User
from filecloud.models.session import AuthSession
from filecloud.models.file import StoredFile

__all__ = ["Base", "User", "AuthSession", "StoredFile"]
