# filecloud/schemas.py
from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    login: str
    password: str


class TokenOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    auth_token: str = Field(serialization_alias="auth-token")


class FileSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    filename: str
    size: int


class FileRename(BaseModel):
    filename: str
