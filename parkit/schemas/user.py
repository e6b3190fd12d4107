"""
User schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional, Union


class User(BaseModel):
    """User record as stored in the remote `users` collection"""
    id: Union[int, str]
    email: str
    password: Optional[str] = None
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    role: Optional[str] = None
    avatar_url: str = Field("", alias="avatarUrl")
    location: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")
    
    class Config:
        populate_by_name = True
        extra = "allow"
    
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
    
    def to_record(self) -> dict:
        """Wire/storage representation with the original camelCase keys"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
