from pydantic import EmailStr, Field
from .base import MongoModel, PyObjectId

class UserBase(MongoModel):
    name: str = Field(min_length=1)
    email: EmailStr

class UserCreate(UserBase):
    password: str = Field(min_length=1)

class UserLogin(MongoModel):
    email: EmailStr
    password: str

class User(UserBase):
    """
    Public user fields; the password hash never leaves the database layer
    """
    id: PyObjectId = Field(alias="_id")

class AuthResponse(MongoModel):
    token: str
    user: User

class MeResponse(MongoModel):
    user: User
