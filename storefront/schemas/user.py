from pydantic import BaseModel, EmailStr, Field
from datetime import datetime

from storefront.models.users import UserRole

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for user registration requests
class UserCreate(UserBase):
    password: str = Field(min_length=8)
    first_name: str
    last_name: str
    role: UserRole = UserRole.CUSTOMER

# Output schema for user profile details, the password hash never leaves the server
class UserResponse(UserBase):
    id: int
    role: UserRole
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

# Successful login: the account plus a bearer token for later calls
class LoginResponse(Token):
    user: UserResponse

