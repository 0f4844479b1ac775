from datetime import datetime
from pydantic import BaseModel, ConfigDict


# Request schema for a new address book entry
class AddressCreate(BaseModel):
    user_id: int
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    is_default: bool = False


class AddressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    is_default: bool
    created_at: datetime
