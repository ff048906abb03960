# models/store.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateStoreRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    address: Optional[str] = None
    # resolved to an owner id only if it belongs to a store_owner
    owner_email: Optional[str] = Field(None, alias="ownerEmail")
