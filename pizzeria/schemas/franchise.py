"""Schemas for franchise and store endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class FranchiseAdminRef(BaseModel):
    """Reference to an existing user, by email, who should administer a franchise."""

    email: str


class FranchiseCreateRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    admins: list[FranchiseAdminRef] = Field(default_factory=list)


class FranchiseAdmin(BaseModel):
    id: int
    name: str
    email: str


class StoreOut(BaseModel):
    id: int
    name: str


class FranchiseOut(BaseModel):
    """A franchise with its admins and stores."""

    id: int
    name: str
    admins: list[FranchiseAdmin] = Field(default_factory=list)
    stores: list[StoreOut] = Field(default_factory=list)


class FranchisesListResponse(BaseModel):
    franchises: list[FranchiseOut]
    more: bool


class StoreCreateRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)


class StoreCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    franchise_id: int = Field(..., alias="franchiseId")
