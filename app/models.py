# app/models.py
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator
from typing import Annotated, Optional, Union

# ints stay ints so prices echo back as sent
Price = Union[
    Annotated[StrictInt, Field(ge=0)],
    Annotated[StrictFloat, Field(ge=0, allow_inf_nan=False)],
]


class Product(BaseModel):
    """A stored product record. Serialized with its wire names (inStock)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    price: Union[int, float]
    category: str
    in_stock: bool = Field(default=True, alias="inStock")

    def to_response(self):
        return self.model_dump(by_alias=True)


class ProductIn(BaseModel):
    """
    Create/update payload. Unknown keys are rejected; `id` is stripped
    before this model ever sees the body.
    """

    model_config = ConfigDict(extra="forbid")

    name: StrictStr
    description: Optional[StrictStr] = None
    price: Price
    category: StrictStr
    in_stock: StrictBool = Field(default=True, alias="inStock")

    @field_validator("name", "category")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be a non-empty string")
        return v


class ProductQuery(BaseModel):
    category: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = 10
