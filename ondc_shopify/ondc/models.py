"""
ONDC request models and the normalized Shopify product.

Only the fields the adapter reads are declared; everything else in an
inbound document is ignored. Missing or null fields fall back to empty
values so a sparse but well-formed request still decodes.
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OndcModel(BaseModel):
    """Base for inbound ONDC models: an explicit JSON null means "use the default"."""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        out = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, list):
                value = [v for v in value if v is not None]
            out[key] = value
        return out


class TagValue(OndcModel):
    code: str = ""
    value: str = ""


class Tag(OndcModel):
    code: str = ""
    list: List[TagValue] = Field(default_factory=list)

    def get(self, code: str) -> Optional[str]:
        for entry in self.list:
            if entry.code == code:
                return entry.value
        return None


class Context(OndcModel):
    domain: str = ""
    action: str = ""
    country: str = ""
    city: str = ""
    core_version: str = ""
    bap_id: str = ""
    bap_uri: str = ""
    transaction_id: str = ""
    message_id: str = ""
    timestamp: str = ""
    ttl: str = ""


# -----------------------------
# search
# -----------------------------
class Category(OndcModel):
    id: str = ""


class IntentFulfillment(OndcModel):
    type: str = ""


class IntentPayment(OndcModel):
    model_config = ConfigDict(populate_by_name=True)

    finder_fee_type: str = Field("", alias="@ondc/org/buyer_app_finder_fee_type")
    finder_fee_amount: str = Field("", alias="@ondc/org/buyer_app_finder_fee_amount")


class Intent(OndcModel):
    category: Category = Field(default_factory=Category)
    fulfillment: IntentFulfillment = Field(default_factory=IntentFulfillment)
    payment: IntentPayment = Field(default_factory=IntentPayment)
    tags: List[Tag] = Field(default_factory=list)


class SearchMessage(OndcModel):
    intent: Intent = Field(default_factory=Intent)


class SearchRequest(OndcModel):
    context: Context = Field(default_factory=Context)
    message: SearchMessage = Field(default_factory=SearchMessage)


# -----------------------------
# select / init
# -----------------------------
class Quantity(OndcModel):
    count: int = 0


class Provider(OndcModel):
    id: str = ""


class OrderItem(OndcModel):
    id: str = ""
    fulfillment_id: str = ""
    quantity: Quantity = Field(default_factory=Quantity)


class Fulfillment(OndcModel):
    id: str = ""
    type: str = ""


class Offer(OndcModel):
    id: str = ""
    tags: List[Tag] = Field(default_factory=list)

    def lookup(self, code: str) -> Optional[str]:
        for tag in self.tags:
            value = tag.get(code)
            if value is not None:
                return value
        return None


class Order(OndcModel):
    provider: Provider = Field(default_factory=Provider)
    items: List[OrderItem] = Field(default_factory=list)
    fulfillments: List[Fulfillment] = Field(default_factory=list)
    offers: List[Offer] = Field(default_factory=list)


class OrderMessage(OndcModel):
    order: Order = Field(default_factory=Order)


class SelectRequest(OndcModel):
    context: Context = Field(default_factory=Context)
    message: OrderMessage = Field(default_factory=OrderMessage)


class InitRequest(OndcModel):
    context: Context = Field(default_factory=Context)
    message: OrderMessage = Field(default_factory=OrderMessage)


# -----------------------------
# Shopify side
# -----------------------------
class NormalizedProduct(BaseModel):
    id: str
    title: str = ""
    price: str = ""
