"""Resource schemas.

The client treats resources as opaque payloads: a few commonly used fields are
typed, all other fields are kept as extra attributes.
"""
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict

from .base.domain.types import Json

__all__ = [
    "Account",
    "AccountBalance",
    "AccountCreate",
    "AccountNote",
    "AccountUpdate",
    "Coupon",
    "CouponCreate",
    "CouponRedemption",
    "Empty",
    "Invoice",
    "InvoiceCollect",
    "Plan",
    "Site",
    "Subscription",
    "SubscriptionCancel",
    "SubscriptionCreate",
    "Transaction",
]


class Resource(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    object: str | None = None


class Empty(Resource):
    pass


class Site(Resource):
    subdomain: str | None = None
    mode: str | None = None
    created_at: datetime | None = None


class Account(Resource):
    code: str | None = None
    state: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    parent_account_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class AccountBalance(Resource):
    past_due: bool | None = None
    balances: list[Json] = []


class AccountNote(Resource):
    account_id: str | None = None
    message: str | None = None
    created_at: datetime | None = None


class Coupon(Resource):
    code: str | None = None
    name: str | None = None
    state: str | None = None


class CouponRedemption(Resource):
    state: str | None = None
    coupon: Coupon | None = None


class Invoice(Resource):
    number: str | None = None
    type: str | None = None
    state: str | None = None
    currency: str | None = None
    total: float | None = None


class Plan(Resource):
    code: str | None = None
    name: str | None = None
    state: str | None = None


class Subscription(Resource):
    uuid: str | None = None
    state: str | None = None
    plan: Plan | None = None
    account: Account | None = None


class Transaction(Resource):
    type: str | None = None
    status: str | None = None
    success: bool | None = None
    amount: float | None = None


# Request bodies


class Body(BaseModel):
    model_config = ConfigDict(extra="allow")


class AccountCreate(Body):
    code: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None


class AccountUpdate(Body):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None


class CouponCreate(Body):
    code: str
    name: str
    discount_type: str | None = None


class SubscriptionCreate(Body):
    plan_code: str
    currency: str
    account: AccountCreate


class SubscriptionCancel(Body):
    timeframe: str | None = None


class InvoiceCollect(Body):
    transaction_type: str | None = None
