from datetime import datetime
from typing import ClassVar

from .base.domain.params import ListParams
from .base.domain.params import Params
from .base.domain.params import SortField
from .resources import InvoiceCollect
from .resources import SubscriptionCancel

__all__ = [
    "CancelSubscriptionParams",
    "CollectInvoiceParams",
    "ListAccountNotesParams",
    "ListAccountsParams",
    "ListCouponRedemptionsParams",
    "ListCouponsParams",
    "ListInvoicesParams",
    "ListPlansParams",
    "ListSitesParams",
    "ListSubscriptionsParams",
    "ListTransactionsParams",
    "TerminateSubscriptionParams",
]


class ListSitesParams(ListParams):
    pass


class ListAccountsParams(ListParams):
    email: str | None = None
    subscriber: bool | None = None
    past_due: str | None = None


class ListAccountNotesParams(Params):
    ids: list[str] | None = None


class ListCouponRedemptionsParams(Params):
    default_emitted: ClassVar[frozenset[str]] = frozenset({"sort"})

    ids: list[str] | None = None
    sort: SortField | None = None
    begin_time: datetime | None = None
    end_time: datetime | None = None


class ListCouponsParams(ListParams):
    pass


class ListInvoicesParams(ListParams):
    type: str | None = None
    state: str | None = None


class ListPlansParams(ListParams):
    state: str | None = None


class ListSubscriptionsParams(ListParams):
    state: str | None = None


class ListTransactionsParams(ListParams):
    type: str | None = None
    success: str | None = None


class TerminateSubscriptionParams(Params):
    refund: str | None = None


class CollectInvoiceParams(Params):
    body: InvoiceCollect | None = None


class CancelSubscriptionParams(Params):
    body: SubscriptionCancel | None = None
