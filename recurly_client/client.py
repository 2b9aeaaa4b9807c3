from typing import Any
from typing import TypeVar

import inject
from pydantic import BaseModel

from .api_client import ApiProvider
from .api_client import AsyncPager
from .api_client import build_url
from .api_client import interpolate_path
from .api_client import Pager
from .api_client import SyncApiProvider
from .base.domain.params import Params
from .base.domain.params import RequestParams
from .base.domain.types import Json
from .params import CancelSubscriptionParams
from .params import CollectInvoiceParams
from .params import ListAccountNotesParams
from .params import ListAccountsParams
from .params import ListCouponRedemptionsParams
from .params import ListCouponsParams
from .params import ListInvoicesParams
from .params import ListPlansParams
from .params import ListSitesParams
from .params import ListSubscriptionsParams
from .params import ListTransactionsParams
from .params import TerminateSubscriptionParams
from .resources import Account
from .resources import AccountBalance
from .resources import AccountCreate
from .resources import AccountNote
from .resources import AccountUpdate
from .resources import Coupon
from .resources import CouponCreate
from .resources import CouponRedemption
from .resources import Invoice
from .resources import Plan
from .resources import Site
from .resources import Subscription
from .resources import SubscriptionCreate
from .resources import Transaction
from .settings import ClientSettings

__all__ = ["AsyncClient", "Client"]

T = TypeVar("T", bound=BaseModel)


class Operations:
    """The endpoints of the API.

    Every operation builds its path and hands it to ``call`` (single objects)
    or ``pager`` (lists). On the ``AsyncClient`` single-object operations
    return awaitables and list operations return an ``AsyncPager``.
    """

    interpolate_path = staticmethod(interpolate_path)

    def call(
        self,
        method: str,
        path: str,
        result_type: type[T],
        body: BaseModel | Json | None = None,
        params: RequestParams | None = None,
    ) -> Any:
        raise NotImplementedError()

    def pager(
        self, item_type: type[T], path: str, params: RequestParams | None = None
    ) -> Any:
        raise NotImplementedError()

    # Sites

    def list_sites(self, params: ListSitesParams | None = None):
        return self.pager(Site, "/sites", params)

    def get_site(self, site_id: str):
        return self.call("GET", self.interpolate_path("/sites/{site_id}", site_id), Site)

    # Accounts

    def list_accounts(self, params: ListAccountsParams | None = None):
        return self.pager(Account, "/accounts", params)

    def create_account(self, body: AccountCreate, params: Params | None = None):
        return self.call("POST", "/accounts", Account, body=body, params=params)

    def get_account(self, account_id: str):
        path = self.interpolate_path("/accounts/{account_id}", account_id)
        return self.call("GET", path, Account)

    def update_account(
        self, account_id: str, body: AccountUpdate, params: Params | None = None
    ):
        path = self.interpolate_path("/accounts/{account_id}", account_id)
        return self.call("PUT", path, Account, body=body, params=params)

    def deactivate_account(self, account_id: str, params: Params | None = None):
        path = self.interpolate_path("/accounts/{account_id}", account_id)
        return self.call("DELETE", path, Account, params=params)

    def reactivate_account(self, account_id: str, params: Params | None = None):
        path = self.interpolate_path("/accounts/{account_id}/reactivate", account_id)
        return self.call("PUT", path, Account, params=params)

    def get_account_balance(self, account_id: str):
        path = self.interpolate_path("/accounts/{account_id}/balance", account_id)
        return self.call("GET", path, AccountBalance)

    def list_account_notes(
        self, account_id: str, params: ListAccountNotesParams | None = None
    ):
        path = self.interpolate_path("/accounts/{account_id}/notes", account_id)
        return self.pager(AccountNote, path, params)

    def get_account_note(self, account_id: str, account_note_id: str):
        path = self.interpolate_path(
            "/accounts/{account_id}/notes/{account_note_id}",
            account_id,
            account_note_id,
        )
        return self.call("GET", path, AccountNote)

    def list_account_subscriptions(
        self, account_id: str, params: ListSubscriptionsParams | None = None
    ):
        path = self.interpolate_path("/accounts/{account_id}/subscriptions", account_id)
        return self.pager(Subscription, path, params)

    def list_account_invoices(
        self, account_id: str, params: ListInvoicesParams | None = None
    ):
        path = self.interpolate_path("/accounts/{account_id}/invoices", account_id)
        return self.pager(Invoice, path, params)

    def list_account_coupon_redemptions(
        self, account_id: str, params: ListCouponRedemptionsParams | None = None
    ):
        path = self.interpolate_path(
            "/accounts/{account_id}/coupon_redemptions", account_id
        )
        return self.pager(CouponRedemption, path, params)

    def list_child_accounts(
        self, account_id: str, params: ListAccountsParams | None = None
    ):
        path = self.interpolate_path("/accounts/{account_id}/accounts", account_id)
        return self.pager(Account, path, params)

    # Coupons

    def list_coupons(self, params: ListCouponsParams | None = None):
        return self.pager(Coupon, "/coupons", params)

    def create_coupon(self, body: CouponCreate, params: Params | None = None):
        return self.call("POST", "/coupons", Coupon, body=body, params=params)

    def get_coupon(self, coupon_id: str):
        path = self.interpolate_path("/coupons/{coupon_id}", coupon_id)
        return self.call("GET", path, Coupon)

    def deactivate_coupon(self, coupon_id: str, params: Params | None = None):
        path = self.interpolate_path("/coupons/{coupon_id}", coupon_id)
        return self.call("DELETE", path, Coupon, params=params)

    # Invoices

    def list_invoices(self, params: ListInvoicesParams | None = None):
        return self.pager(Invoice, "/invoices", params)

    def get_invoice(self, invoice_id: str):
        path = self.interpolate_path("/invoices/{invoice_id}", invoice_id)
        return self.call("GET", path, Invoice)

    def collect_invoice(
        self, invoice_id: str, params: CollectInvoiceParams | None = None
    ):
        path = self.interpolate_path("/invoices/{invoice_id}/collect", invoice_id)
        body = params.body if params is not None else None
        return self.call("PUT", path, Invoice, body=body, params=params)

    def void_invoice(self, invoice_id: str, params: Params | None = None):
        path = self.interpolate_path("/invoices/{invoice_id}/void", invoice_id)
        return self.call("PUT", path, Invoice, params=params)

    def list_related_invoices(self, invoice_id: str):
        path = self.interpolate_path(
            "/invoices/{invoice_id}/related_invoices", invoice_id
        )
        return self.pager(Invoice, path)

    # Plans

    def list_plans(self, params: ListPlansParams | None = None):
        return self.pager(Plan, "/plans", params)

    def get_plan(self, plan_id: str):
        return self.call("GET", self.interpolate_path("/plans/{plan_id}", plan_id), Plan)

    # Subscriptions

    def list_subscriptions(self, params: ListSubscriptionsParams | None = None):
        return self.pager(Subscription, "/subscriptions", params)

    def create_subscription(
        self, body: SubscriptionCreate, params: Params | None = None
    ):
        return self.call(
            "POST", "/subscriptions", Subscription, body=body, params=params
        )

    def get_subscription(self, subscription_id: str):
        path = self.interpolate_path(
            "/subscriptions/{subscription_id}", subscription_id
        )
        return self.call("GET", path, Subscription)

    def terminate_subscription(
        self, subscription_id: str, params: TerminateSubscriptionParams | None = None
    ):
        path = self.interpolate_path(
            "/subscriptions/{subscription_id}", subscription_id
        )
        return self.call("DELETE", build_url(path, params), Subscription, params=params)

    def cancel_subscription(
        self, subscription_id: str, params: CancelSubscriptionParams | None = None
    ):
        path = self.interpolate_path(
            "/subscriptions/{subscription_id}/cancel", subscription_id
        )
        body = params.body if params is not None else None
        return self.call("PUT", path, Subscription, body=body, params=params)

    def reactivate_subscription(
        self, subscription_id: str, params: Params | None = None
    ):
        path = self.interpolate_path(
            "/subscriptions/{subscription_id}/reactivate", subscription_id
        )
        return self.call("PUT", path, Subscription, params=params)

    # Transactions

    def list_transactions(self, params: ListTransactionsParams | None = None):
        return self.pager(Transaction, "/transactions", params)

    def get_transaction(self, transaction_id: str):
        path = self.interpolate_path("/transactions/{transaction_id}", transaction_id)
        return self.call("GET", path, Transaction)


class Client(Operations):
    """Synchronous API client.

    Args:
        provider_override: The provider to use. If not given, the
            ``SyncApiProvider`` that is bound in ``inject`` is used.
    """

    def __init__(self, provider_override: SyncApiProvider | None = None):
        self.provider_override = provider_override

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "Client":
        headers = settings.headers()
        return cls(
            SyncApiProvider(
                url=settings.url,
                headers_factory=lambda: headers,
                retries=settings.retries,
                backoff_factor=settings.backoff_factor,
                timeout=settings.timeout,
            )
        )

    @property
    def provider(self) -> SyncApiProvider:
        return self.provider_override or inject.instance(SyncApiProvider)

    def call(
        self,
        method: str,
        path: str,
        result_type: type[T],
        body: BaseModel | Json | None = None,
        params: RequestParams | None = None,
    ) -> T:
        return self.provider.call(method, path, result_type, body=body, params=params)

    def pager(
        self, item_type: type[T], path: str, params: RequestParams | None = None
    ) -> Pager[T]:
        return Pager(self.provider, item_type, build_url(path, params), params)


# This is a copy-paste of Client, with async / await added


class AsyncClient(Operations):
    def __init__(self, provider_override: ApiProvider | None = None):
        self.provider_override = provider_override

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "AsyncClient":
        headers = settings.headers()

        async def headers_factory():
            return headers

        return cls(
            ApiProvider(
                url=settings.url,
                headers_factory=headers_factory,
                retries=settings.retries,
                backoff_factor=settings.backoff_factor,
                timeout=settings.timeout,
            )
        )

    @property
    def provider(self) -> ApiProvider:
        return self.provider_override or inject.instance(ApiProvider)

    async def call(
        self,
        method: str,
        path: str,
        result_type: type[T],
        body: BaseModel | Json | None = None,
        params: RequestParams | None = None,
    ) -> T:
        return await self.provider.call(
            method, path, result_type, body=body, params=params
        )

    def pager(
        self, item_type: type[T], path: str, params: RequestParams | None = None
    ) -> AsyncPager[T]:
        return AsyncPager(self.provider, item_type, build_url(path, params), params)
