"""
State model for the B2B state container.

Every locally owned structure is a frozen dataclass and every list is a
tuple, so a transition always produces a new value and unchanged parts
can be shared by reference between the old and new tree.

Server-supplied records (company, employee, quotes, approvals, spending
limits and their summaries) are kept as plain dicts, stored verbatim.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

IDLE = "idle"
LOADING = "loading"
SUCCEEDED = "succeeded"
FAILED = "failed"

# Status filter sentinel meaning "no status filter"
STATUS_ALL = "all"

DEFAULT_PAGE_SIZE = 20
DEFAULT_CURRENCY = "EUR"

Record = Dict[str, Any]


def _records(value: Any) -> Tuple[Record, ...]:
    return tuple(value or ())


@dataclass(frozen=True)
class Pagination:
    """
    Page position within a server-side list.

    total_pages = ceil(total_items / page_size); has_next_page and
    has_previous_page follow current_page.
    """
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0
    total_pages: int = 0
    has_next_page: bool = False
    has_previous_page: bool = False

    @staticmethod
    def initial() -> "Pagination":
        return Pagination()

    @staticmethod
    def calculate(current_page: int, page_size: int, total_items: int) -> "Pagination":
        total_pages = math.ceil(total_items / page_size) if page_size > 0 else 0
        return Pagination(
            current_page=current_page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
            has_next_page=current_page < total_pages,
            has_previous_page=current_page > 1,
        )

    def at_page(self, page: int) -> "Pagination":
        return Pagination.calculate(page, self.page_size, self.total_items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_page": self.current_page,
            "page_size": self.page_size,
            "total_items": self.total_items,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_previous_page": self.has_previous_page,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Pagination":
        data = data or {}
        return Pagination(
            current_page=int(data.get("current_page", 1)),
            page_size=int(data.get("page_size", DEFAULT_PAGE_SIZE)),
            total_items=int(data.get("total_items", 0)),
            total_pages=int(data.get("total_pages", 0)),
            has_next_page=bool(data.get("has_next_page", False)),
            has_previous_page=bool(data.get("has_previous_page", False)),
        )

    @staticmethod
    def coerce(value: Any) -> "Pagination":
        if isinstance(value, Pagination):
            return value
        return Pagination.from_dict(value)


@dataclass(frozen=True)
class CartItem:
    """
    One cart line, unique per product_id.

    line_total is always quantity * unit_price after a cart mutation.
    """
    product_id: str
    product_sku: str = ""
    product_name: str = ""
    product_image: str = ""
    unit_price: float = 0
    quantity: int = 0
    min_order_quantity: int = 1
    max_order_quantity: int = 0
    line_total: float = 0
    notes: Optional[str] = None
    specifications: Optional[Dict[str, str]] = None

    def with_quantity(self, quantity: int) -> "CartItem":
        return replace(self, quantity=quantity, line_total=quantity * self.unit_price)

    def clamp_quantity(self, quantity: int) -> int:
        return max(self.min_order_quantity, min(quantity, self.max_order_quantity))

    @property
    def has_valid_quantity(self) -> bool:
        return self.min_order_quantity <= self.quantity <= self.max_order_quantity

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "product_id": self.product_id,
            "product_sku": self.product_sku,
            "product_name": self.product_name,
            "product_image": self.product_image,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "min_order_quantity": self.min_order_quantity,
            "max_order_quantity": self.max_order_quantity,
            "line_total": self.line_total,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        if self.specifications is not None:
            data["specifications"] = dict(self.specifications)
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "CartItem":
        quantity = data.get("quantity", 0)
        unit_price = data.get("unit_price", 0)
        specs = data.get("specifications")
        return CartItem(
            product_id=data["product_id"],
            product_sku=data.get("product_sku", ""),
            product_name=data.get("product_name", ""),
            product_image=data.get("product_image", ""),
            unit_price=unit_price,
            quantity=quantity,
            min_order_quantity=data.get("min_order_quantity", 1),
            max_order_quantity=data.get("max_order_quantity", quantity),
            line_total=data.get("line_total", quantity * unit_price),
            notes=data.get("notes"),
            specifications=dict(specs) if specs is not None else None,
        )

    @staticmethod
    def coerce(value: Any) -> "CartItem":
        if isinstance(value, CartItem):
            return value
        return CartItem.from_dict(value)


@dataclass(frozen=True)
class CartTotals:
    """
    Cart money breakdown.

    total_discount == tier_discount + volume_discount and
    total == max(0, subtotal - total_discount + shipping_estimate + tax).
    """
    subtotal: float = 0
    tier_discount: float = 0
    volume_discount: float = 0
    total_discount: float = 0
    shipping_estimate: float = 0
    tax: float = 0
    total: float = 0
    currency: str = DEFAULT_CURRENCY

    @staticmethod
    def initial() -> "CartTotals":
        return CartTotals()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subtotal": self.subtotal,
            "tier_discount": self.tier_discount,
            "volume_discount": self.volume_discount,
            "total_discount": self.total_discount,
            "shipping_estimate": self.shipping_estimate,
            "tax": self.tax,
            "total": self.total,
            "currency": self.currency,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "CartTotals":
        data = data or {}
        return CartTotals(
            subtotal=data.get("subtotal", 0),
            tier_discount=data.get("tier_discount", 0),
            volume_discount=data.get("volume_discount", 0),
            total_discount=data.get("total_discount", 0),
            shipping_estimate=data.get("shipping_estimate", 0),
            tax=data.get("tax", 0),
            total=data.get("total", 0),
            currency=data.get("currency", DEFAULT_CURRENCY),
        )

    @staticmethod
    def coerce(value: Any) -> "CartTotals":
        if isinstance(value, CartTotals):
            return value
        return CartTotals.from_dict(value)


@dataclass(frozen=True)
class SpendingValidation:
    """Result of checking the cart against the employee/company spending limits."""
    is_within_limits: bool = True
    requires_approval: bool = False
    approval_reason: Optional[str] = None
    applicable_limits: Tuple[Record, ...] = ()
    warnings: Tuple[str, ...] = ()

    @staticmethod
    def initial() -> "SpendingValidation":
        return SpendingValidation()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_within_limits": self.is_within_limits,
            "requires_approval": self.requires_approval,
            "approval_reason": self.approval_reason,
            "applicable_limits": list(self.applicable_limits),
            "warnings": list(self.warnings),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "SpendingValidation":
        data = data or {}
        return SpendingValidation(
            is_within_limits=bool(data.get("is_within_limits", True)),
            requires_approval=bool(data.get("requires_approval", False)),
            approval_reason=data.get("approval_reason"),
            applicable_limits=_records(data.get("applicable_limits")),
            warnings=tuple(data.get("warnings") or ()),
        )

    @staticmethod
    def coerce(value: Any) -> "SpendingValidation":
        if isinstance(value, SpendingValidation):
            return value
        return SpendingValidation.from_dict(value)


@dataclass(frozen=True)
class CompanyState:
    current_company: Optional[Record] = None
    current_employee: Optional[Record] = None
    employees: Tuple[Record, ...] = ()
    status: str = IDLE
    error: Optional[str] = None
    is_b2b_active: bool = False
    last_refreshed_at: Optional[str] = None

    @staticmethod
    def initial() -> "CompanyState":
        return CompanyState()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_company": self.current_company,
            "current_employee": self.current_employee,
            "employees": list(self.employees),
            "status": self.status,
            "error": self.error,
            "is_b2b_active": self.is_b2b_active,
            "last_refreshed_at": self.last_refreshed_at,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "CompanyState":
        data = data or {}
        return CompanyState(
            current_company=data.get("current_company"),
            current_employee=data.get("current_employee"),
            employees=_records(data.get("employees")),
            status=data.get("status", IDLE),
            error=data.get("error"),
            is_b2b_active=bool(data.get("is_b2b_active", False)),
            last_refreshed_at=data.get("last_refreshed_at"),
        )


@dataclass(frozen=True)
class QuotesState:
    quotes: Tuple[Record, ...] = ()
    selected_quote: Optional[Record] = None
    filters: Dict[str, Any] = field(default_factory=dict)
    active_status_filter: str = STATUS_ALL
    search_query: str = ""
    list_status: str = IDLE
    detail_status: str = IDLE
    error: Optional[str] = None
    pagination: Pagination = field(default_factory=Pagination)

    @staticmethod
    def initial() -> "QuotesState":
        return QuotesState()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quotes": list(self.quotes),
            "selected_quote": self.selected_quote,
            "filters": dict(self.filters),
            "active_status_filter": self.active_status_filter,
            "search_query": self.search_query,
            "list_status": self.list_status,
            "detail_status": self.detail_status,
            "error": self.error,
            "pagination": self.pagination.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "QuotesState":
        data = data or {}
        return QuotesState(
            quotes=_records(data.get("quotes")),
            selected_quote=data.get("selected_quote"),
            filters=dict(data.get("filters") or {}),
            active_status_filter=data.get("active_status_filter", STATUS_ALL),
            search_query=data.get("search_query", ""),
            list_status=data.get("list_status", IDLE),
            detail_status=data.get("detail_status", IDLE),
            error=data.get("error"),
            pagination=Pagination.from_dict(data.get("pagination") or {}),
        )


@dataclass(frozen=True)
class ApprovalsState:
    """
    Approval workflow view.

    pending_approvals and all_approvals are fetched separately but are
    reconcilable by id; pending_count tracks the pending list.
    """
    pending_approvals: Tuple[Record, ...] = ()
    all_approvals: Tuple[Record, ...] = ()
    selected_approval: Optional[Record] = None
    filters: Dict[str, Any] = field(default_factory=dict)
    active_status_filter: str = STATUS_ALL
    list_status: str = IDLE
    detail_status: str = IDLE
    error: Optional[str] = None
    pending_count: int = 0
    pagination: Pagination = field(default_factory=Pagination)

    @staticmethod
    def initial() -> "ApprovalsState":
        return ApprovalsState()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pending_approvals": list(self.pending_approvals),
            "all_approvals": list(self.all_approvals),
            "selected_approval": self.selected_approval,
            "filters": dict(self.filters),
            "active_status_filter": self.active_status_filter,
            "list_status": self.list_status,
            "detail_status": self.detail_status,
            "error": self.error,
            "pending_count": self.pending_count,
            "pagination": self.pagination.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ApprovalsState":
        data = data or {}
        return ApprovalsState(
            pending_approvals=_records(data.get("pending_approvals")),
            all_approvals=_records(data.get("all_approvals")),
            selected_approval=data.get("selected_approval"),
            filters=dict(data.get("filters") or {}),
            active_status_filter=data.get("active_status_filter", STATUS_ALL),
            list_status=data.get("list_status", IDLE),
            detail_status=data.get("detail_status", IDLE),
            error=data.get("error"),
            pending_count=int(data.get("pending_count", 0)),
            pagination=Pagination.from_dict(data.get("pagination") or {}),
        )


@dataclass(frozen=True)
class CartB2BState:
    """
    B2B cart.

    can_checkout and checkout_blocked_reason are mutually consistent: the
    reason is set iff checkout is blocked.
    """
    items: Tuple[CartItem, ...] = ()
    item_count: int = 0
    totals: CartTotals = field(default_factory=CartTotals)
    spending_validation: SpendingValidation = field(default_factory=SpendingValidation)
    can_checkout: bool = False
    checkout_blocked_reason: Optional[str] = "Cart is empty"
    shipping_address_id: Optional[str] = None
    purchase_order_number: str = ""
    notes: str = ""
    status: str = IDLE
    error: Optional[str] = None
    last_updated_at: Optional[str] = None

    @staticmethod
    def initial() -> "CartB2BState":
        return CartB2BState()

    def find_index(self, product_id: str) -> int:
        for idx, item in enumerate(self.items):
            if item.product_id == product_id:
                return idx
        return -1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "item_count": self.item_count,
            "totals": self.totals.to_dict(),
            "spending_validation": self.spending_validation.to_dict(),
            "can_checkout": self.can_checkout,
            "checkout_blocked_reason": self.checkout_blocked_reason,
            "shipping_address_id": self.shipping_address_id,
            "purchase_order_number": self.purchase_order_number,
            "notes": self.notes,
            "status": self.status,
            "error": self.error,
            "last_updated_at": self.last_updated_at,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "CartB2BState":
        data = data or {}
        return CartB2BState(
            items=tuple(CartItem.from_dict(i) for i in data.get("items") or ()),
            item_count=int(data.get("item_count", 0)),
            totals=CartTotals.from_dict(data.get("totals") or {}),
            spending_validation=SpendingValidation.from_dict(
                data.get("spending_validation") or {}
            ),
            can_checkout=bool(data.get("can_checkout", False)),
            checkout_blocked_reason=data.get("checkout_blocked_reason", "Cart is empty"),
            shipping_address_id=data.get("shipping_address_id"),
            purchase_order_number=data.get("purchase_order_number", ""),
            notes=data.get("notes", ""),
            status=data.get("status", IDLE),
            error=data.get("error"),
            last_updated_at=data.get("last_updated_at"),
        )


@dataclass(frozen=True)
class RootState:
    """
    Combined state tree.

    Only the root reducer assembles it; each slice is replaced by its own
    slice reducer.
    """
    company: CompanyState = field(default_factory=CompanyState)
    quotes: QuotesState = field(default_factory=QuotesState)
    approvals: ApprovalsState = field(default_factory=ApprovalsState)
    cart: CartB2BState = field(default_factory=CartB2BState)

    @staticmethod
    def initial() -> "RootState":
        return RootState()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company": self.company.to_dict(),
            "quotes": self.quotes.to_dict(),
            "approvals": self.approvals.to_dict(),
            "cart": self.cart.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "RootState":
        data = data or {}
        return RootState(
            company=CompanyState.from_dict(data.get("company") or {}),
            quotes=QuotesState.from_dict(data.get("quotes") or {}),
            approvals=ApprovalsState.from_dict(data.get("approvals") or {}),
            cart=CartB2BState.from_dict(data.get("cart") or {}),
        )
