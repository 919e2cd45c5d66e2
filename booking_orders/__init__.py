"""Order state core for the service-booking client."""

from .client import (
    OrderDataClient,
    ApiResponse,
    PageInfo,
    PartialPaymentRequest,
    NO_BOOKINGS_MESSAGE,
    extract_list,
)
from .config import ClientConfig
from .errors import (
    ClientError,
    AuthenticationError,
    NetworkError,
    HTTPError,
    DomainError,
    InvalidArgumentError,
    AUTH_REQUIRED_MESSAGE,
    NETWORK_ERROR_MESSAGE,
)
from .logs import configure_logging
from .status import (
    OrderStatus,
    StatusBucket,
    TRANSITIONS,
    parse_status,
    can_transition,
    is_terminal,
    can_cancel,
    can_reschedule,
    display_label,
    bucket_key,
)
from .validation import require_id, require_text, require_rating
from .wrappers import BookingW, ItemW
from .normalizer import WithItem, BareBooking, NormalizedOrder, normalize, normalize_booking
from .actions import (
    Action,
    SetLoading,
    SetOrdersLoading,
    SetOrderDetailLoading,
    SetRefreshing,
    SetOrders,
    SetPagination,
    SetCurrentOrder,
    ClearCurrentOrder,
    SetError,
    ResetError,
    ToggleAddressDetails,
    ToggleIssueField,
    UpdateOrderStatus,
)
from .state import OrderState, OrderCollections, Pagination, Cursor, initial_state
from .reducer import ReducerRouter, order_reducer, reduce
from .store import Store, RequestScope
from .notifications import Notifier, LoggingNotifier
from .operations import OrderOperations, OperationResult

__all__ = [
    # Client
    "OrderDataClient",
    "ApiResponse",
    "PageInfo",
    "PartialPaymentRequest",
    "NO_BOOKINGS_MESSAGE",
    "extract_list",
    "ClientConfig",
    # Errors
    "ClientError",
    "AuthenticationError",
    "NetworkError",
    "HTTPError",
    "DomainError",
    "InvalidArgumentError",
    "AUTH_REQUIRED_MESSAGE",
    "NETWORK_ERROR_MESSAGE",
    # Logging
    "configure_logging",
    # Status
    "OrderStatus",
    "StatusBucket",
    "TRANSITIONS",
    "parse_status",
    "can_transition",
    "is_terminal",
    "can_cancel",
    "can_reschedule",
    "display_label",
    "bucket_key",
    # Validation
    "require_id",
    "require_text",
    "require_rating",
    # Wrappers
    "BookingW",
    "ItemW",
    # Normalizer
    "WithItem",
    "BareBooking",
    "NormalizedOrder",
    "normalize",
    "normalize_booking",
    # Actions
    "Action",
    "SetLoading",
    "SetOrdersLoading",
    "SetOrderDetailLoading",
    "SetRefreshing",
    "SetOrders",
    "SetPagination",
    "SetCurrentOrder",
    "ClearCurrentOrder",
    "SetError",
    "ResetError",
    "ToggleAddressDetails",
    "ToggleIssueField",
    "UpdateOrderStatus",
    # State
    "OrderState",
    "OrderCollections",
    "Pagination",
    "Cursor",
    "initial_state",
    # Reducer
    "ReducerRouter",
    "order_reducer",
    "reduce",
    # Store
    "Store",
    "RequestScope",
    # Operations
    "Notifier",
    "LoggingNotifier",
    "OrderOperations",
    "OperationResult",
]
