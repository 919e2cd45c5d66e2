"""Actions accepted by the order reducer.

One frozen dataclass per action. The reducer routes on the action's
class, so adding an action means adding a class here and registering a
handler in ``reducer.py``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from .normalizer import NormalizedOrder


@dataclass(frozen=True)
class SetLoading:
    value: bool


@dataclass(frozen=True)
class SetOrdersLoading:
    value: bool


@dataclass(frozen=True)
class SetOrderDetailLoading:
    value: bool


@dataclass(frozen=True)
class SetRefreshing:
    value: bool


@dataclass(frozen=True)
class SetOrders:
    """Replace or extend one status collection.

    Upstream code may hand over a non-sequence for ``orders`` on partial
    failures; the reducer coerces anything that is not a list or tuple
    to an empty collection.

    A pull-to-refresh passes ``settle_refreshing=False`` so ``refreshing``
    stays up until every bucket has settled.
    """

    status: str
    orders: Optional[Sequence[NormalizedOrder]]
    append: bool = False
    settle_refreshing: bool = True


@dataclass(frozen=True)
class SetPagination:
    status: str
    page: int
    has_more: bool


@dataclass(frozen=True)
class SetCurrentOrder:
    order: Optional[Mapping[str, Any]]


@dataclass(frozen=True)
class ClearCurrentOrder:
    pass


@dataclass(frozen=True)
class SetError:
    message: str


@dataclass(frozen=True)
class ResetError:
    pass


@dataclass(frozen=True)
class ToggleAddressDetails:
    pass


@dataclass(frozen=True)
class ToggleIssueField:
    pass


@dataclass(frozen=True)
class UpdateOrderStatus:
    """Patch one item's status everywhere it is held.

    With ``order_id`` unset, every record containing ``item_id`` matches.
    """

    item_id: Any
    new_status: str
    order_id: Any = None


Action = (
    SetLoading
    | SetOrdersLoading
    | SetOrderDetailLoading
    | SetRefreshing
    | SetOrders
    | SetPagination
    | SetCurrentOrder
    | ClearCurrentOrder
    | SetError
    | ResetError
    | ToggleAddressDetails
    | ToggleIssueField
    | UpdateOrderStatus
)
