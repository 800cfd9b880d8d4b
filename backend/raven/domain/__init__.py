"""Pure booking domain: slot catalog, occupancy, availability, range selection and cart."""

from .availability import (
    AvailabilitySummary,
    AvailableSlot,
    SlotAvailabilitySummary,
    generate_available_slots,
    iter_dates,
    pick_slots,
    summarize_availability,
)
from .cart import (
    Cart,
    CartItem,
    CartItemCandidate,
    CartStore,
    InMemoryCartStore,
    SelectedSlot,
)
from .day_slots import (
    STANDARD_CATALOG,
    DaySlotCatalog,
    DaySlotLookup,
    DaySlotType,
    FallbackDaySlot,
    KnownDaySlot,
)
from .occupancy import (
    BookingOccupancyRecord,
    OccupancyIndex,
    SlotState,
    build_occupancy_index,
)
from .range_selection import (
    DateRangeSelection,
    RangeSelector,
    SelectionChange,
    SelectionEvent,
    SelectionMode,
    SelectionPhase,
    apply_click,
)

__all__ = [
    "AvailabilitySummary",
    "AvailableSlot",
    "BookingOccupancyRecord",
    "Cart",
    "CartItem",
    "CartItemCandidate",
    "CartStore",
    "DateRangeSelection",
    "DaySlotCatalog",
    "DaySlotLookup",
    "DaySlotType",
    "FallbackDaySlot",
    "InMemoryCartStore",
    "KnownDaySlot",
    "OccupancyIndex",
    "RangeSelector",
    "STANDARD_CATALOG",
    "SelectedSlot",
    "SelectionChange",
    "SelectionEvent",
    "SelectionMode",
    "SelectionPhase",
    "SlotAvailabilitySummary",
    "SlotState",
    "apply_click",
    "build_occupancy_index",
    "generate_available_slots",
    "iter_dates",
    "pick_slots",
    "summarize_availability",
]
