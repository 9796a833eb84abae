"""Price dashboard engine for PriceWatch.

Public API:
    PricePoint          - Immutable 5-minute price sample
    SeriesType          - Bar or smoothed-area representation
    SeriesStore         - Current 24-hour series, replaced wholesale
    ZoomController      - Requested window in hours -> chart zoom
    RangeAggregator     - Average and label for the visible window
    SeriesTypeSwitch    - Switches the series representation
    StyleResolver       - Theme/size-dependent chart options
    RefreshScheduler    - Periodic and catch-up refresh cadence
    PriceDashboard      - Wires everything together
    create_price_feed   - Factory that selects ComEd or the simulator
    create_api_router   - FastAPI router factory for the HTTP/SSE surface
"""

from .aggregate import RangeAggregator
from .dashboard import PriceDashboard
from .factory import create_price_feed
from .models import PricePoint, SeriesType
from .scheduler import RefreshScheduler
from .series import SeriesTypeSwitch
from .store import SeriesStore
from .stream import create_api_router
from .style import StyleResolver
from .zoom import ZoomController

__all__ = [
    "PricePoint",
    "SeriesType",
    "SeriesStore",
    "ZoomController",
    "RangeAggregator",
    "SeriesTypeSwitch",
    "StyleResolver",
    "RefreshScheduler",
    "PriceDashboard",
    "create_price_feed",
    "create_api_router",
]
