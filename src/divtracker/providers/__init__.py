"""Feed provider registry."""

from __future__ import annotations

from divtracker.config import FeedProviderType
from divtracker.providers.base import BaseFeedProvider

# Lazy registry; actual classes imported on demand to avoid pulling in
# optional dependencies when they aren't used.
PROVIDER_CLASSES: dict[FeedProviderType, str] = {
    FeedProviderType.FINNHUB: "divtracker.providers.finnhub.FinnhubProvider",
    FeedProviderType.POLYGON: "divtracker.providers.polygon.PolygonProvider",
    FeedProviderType.STOCKANALYSIS: "divtracker.providers.stockanalysis.StockAnalysisProvider",
    FeedProviderType.MOCK: "divtracker.providers.mock.MockProvider",
}


def create_provider(
    provider_type: FeedProviderType,
    **kwargs,
) -> BaseFeedProvider:
    """Instantiate a provider by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = PROVIDER_CLASSES[provider_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseFeedProvider", "PROVIDER_CLASSES", "create_provider"]
