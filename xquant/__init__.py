"""Trading building blocks: models, execution strategies, signals, order management and market data streams."""

__version__ = "0.1.0"