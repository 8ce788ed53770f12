"""Building blocks for watching process resource use: configuration, JSON logging and alert dispatch."""

__version__ = "0.1.0"