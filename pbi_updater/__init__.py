"""Power BI dataset refresher."""

__version__ = "0.1.0"
