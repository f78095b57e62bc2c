from .driver import Driver, DriverResult

__all__ = ["Driver", "DriverResult"]
