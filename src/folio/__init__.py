"""folio: personal investment tracker."""

__version__ = "0.1.0"
