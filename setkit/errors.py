"""Exception types raised at the package and API boundaries."""


class SetkitError(Exception):
    """Base class for setkit errors."""


class PackageError(SetkitError):
    """Raised for invalid operations on a package (e.g. exporting an empty one)."""
