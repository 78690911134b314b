class DirPercentError(Exception):
    """Base class for errors that end a dirpercent run.

    Subclasses carry their own exit status; 1 is the fallback for anything
    raised as the base class.
    """
    exit_code = 1


class RootScanError(DirPercentError):
    """The scan root could not be listed at all."""
    exit_code = 3


class ExportError(DirPercentError):
    """The JSON report could not be written."""
    exit_code = 4
