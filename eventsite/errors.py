class ResolutionError(Exception):
    """Raised for caller mistakes outside the resolution contract, such as an invalid event payload."""
    pass
