class RiskMapError(RuntimeError):
    pass


class RiskSourceError(RiskMapError):
    """A boundary or risk source could not be read or parsed."""


class MapAlreadyBoundError(RiskMapError):
    pass
