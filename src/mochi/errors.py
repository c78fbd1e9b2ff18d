class ConstructionError(ValueError):
    """Board dimensions or palette size outside the supported range."""
