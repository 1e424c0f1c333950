class ConversionError(Exception):
    """Raised when a document contains constructs that cannot be down-converted."""
    pass
