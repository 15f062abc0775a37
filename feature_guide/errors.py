"""Exception types raised inside the provider layer.

These never escape ``FeatureGuideService``; the service turns them into
safe default values. Providers and parsers raise them so the service can
tell provider failures apart from malformed model output in its logs.
"""


class FeatureGuideError(RuntimeError):
    pass


class ProviderError(FeatureGuideError):
    """Raised when a provider cannot be called (e.g. missing credential)."""


class ResponseParseError(FeatureGuideError):
    """Raised when a provider response does not match the expected shape."""
