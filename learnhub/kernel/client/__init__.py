"""
Remote authority client.
"""

from learnhub.kernel.client.api_client import ApiError, LearnApiClient

__all__ = [
    "ApiError",
    "LearnApiClient",
]
