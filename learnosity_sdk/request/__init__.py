"""
Request builders for the Learnosity APIs.
"""

from learnosity_sdk.request.init import Init

__all__ = ["Init"]
