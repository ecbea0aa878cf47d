"""Public models.

    from httpbridge.models import ClientConfig, ResponseTable
"""

from httpbridge._internal.bridge.models import ResponseTable
from httpbridge._internal.config import ClientConfig

__all__ = ["ClientConfig", "ResponseTable"]
