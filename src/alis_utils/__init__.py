"""
alis-build-utils - settleable futures and small value-conversion helpers.

- alis_utils.execution: Deferred, RetryableDeferred, DeferredPool
- alis_utils.core: errors, logging, settings, and the duration / temporal /
  money / strings / enums / numbers helpers
"""

__version__ = "0.1.0"

from alis_utils.core import *  # noqa
from alis_utils.execution import *  # noqa
