"""
alis_utils.core - shared primitives.

The conversion modules (``duration``, ``temporal``, ``money``) each expose
``parse`` / ``encode`` and are meant to be imported as modules::

    from alis_utils.core import duration, money

    money.format(money.encode("USD", 12.5))  # '$12.50'
"""

from alis_utils.core import duration, money, temporal
from alis_utils.core.duration import Duration
from alis_utils.core.enums import (
    get_all_enum_entries,
    get_all_enum_keys,
    get_all_enum_values,
    get_enum_key_by_value,
    get_enum_value_by_key,
)
from alis_utils.core.errors import (
    ConfigError,
    DeferredCancelledError,
    DeferredError,
    DeferredTimeoutError,
    DuplicateKeyError,
    ErrorCategory,
    ErrorContext,
    InvalidRetryError,
    UtilsError,
    ValidationError,
    categorize_error,
    is_retryable,
)
from alis_utils.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from alis_utils.core.messages import (
    DateMessage,
    DurationMessage,
    MoneyMessage,
    TimestampMessage,
)
from alis_utils.core.numbers import modf
from alis_utils.core.settings import UtilsSettings, clear_settings_cache, get_settings
from alis_utils.core.strings import (
    camel_case_to_kebab_case,
    camel_case_to_pascal_case,
    camel_case_to_snake_case,
    kebab_case_to_camel_case,
    kebab_case_to_pascal_case,
    kebab_case_to_snake_case,
    pascal_case_to_camel_case,
    pascal_case_to_kebab_case,
    pascal_case_to_snake_case,
    snake_case_to_camel_case,
    snake_case_to_kebab_case,
    snake_case_to_pascal_case,
    to_constant_case,
    to_title_case,
)
from alis_utils.core.temporal import format_distance
from alis_utils.core.timestamps import utc_now

__all__ = [
    # conversion modules
    "duration",
    "money",
    "temporal",
    "Duration",
    "format_distance",
    "modf",
    # enums
    "get_all_enum_entries",
    "get_all_enum_keys",
    "get_all_enum_values",
    "get_enum_key_by_value",
    "get_enum_value_by_key",
    # errors
    "ConfigError",
    "DeferredCancelledError",
    "DeferredError",
    "DeferredTimeoutError",
    "DuplicateKeyError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidRetryError",
    "UtilsError",
    "ValidationError",
    "categorize_error",
    "is_retryable",
    # logging
    "LogContext",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
    # messages
    "DateMessage",
    "DurationMessage",
    "MoneyMessage",
    "TimestampMessage",
    # settings
    "UtilsSettings",
    "clear_settings_cache",
    "get_settings",
    # strings
    "camel_case_to_kebab_case",
    "camel_case_to_pascal_case",
    "camel_case_to_snake_case",
    "kebab_case_to_camel_case",
    "kebab_case_to_pascal_case",
    "kebab_case_to_snake_case",
    "pascal_case_to_camel_case",
    "pascal_case_to_kebab_case",
    "pascal_case_to_snake_case",
    "snake_case_to_camel_case",
    "snake_case_to_kebab_case",
    "snake_case_to_pascal_case",
    "to_constant_case",
    "to_title_case",
    # timestamps
    "utc_now",
]
