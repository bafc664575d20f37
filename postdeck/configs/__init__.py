from postdeck.configs.settings import (
    DEFAULT_ERROR_MESSAGE,
    MAX_BULK_DELETE,
    MAX_CATEGORY_NAME_LENGTH,
    MAX_CONTENT_LENGTH,
    MAX_TITLE_LENGTH,
    LimiterConfig,
    Settings,
    file_logger,
    settings,
)

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "MAX_BULK_DELETE",
    "MAX_CATEGORY_NAME_LENGTH",
    "MAX_CONTENT_LENGTH",
    "MAX_TITLE_LENGTH",
    "LimiterConfig",
    "Settings",
    "file_logger",
    "settings",
]
