"""Infrastructure modules for the caption service.

Centralized infrastructure components:
- configuration: Settings management (Settings, CaptionSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- services: Application-scoped providers (get_settings)
- i18n: Localized caption delivery (cache, loader, store, resolver)
"""
