"""Locale and translation management engine.

Sub-packages:
- i18n: registry, resource loading, caching, resolution, pluralization,
  interpolation and the reactive LocaleSession
- persistence: key-value backends and the locale PreferenceStore
- configuration: pydantic-settings configuration
- logging: structlog setup
"""
