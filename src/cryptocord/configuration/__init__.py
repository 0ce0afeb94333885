"""
Configuration management for Cryptocord.

- **app_configuration.py**: YAML loader for non-secret settings (tracked feed
  accounts, relay channel, poll interval, weather city and daily forecast,
  subject channels). Falls back to defaults on a missing or malformed file.
"""
