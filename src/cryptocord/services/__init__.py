"""
Services used by the cogs:

- **feed_relay.py**: one polling cycle of the social feed relay
- **weather_service.py**: forecast delivery with user-visible failure message
- **subject_router.py**: subject keyword to channel redirects
"""
