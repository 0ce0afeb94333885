"""
Discord cogs for Cryptocord.

- **commands/general_cmds.py**: ``/weather`` and ``/help`` slash commands
- **listener/message_listener.py**: text triggers (word game, ``!weather``, subject redirects)
- **listener/events_listener.py**: on_ready logging/presence and command error handling
- **listener/scheduler_cog.py**: feed relay loop and daily forecast post

Each module exposes a ``setup`` function; main.py loads them explicitly.
"""
