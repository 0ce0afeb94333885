"""
Cryptocord - crypto community Discord bot

Core Components:

- **Feed Relay**: Polls tracked social accounts every few minutes and relays
  posts that were not seen before into the relay channel of every guild
- **Weather**: ``/weather`` and ``!weather`` answer with the current forecast,
  and a daily forecast can be posted into a configured channel
- **Word Game**: ``!guess`` starts a per-channel crypto word guessing game
  with emoji and text hints
- **Subject Routing**: Messages mentioning a school subject get a pointer to
  that subject's channel

Usage:
    from cryptocord.main import main
    main()
"""
