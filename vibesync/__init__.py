"""
VibeSync — A Mood-Sharing Social Backend
==========================================
Users post mood-tagged updates, react to friends' posts, send one-way
"vibes", and keep engagement up through daily quests, streaks, points
and badges.

Package layout::

    vibesync/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Moods, patchable fields, shared helpers
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine (in-memory by default)
    │   └── models.py      # All ORM models (7 tables)
    ├── engine/
    │   ├── streaks.py     # Daily streak calculation
    │   ├── quests.py      # Quest templates + progress transition
    │   └── badges.py      # Badge rule evaluation
    ├── services/
    │   ├── user_service.py          # Registration, patches, streaks, points
    │   ├── post_service.py          # Posts + derived counters
    │   ├── relationship_service.py  # Friendships + join helpers
    │   ├── feed_service.py          # Friend-scoped feed assembly
    │   ├── reaction_service.py      # One-reaction-per-pair likes
    │   ├── vibe_service.py          # Vibes + sender rewards
    │   ├── quest_service.py         # Daily quest lifecycle
    │   ├── badge_service.py         # Badge persistence + awarding
    │   └── spotify_client.py        # "Currently playing" lookups
    └── api/
        ├── main.py        # FastAPI app
        ├── deps.py        # Dependency injection
        ├── serializers.py # ORM → JSON dicts
        └── routes/        # REST endpoints
"""

__version__ = "0.1.0"
