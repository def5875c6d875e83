"""Infrastructure — database session management, repositories, logging.

Invariants:
    - Everything that performs IO against the store lives here
    - Repositories return core records, never ORM objects
"""
