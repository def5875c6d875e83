"""Services Layer — identity resolution, operation handlers, projection, dispatch.

Invariants:
    - Handlers split by resource (auth, task lists, to-dos)
    - Operation dispatch uses explicit dict mapping (no auto-discovery)
    - Every handler receives its store access through RequestContext
"""
