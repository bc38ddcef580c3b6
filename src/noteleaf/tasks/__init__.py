"""
Task subsystem (layered on top of the records).

Components:
- dependency_graph.py: dependency edges with cycle checks and a reverse index
- transitions.py: optional per-kind status state machine
- ranking.py: capability-driven queue/completion/urgency queries
- task_api.py: small high-level helpers used by the rest of the app
"""
