"""storage

Persistence of the tracker state under a single key.
"""
