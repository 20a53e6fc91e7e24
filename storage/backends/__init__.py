"""storage.backends

Key-value stores the persistence bridge can write to.
"""
