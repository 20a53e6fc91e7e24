"""engine

Headless state transitions and the session controller.
"""
