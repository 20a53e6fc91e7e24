"""core

Domain data models and update rules (UI/storage independent).
"""
