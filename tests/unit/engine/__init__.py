"""
Tests for the interaction and synchronization engine.
"""
