"""
vadumpcaps Test Suite

Test Categories:
- unit/: Fast, isolated unit tests against a fake VA driver
- fixtures/: Fake driver and document helpers
"""
