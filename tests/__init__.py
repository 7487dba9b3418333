"""Unit tests for the translation gateway.

Tests use pytest with asyncio support. Time and HTTP are replaced with the fakes in conftest.py,
so no test waits in real time or touches the network.
"""
