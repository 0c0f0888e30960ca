"""
Browser fixture

Provides a fresh, isolated Playwright page to a test and captures
diagnostics when the test fails.
"""
