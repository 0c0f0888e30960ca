"""
BrowserStack Automate integration

Capabilities for connecting Playwright to the BrowserStack grid, the
executor side channel used to talk to a running session, and the REST API.
"""
