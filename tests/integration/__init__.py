"""tests.integration package

Integration-level suites that exercise the service through its public HTTP
interface.  Run only these with ``pytest -m integration``.
"""
