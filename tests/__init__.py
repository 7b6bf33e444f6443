"""
Tests Package.

This package contains test suites for the DAG ledger implementation, including
unit tests for vertex parsing, reference inversion, depth labeling and the
statistics, plus integration tests against the reference database.
"""

# Tests Package
