"""Versioning — semantic versions and synthetic build versions.

- semver: strict parsing and total ordering of ``MAJOR.MINOR.PATCH[-PRE][+BUILD]``
- generate: synthetic versions built from a timestamp and a commit hash
"""
