"""changecov - line-level coverage of changed code.

Intersects the lines added or modified in a changeset with an LCOV coverage
report and gates on the percentage of changed executable lines that tests hit.
"""

__version__ = "0.1.0"
