"""
Roster Test Suite
=================

Test Organization
-----------------
- tests/unit/          : Fast unit tests (in-memory repository, mocks)
- tests/integration/   : Integration tests against a real SQLite database

Testing Philosophy
------------------
- Unit tests: Fast, isolated, test business logic
- Integration tests: Test the SQL backend against the same contract
- Use pytest markers to categorize and selectively run tests
- Follow AAA pattern: Arrange, Act, Assert
"""
