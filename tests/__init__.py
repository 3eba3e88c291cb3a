"""Test suite for the AmbuKit authorization core.

Test structure follows the test pyramid:
- unit/: Unit tests - services, domain values and caches over in-memory fakes
- integration/: Integration tests - SQLAlchemy (aiosqlite) and Redis (fakeredis)
  adapters, the seeder and the assembled container
"""
