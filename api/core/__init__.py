"""
Plumbing shared by every feature package: the asyncpg pool and query
helpers (`db`), environment settings (`settings`) and root logger setup
(`logging_config`). People SQL and HTTP rules live in `people/`.
"""
