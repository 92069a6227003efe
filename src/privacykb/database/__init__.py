"""Database package for the knowledge base.

This package contains all storage-related functionality:
- Read-only async database service
- Reference table schema
- Per-language fallback probing
"""

# Database components should be imported directly from their modules:
# from privacykb.database.core import KnowledgeBaseDatabaseService
# from privacykb.database.fallback import fetch_first
