"""
Utility modules for the catalog manager.

Cross-cutting concerns:
- Locking: Shared/exclusive lock over the catalog
- Line format: Item and review record codec
- Formatter: Locale rendering of items, reviews and money
- Storage: Record file loading and write-back
- Snapshot: Versioned JSON dump/restore
"""
