"""
Games module - Concrete board layouts for the engine.

Each game has its own subpackage with:
- Card definitions
- Pile, tableau and edge-rule configuration
- Initial snapshot construction
"""
