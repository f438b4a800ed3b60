"""Infrastructure Layer: Contains concrete implementations and adapters.

Implements the interfaces defined in the domain layer: eviction policies,
cache levels, the multilevel cache, console display, configuration and
logging setup.
"""
