"""Domain Interfaces (Ports):

Defines the contracts that infrastructure components must implement.
Core application logic depends on these interfaces, not concrete
implementations.
"""
