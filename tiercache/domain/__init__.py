"""Domain Layer: value objects, exceptions and interfaces (ports).

Has no dependency on the infrastructure layer.
"""
