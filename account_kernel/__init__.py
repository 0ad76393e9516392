"""
Account Kernel

Temporal validity and consistency core for financial accounts:
- Nullable timestamps that distinguish "unset" from any concrete time
- Account lifetimes as open or closed time ranges
- Accumulating, ordered field validation
- Balance-against-account date consistency with a closure boundary rule
"""

__version__ = "0.1.0"
