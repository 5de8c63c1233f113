"""
Shared Kernel

Base classes and utilities shared across the pricing, booking and
document contexts.
"""
