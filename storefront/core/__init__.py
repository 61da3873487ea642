"""
Core layer: domain building blocks, cache, logging, containers and utilities
shared by every storefront domain.
"""
