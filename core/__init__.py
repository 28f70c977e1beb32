"""
Core package - Shared base classes for the service layer.
"""
