"""
Utility modules for StayInsight.

Cross-cutting concerns:
- Storage: File I/O helpers for review input and output tables
"""
