"""Infrastructure modules for the Tradux application.

Centralized infrastructure components:
- operations: Operation results and HTTP error classification
- i18n: Translation tree diff/merge engine, stores and orchestration
"""
