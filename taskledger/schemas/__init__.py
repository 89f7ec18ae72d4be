# Schemas package init
"""
TaskLedger Backend — Pydantic Schemas
======================================

What:  The API contract: payload validation for request bodies and the
       serialized shape of every row returned to clients.

Modules:
    - task.py:         TaskCreate / TaskUpdate / TaskResponse
    - transaction.py:  shared by expenses and incomes
    - category.py:     CategoryCreate / CategoryUpdate / CategoryResponse
    - system.py:       ApiMetadata / HealthResponse
"""
