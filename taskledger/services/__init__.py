# Services package init
"""
TaskLedger Backend — Services Layer
====================================

What:  Query layer sitting between route handlers (HTTP) and the database.
How:   Services receive the request's AsyncSession, run ORM queries, and
       raise application exceptions instead of returning error flags.

Service Inventory:
    - CrudService (base.py):           all / find / get / create / update / delete / where
    - TaskService (tasks.py):          + get_pending, get_by_priority
    - TransactionService (transactions.py), one instance per money table:
                                       + get_by_category, get_by_date_range,
                                         get_with_category
    - CategoryService (categories.py): + get_by_type
"""
