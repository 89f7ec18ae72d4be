# Routes package init
"""
TaskLedger Backend — Application Routes
========================================

What:  Handler callbacks and the function that registers them.
How:   Each module exposes `register(table)`; `build_route_table()` calls them
       in a fixed order and freezes the result.

Route Inventory:
    - system.py:        GET /, GET /health, OPTIONS (.*)
    - tasks.py:         /tasks, /tasks/pending, /tasks/priority/{priority}, /tasks/{id}
    - transactions.py:  /expenses/..., /incomes/...
    - categories.py:    /categories, /categories/type/{type}, /categories/{id}

Design Principle:
    Handlers are THIN: coerce path parameters, validate the body, call a
    service, wrap the result in the JSON envelope.
"""

from taskledger.routes import categories, system, tasks, transactions
from taskledger.routing import RouteTable


def build_route_table() -> RouteTable:
    """
    Register every application route and freeze the table.

    Raises:
        RouteDefinitionError: A route pattern does not compile. Raised while
            the app is being created, never while serving.
    """
    table = RouteTable()
    system.register(table)
    tasks.register(table)
    transactions.register(table)
    categories.register(table)
    return table.freeze()
