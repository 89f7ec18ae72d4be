"""
TaskLedger Backend — Dispatcher Tests
======================================

What we test:
    ✅ Static and parameterised matches, parameters in order
    ✅ Query strings and fragments are ignored, escapes are not decoded
    ✅ First registered match wins, regardless of specificity
    ✅ OPTIONS catch-all covers every path
    ✅ Unknown paths and unregistered methods resolve to None
"""

from taskledger.routing import RouteTable, dispatch, resolve_path


async def list_tasks(ctx):
    return None


async def get_task(ctx, task_id):
    return None


async def pending_tasks(ctx):
    return None


async def preflight(ctx, path):
    return None


def build_table() -> RouteTable:
    table = RouteTable()
    table.get("/tasks", list_tasks)
    table.get("/tasks/{id}", get_task)
    table.options("/(.*)", preflight)
    return table.freeze()


class TestResolvePath:

    def test_strips_query_and_fragment(self):
        assert resolve_path("/tasks/42?expand=1") == "/tasks/42"
        assert resolve_path("/tasks#top") == "/tasks"

    def test_keeps_percent_escapes(self):
        assert resolve_path("/tasks/a%2Fb") == "/tasks/a%2Fb"

    def test_empty_path_is_root(self):
        assert resolve_path("") == "/"
        assert resolve_path("?x=1") == "/"


class TestDispatch:

    def setup_method(self):
        self.table = build_table()

    def test_static_match(self):
        match = dispatch(self.table, "GET", "/tasks")
        assert match.handler is list_tasks
        assert match.params == ()

    def test_parameter_match(self):
        match = dispatch(self.table, "GET", "/tasks/42")
        assert match.handler is get_task
        assert match.params == ("42",)
        assert match.route.definition == "/tasks/{id}"

    def test_extra_segment_is_not_found(self):
        assert dispatch(self.table, "GET", "/tasks/42/extra") is None

    def test_query_string_is_ignored(self):
        match = dispatch(self.table, "GET", "/tasks?status=pending")
        assert match.handler is list_tasks

    def test_unregistered_method_is_not_found(self):
        assert dispatch(self.table, "PATCH", "/tasks/42") is None
        assert dispatch(self.table, "DELETE", "/tasks/42") is None

    def test_method_comparison_is_exact(self):
        assert dispatch(self.table, "get", "/tasks") is None

    def test_options_catch_all(self):
        for uri in ("/", "/tasks", "/tasks/42?x=1", "/anything/at/all"):
            match = dispatch(self.table, "OPTIONS", uri)
            assert match.handler is preflight

        assert dispatch(self.table, "OPTIONS", "/").params == ("",)
        assert dispatch(self.table, "OPTIONS", "/tasks/42").params == ("tasks/42",)

    def test_unknown_path_is_not_found(self):
        assert dispatch(self.table, "GET", "/unknown") is None


class TestFirstMatchWins:

    def test_generic_route_registered_first_shadows_specific(self):
        table = RouteTable()
        table.get("/tasks/{id}", get_task)
        table.get("/tasks/pending", pending_tasks)

        match = dispatch(table, "GET", "/tasks/pending")
        assert match.handler is get_task
        assert match.params == ("pending",)

    def test_specific_route_registered_first_wins(self):
        table = RouteTable()
        table.get("/tasks/pending", pending_tasks)
        table.get("/tasks/{id}", get_task)

        assert dispatch(table, "GET", "/tasks/pending").handler is pending_tasks
        assert dispatch(table, "GET", "/tasks/7").handler is get_task

    def test_empty_table(self):
        assert dispatch(RouteTable(), "GET", "/") is None
