"""
TaskLedger Backend — CLI Tests
===============================

What we test:
    ✅ `routes` prints the application table in dispatch order
    ✅ `make:model` naming rules, file contents and overwrite refusal
    ✅ No command prints help
"""

import pytest

from taskledger.cli import main
from taskledger.cli._make_model import render_model, snake_case, table_name
from taskledger.cli._routes import format_routes
from taskledger.routing import RouteTable


class TestRoutesCommand:

    def test_lists_application_routes(self, capsys):
        main(["routes"])
        out = capsys.readouterr().out.splitlines()

        assert out[0].split() == ["METHOD", "PATTERN", "KIND", "HANDLER"]
        rows = [line.split()[:2] for line in out[2:]]
        assert ["GET", "/tasks/pending"] in rows
        assert ["OPTIONS", "(.*)"] in rows
        assert rows.index(["GET", "/tasks/pending"]) < rows.index(["GET", "/tasks/{id}"])

    def test_empty_table(self):
        assert format_routes(RouteTable()) == ["No routes registered."]


class TestMakeModel:

    @pytest.mark.parametrize(
        "name, module, table",
        [
            ("Budget", "budget", "budgets"),
            ("BudgetItem", "budget_item", "budget_items"),
            ("Item2Tag", "item2tag", "item2tags"),
        ],
    )
    def test_naming(self, name, module, table):
        assert snake_case(name) == module
        assert table_name(name) == table

    def test_creates_module(self, tmp_path, capsys):
        main(["make:model", "BudgetItem", "--directory", str(tmp_path)])

        content = (tmp_path / "budget_item.py").read_text(encoding="utf-8")
        assert "class BudgetItem(Base):" in content
        assert '__tablename__ = "budget_items"' in content
        assert "budget_items" in capsys.readouterr().out

    def test_rendered_model_is_valid_python(self):
        compile(render_model("Budget"), "budget.py", "exec")

    @pytest.mark.parametrize("name", ["budget", "Budget_Item", "9Lives", "Bad-Name"])
    def test_rejects_non_pascal_case(self, name, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["make:model", name, "--directory", str(tmp_path)])

        assert exc_info.value.code == 1
        assert "PascalCase" in capsys.readouterr().err
        assert list(tmp_path.iterdir()) == []

    def test_refuses_to_overwrite(self, tmp_path, capsys):
        existing = tmp_path / "budget.py"
        existing.write_text("# keep me\n", encoding="utf-8")

        with pytest.raises(SystemExit):
            main(["make:model", "Budget", "--directory", str(tmp_path)])

        assert existing.read_text(encoding="utf-8") == "# keep me\n"
        assert "already exists" in capsys.readouterr().err


class TestHelp:

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 0
        assert "make:model" in capsys.readouterr().out
