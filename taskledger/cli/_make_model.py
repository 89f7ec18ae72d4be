"""``taskledger make:model``: scaffold a SQLAlchemy model module.

``taskledger make:model BudgetItem`` writes ``budget_item.py`` with a
``BudgetItem`` model mapped to the ``budget_items`` table. The new module is
not imported anywhere; add it to ``taskledger/models/__init__.py`` and write
an Alembic migration for the table.
"""

import argparse
import re
import sys
from pathlib import Path

MODEL_NAME_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")

MODEL_TEMPLATE = '''"""
TaskLedger Backend — {name} SQLAlchemy Model
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from taskledger.database import Base


class {name}(Base):
    __tablename__ = "{table}"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{name}(id={{self.id}})>"
'''


def snake_case(name: str) -> str:
    """``BudgetItem`` → ``budget_item``. Digit runs stay attached."""
    return re.sub(r"([a-z])([A-Z])", r"\1_\2", name).lower()


def table_name(name: str) -> str:
    """Plural table name: snake_case plus a trailing ``s``."""
    return f"{snake_case(name)}s"


def default_models_dir() -> Path:
    import taskledger.models

    return Path(taskledger.models.__file__).resolve().parent


def render_model(name: str) -> str:
    return MODEL_TEMPLATE.format(name=name, table=table_name(name))


def make_model(args: argparse.Namespace) -> None:
    """Write the model module; refuses invalid names and existing files."""
    name = args.name
    if not MODEL_NAME_RE.match(name):
        print(
            f"Error: invalid model name '{name}'. The name must start with an "
            "upper-case letter and contain only letters and digits (PascalCase).",
            file=sys.stderr,
        )
        raise SystemExit(1)

    directory = Path(args.directory) if args.directory else default_models_dir()
    directory.mkdir(parents=True, exist_ok=True)

    target = directory / f"{snake_case(name)}.py"
    if target.exists():
        print(f"Error: model '{name}' already exists at {target}", file=sys.stderr)
        raise SystemExit(1)

    target.write_text(render_model(name), encoding="utf-8")
    print(f"Created model '{name}' (table '{table_name(name)}') at {target}")
