#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
build_fixtures – creates / refreshes the sample Express project used by the
collectgen test-suite.

Usage: build_fixtures.py [ROOT]   (default: <repo>/test-fixtures)

Idempotent and 100 % Python. Every file body starts with a ``// FILE: <rel>``
marker so tests can check selection and order from the prompt text alone.
"""
from __future__ import annotations

import shutil
import sys
import textwrap
from pathlib import Path

DEFAULT_ROOT = (Path(__file__).resolve().parents[2] / "test-fixtures").resolve()

# Relative to the project root; bodies are dedented.
SOURCES = {
    "src/app.ts": """
        import express from 'express'
        import usersRouter from './routes/users'
        const app = express()
        app.use('/users', usersRouter)
        export default app
    """,
    "src/server.ts": """
        import app from './app'
        app.listen(3000)
    """,
    "src/routes.helpers.ts": """
        export const asyncHandler = (fn) => (req, res, next) => fn(req, res, next)
    """,
    "src/routes/users.ts": """
        router.get('/', listUsers)
        router.post('/', createUser)
    """,
    "src/routes/orders.ts": """
        router.patch('/:id', updateOrder)
    """,
    "src/routes/admin/admin.ts": """
        router.delete('/purge', purgeAll)
    """,
    "src/routes/controllers/nested.ts": """
        export const nested = () => 'nested'
    """,
    "src/controllers/user.controller.ts": """
        export const listUsers = async (req, res) => res.json([])
    """,
    "src/lib/routes/hidden.ts": """
        export const hidden = true
    """,
    "src/middleware/auth.ts": """
        export const requireJwt = () => {}
    """,
    "src/lib/app.ts": """
        export const notTheEntry = true
    """,
}

# Expected scan order for targets ("routes", "controllers").
EXPECTED_ORDER = [
    "src/app.ts",
    "src/controllers/user.controller.ts",
    "src/routes/controllers/nested.ts",
    "src/routes/orders.ts",
    "src/routes/users.ts",
    "src/routes.helpers.ts",
]


def _write(path: Path, rel: str, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = f"// FILE: {rel}\n" + textwrap.dedent(body).lstrip()
    path.write_text(text, encoding="utf-8")


def build(root: Path) -> Path:
    root = Path(root).resolve()
    if (root / "src").exists():
        shutil.rmtree(root / "src")
    for rel, body in SOURCES.items():
        _write(root / rel, rel, body)
    return root


def main() -> None:
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_ROOT
    print(f"✔ fixtures built in {build(target)}")


if __name__ == "__main__":
    main()
