from __future__ import annotations

from searchbench.cli import app

if __name__ == "__main__":
    app()
