# pricetag/cli.py
import os

import uvicorn


def dev() -> None:
    uvicorn.run("pricetag.main:app", host="0.0.0.0", port=8000, reload=True)


def start() -> None:
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("pricetag.main:app", host="0.0.0.0", port=port)


def pytest() -> None:
    import pytest
    # Run all tests in the tests/ directory, stop after first failure
    pytest.main(["-x", "tests"])
