import os

import pytest

pytest_plugins = ["e2e_support.fixtures"]


def pytest_collection_modifyitems(config, items):
    # Browser tests need installed browsers and are opt-in
    if os.getenv("RUN_E2E") == "1":
        return
    skip_e2e = pytest.mark.skip(reason="set RUN_E2E=1 to run browser tests")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)
