pytest_plugins = ["gitgate.testing.conftest"]
