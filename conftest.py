# conftest.py
pytest_plugins = ["assay_runner.plugin"]
