# assay_runner/plugin.py
"""
pytest integration. Enable with ``pytest_plugins = ["assay_runner.plugin"]``.

    @pytest.mark.assay_include("fixtures/config.toml", "etc/config.toml")
    def test_reads_config(private_fs):
        ...

Pass ``--assay-log-level=DEBUG`` to configure logging for the session.
"""
import pytest

from assay.di import build_private_fs
from assay.errors import UsageError
from assay.logging import configure_logging
from assay_runner.directives import IncludeIn, stage


def pytest_addoption(parser):
    parser.addoption(
        "--assay-log-level",
        default=None,
        help="configure root logging at this level for private_fs output",
    )


def pytest_configure(config):
    level = config.getoption("assay_log_level")
    if level:
        configure_logging(level)
    config.addinivalue_line(
        "markers",
        "assay_include(source, destination=None): stage a file or directory into private_fs",
    )
    config.addinivalue_line(
        "markers",
        "assay_root(path): keep the private_fs directory at a persistent path",
    )


def _include_from_mark(mark, node) -> IncludeIn:
    source = mark.args[0] if mark.args else mark.kwargs.get("source")
    if source is None or len(mark.args) > 2:
        raise UsageError("assay_include takes (source, destination=None), check the marker on", node.nodeid)
    destination = mark.args[1] if len(mark.args) > 1 else mark.kwargs.get("destination")
    return IncludeIn(source=source, destination=destination)


def _includes_for(node):
    """
    Outermost node first. Module ``pytestmark`` lists keep their order;
    decorator marks are stored bottom-up, so they are reversed to put the
    top decorator first.
    """
    includes = []
    for item in node.listchain():
        marks = [m for m in item.own_markers if m.name == "assay_include"]
        if not isinstance(item, pytest.Module):
            marks.reverse()
        includes.extend(_include_from_mark(m, item) for m in marks)
    return includes


def _root_for(node):
    mark = node.get_closest_marker("assay_root")
    if mark is None:
        return None
    root = mark.args[0] if mark.args else mark.kwargs.get("path")
    if root is None:
        raise UsageError("assay_root needs a directory path, check the marker on", node.nodeid)
    return root


@pytest.fixture
def private_fs(request):
    fs = build_private_fs(root_directory=_root_for(request.node))
    try:
        stage(fs, _includes_for(request.node))
        yield fs
    finally:
        fs.close()
