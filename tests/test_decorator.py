# tests/test_decorator.py
import os
from pathlib import Path

import pytest

from assay import UsageError
from assay_runner import assay
from assay_runner.directives import IncludeIn, parse_includes

FIXTURES = Path(__file__).parent / "fixtures"


def test_parse_includes_accepts_all_shapes():
    parsed = parse_includes([
        "a.txt",
        ("b.txt", "dest/b.txt"),
        {"source": "c", "destination": "d"},
        IncludeIn(source=Path("e")),
    ])
    assert [(p.source, p.destination) for p in parsed] == [
        (Path("a.txt"), None),
        (Path("b.txt"), Path("dest/b.txt")),
        (Path("c"), Path("d")),
        (Path("e"), None),
    ]


def test_decorated_body_runs_inside_staged_sandbox(launch_dir: Path):
    seen = {}

    @assay(include=[FIXTURES / "greeting.txt", (FIXTURES / "tree", "nested")])
    def body(private_fs):
        seen["cwd"] = Path(os.getcwd())
        seen["path"] = private_fs.path
        seen["greeting"] = Path("greeting.txt").read_text()
        seen["z"] = Path("nested/y/z.txt").read_text()

    body()
    assert seen["cwd"] == seen["path"]
    assert seen["greeting"] == "hello\n"
    assert seen["z"] == "z\n"
    # sandbox gone, back where we started
    assert not seen["path"].exists()
    assert Path(os.getcwd()) == launch_dir.resolve()


def test_env_setup_teardown_order_and_restore(monkeypatch):
    monkeypatch.setenv("ASSAY_KEEP", "before")
    monkeypatch.delenv("ASSAY_NEW", raising=False)
    calls = []

    @assay(
        env={"ASSAY_KEEP": "during", "ASSAY_NEW": "1"},
        setup=lambda: calls.append("setup"),
        teardown=lambda: calls.append("teardown"),
    )
    def body():
        calls.append((os.environ["ASSAY_KEEP"], os.environ["ASSAY_NEW"]))
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        body()
    assert calls == ["setup", ("during", "1"), "teardown"]
    assert os.environ["ASSAY_KEEP"] == "before"
    assert "ASSAY_NEW" not in os.environ


def test_async_body_is_driven_to_completion():
    @assay
    async def body():
        return Path(os.getcwd()).name

    assert body().startswith("private")


def test_root_directory_persists(tmp_path: Path):
    root = tmp_path / "pinned"

    @assay(root_directory=root, include=[FIXTURES / "greeting.txt"])
    def body():
        Path("made.txt").write_text("made")

    body()
    assert (root / "greeting.txt").read_text() == "hello\n"
    assert (root / "made.txt").read_text() == "made"


def test_usage_error_propagates_and_cleans_up(launch_dir: Path):
    @assay(include=[(FIXTURES / "greeting.txt", "/abs.txt")])
    def body():
        pytest.fail("body must not run")

    with pytest.raises(UsageError):
        body()
    assert Path(os.getcwd()) == launch_dir.resolve()


def test_private_fs_hidden_from_signature():
    import inspect

    @assay
    def body(private_fs, other=1):
        pass

    assert list(inspect.signature(body).parameters) == ["other"]


@pytest.mark.parametrize("directive", [(), ("a", "b", "c")])
def test_malformed_tuple_directive_is_usage_error(directive):
    with pytest.raises(UsageError):
        parse_includes([directive])
