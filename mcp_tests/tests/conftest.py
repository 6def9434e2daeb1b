import httpx
import pytest


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator


class FakeItem:
    """Discovered item stand-in that counts content reads."""

    def __init__(self, relative_path: str, content: str = "") -> None:
        self.relative_path = relative_path
        self._content = content
        self.reads = 0

    @property
    def name(self) -> str:
        return self.relative_path.rsplit("/", 1)[-1]

    def read(self) -> str:
        self.reads += 1
        return self._content


def route_transport(routes: dict, calls: list = None) -> httpx.MockTransport:
    """
    Build an httpx.MockTransport from a route table.

    routes keys:
        (METHOD, PATH) -> httpx.Response  OR  (status_code, json, content)
    """
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)

        key = (request.method.upper(), request.url.path)
        if key not in routes:
            return httpx.Response(404, json={"message": "not found"})

        val = routes[key]
        if isinstance(val, httpx.Response):
            return val

        status_code, js, content = val
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=js)

    return httpx.MockTransport(handler)


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def project(tmp_path):
    """Small project tree used by local discovery tests."""
    (tmp_path / "README.md").write_text("# Demo\n", encoding="utf-8")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("import os\n\nprint('app')\n", encoding="utf-8")
    (tmp_path / "src" / "util.py").write_text("def helper():\n    return 1\n", encoding="utf-8")
    (tmp_path / "src" / "core").mkdir()
    (tmp_path / "src" / "core" / "models.py").write_text("class Model:\n    pass\n", encoding="utf-8")
    (tmp_path / "tests").mkdir()
    (tmp_path / "tests" / "test_app.py").write_text("def test_app():\n    assert True\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_transport():
    return route_transport


@pytest.fixture
def make_item():
    return FakeItem
