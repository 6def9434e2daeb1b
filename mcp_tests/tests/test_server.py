import sys
import types
import uuid
import importlib.util
from pathlib import Path


def _find_server_py() -> Path:
    root = Path(__file__).resolve().parents[2]
    candidates = [
        root / "server.py",
        root / "server" / "server.py",
        root / "src" / "server" / "server.py",
    ]
    for p in candidates:
        if p.exists():
            return p
    raise FileNotFoundError(f"Could not find server.py. Tried: {candidates}")


def _install_fake_modules(monkeypatch, captures: dict):
    def _ensure_pkg(name: str):
        pkg = types.ModuleType(name)
        pkg.__path__ = []
        monkeypatch.setitem(sys.modules, name, pkg)

    # ---- Fake mcp.server.fastmcp.FastMCP ----
    _ensure_pkg("mcp")
    _ensure_pkg("mcp.server")
    fastmcp_mod = types.ModuleType("mcp.server.fastmcp")

    class DummyFastMCP:
        def __init__(self, name: str):
            captures["fastmcp_name"] = name
            captures["mcp_instance"] = self
            self.run_calls = []

        def run(self, *, transport: str):
            self.run_calls.append({"transport": transport})
            captures["run_calls"] = list(self.run_calls)

    fastmcp_mod.FastMCP = DummyFastMCP
    monkeypatch.setitem(sys.modules, "mcp.server.fastmcp", fastmcp_mod)

    # ---- Fake config ----
    config_mod = types.ModuleType("config")
    config_mod.HTTP_VERIFY = True
    config_mod.GITHUB_API_URL = "https://github.example/api"
    config_mod.GITHUB_TIMEOUT = 12.3
    config_mod.GITHUB_TOKEN = "env-token"
    config_mod.LOG_LEVEL = "DEBUG"
    config_mod.PROJECT_ROOT = Path("/srv/project")
    config_mod.URL_TIMEOUT = 7.0
    monkeypatch.setitem(sys.modules, "config", config_mod)

    # ---- Fake clients ----
    _ensure_pkg("clients")
    _ensure_pkg("clients.github")
    gh_client_mod = types.ModuleType("clients.github.client")

    class FakeGitHubClient:
        def __init__(self, **kwargs):
            captures["github_client_ctor_calls"] = captures.get("github_client_ctor_calls", []) + [kwargs]
            captures["github_client_instance"] = self

    gh_client_mod.GitHubClient = FakeGitHubClient
    monkeypatch.setitem(sys.modules, "clients.github.client", gh_client_mod)

    # ---- Fake fetcher registry ----
    _ensure_pkg("fetchers")
    registry_mod = types.ModuleType("fetchers.registry")

    def create_fetcher_registry(**kwargs):
        captures["create_registry_calls"] = captures.get("create_registry_calls", []) + [kwargs]
        registry = object()
        captures["registry_instance"] = registry
        return registry

    registry_mod.create_fetcher_registry = create_fetcher_registry
    monkeypatch.setitem(sys.modules, "fetchers.registry", registry_mod)

    # ---- Fake tools ----
    _ensure_pkg("tools")

    tools_list_mod = types.ModuleType("tools.list_files")
    tools_read_mod = types.ModuleType("tools.read_file")
    tools_build_mod = types.ModuleType("tools.build_context")

    def register_list_files(mcp, *, github_client=None):
        captures["register_list_files_calls"] = captures.get("register_list_files_calls", []) + [
            {"mcp": mcp, "github_client": github_client}
        ]

    def register_read_file(mcp, *, github_client=None):
        captures["register_read_file_calls"] = captures.get("register_read_file_calls", []) + [
            {"mcp": mcp, "github_client": github_client}
        ]

    def register_build_context(mcp, *, registry):
        captures["register_build_context_calls"] = captures.get("register_build_context_calls", []) + [
            {"mcp": mcp, "registry": registry}
        ]

    tools_list_mod.register = register_list_files
    tools_read_mod.register = register_read_file
    tools_build_mod.register = register_build_context

    monkeypatch.setitem(sys.modules, "tools.list_files", tools_list_mod)
    monkeypatch.setitem(sys.modules, "tools.read_file", tools_read_mod)
    monkeypatch.setitem(sys.modules, "tools.build_context", tools_build_mod)


def _load_server_module(monkeypatch, captures: dict):
    _install_fake_modules(monkeypatch, captures)

    server_path = _find_server_py()
    mod_name = f"server_under_test_{uuid.uuid4().hex}"
    spec = importlib.util.spec_from_file_location(mod_name, server_path)
    assert spec and spec.loader

    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, mod_name, module)
    spec.loader.exec_module(module)
    return module


def test_server_register_all_and_di(monkeypatch):
    captures = {}
    module = _load_server_module(monkeypatch, captures)

    # FastMCP created with correct name
    assert captures["fastmcp_name"] == "ctx-generator"
    mcp = captures["mcp_instance"]

    # The GitHub client is created once from config
    assert captures["github_client_ctor_calls"] == [
        {"base_url": "https://github.example/api", "token": "env-token", "timeout": 12.3, "verify": True}
    ]
    gh = captures["github_client_instance"]

    # The fetcher registry shares the same client
    assert len(captures["create_registry_calls"]) == 1
    reg_kwargs = captures["create_registry_calls"][0]
    assert reg_kwargs["github_client"] is gh
    assert reg_kwargs["project_root"] == Path("/srv/project")
    assert reg_kwargs["url_timeout"] == 7.0

    # Every tool is registered once on the same server
    assert len(captures["register_list_files_calls"]) == 1
    assert len(captures["register_read_file_calls"]) == 1
    assert len(captures["register_build_context_calls"]) == 1

    assert captures["register_list_files_calls"][0]["github_client"] is gh
    assert captures["register_read_file_calls"][0]["github_client"] is gh
    assert captures["register_build_context_calls"][0]["registry"] is captures["registry_instance"]
    assert captures["register_build_context_calls"][0]["mcp"] is mcp

    # main() runs stdio transport
    module.main()
    assert captures["run_calls"] == [{"transport": "stdio"}]
