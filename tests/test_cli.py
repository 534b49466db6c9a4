import os
import subprocess
import sys
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

import app.cli as cli_module
from app.client.registry import RegistryClient

runner = CliRunner()

RECORD = {
    "id": 1,
    "certificateNumber": "DIL-2024-0001",
    "certificateHolder": "First Example Farms Cooperative",
    "countryOfOrigin": "Colombia",
    "status": "Valid",
    "certificateCanvaLink": "https://www.canva.com/design/DAF0001/view",
}


@pytest.fixture
def serve(monkeypatch):
    """Route the CLI's RegistryClient through a mock transport."""
    routes = {}

    def handler(request):
        if request.url.path == "/api/v1/certificates":
            return routes["api"](request)
        return routes.get("asset", lambda r: httpx.Response(404))(request)

    def make_client(api_url):
        return RegistryClient("http://registry.test", http=httpx.Client(transport=httpx.MockTransport(handler)))

    monkeypatch.setattr(cli_module, "_client", make_client)
    return routes


def test_search_prints_cards(serve):
    serve["api"] = lambda r: httpx.Response(200, json=[RECORD])
    result = runner.invoke(cli_module.cli, ["search", "first farms"])
    assert result.exit_code == 0
    assert "1 result" in result.output
    assert "DIL-2024-0001  [Status: Valid]" in result.output
    assert "Colombia" in result.output


def test_blank_search_exits_without_request(serve):
    serve["api"] = lambda r: pytest.fail("no request expected")
    result = runner.invoke(cli_module.cli, ["search", "  "])
    assert result.exit_code == 2
    assert "Enter a holder name, certificate number, or location." in result.output


def test_show_not_found(serve):
    serve["api"] = lambda r: httpx.Response(404, json={"message": "Certificate NOPE not found"})
    result = runner.invoke(cli_module.cli, ["show", "NOPE"])
    assert result.exit_code == 1
    assert "Certificate NOPE not found" in result.output


def test_download_writes_file(serve, tmp_path):
    serve["api"] = lambda r: httpx.Response(200, json=[RECORD])
    serve["asset"] = lambda r: httpx.Response(200, content=b"%PDF", headers={"content-type": "application/pdf"})
    result = runner.invoke(cli_module.cli, ["download", "DIL-2024-0001", "--output", str(tmp_path)])
    assert result.exit_code == 0
    assert (tmp_path / "DIL-2024-0001.pdf").read_bytes() == b"%PDF"


def test_download_fallback_prints_link(serve, tmp_path):
    serve["api"] = lambda r: httpx.Response(200, json=[RECORD])
    serve["asset"] = lambda r: httpx.Response(403)
    result = runner.invoke(cli_module.cli, ["download", "DIL-2024-0001", "--output", str(tmp_path)])
    assert result.exit_code == 1
    assert RECORD["certificateCanvaLink"] in result.output


def test_cli_runs_without_database_settings(tmp_path):
    env = {k: v for k, v in os.environ.items() if k != "DATABASE_URL"}
    env["PYTHONPATH"] = str(Path(__file__).resolve().parents[1])
    env["REGISTRY_API_URL"] = "http://registry.test"
    code = (
        "import sys, app.cli\n"
        "from app.client.config import load_client_settings\n"
        "print(load_client_settings().REGISTRY_API_URL)\n"
        "print('app.core.config' in sys.modules)\n"
    )
    proc = subprocess.run([sys.executable, "-c", code], cwd=tmp_path, env=env, capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout.split() == ["http://registry.test", "False"]
