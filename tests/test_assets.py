import httpx
import pytest

from app.services.assets import (
    AssetUnavailable,
    asset_filename,
    content_disposition,
    extension_for,
    fetch_design_asset,
)


@pytest.mark.parametrize(
    "content_type, ext",
    [
        ("application/pdf", "pdf"),
        ("image/png", "png"),
        ("image/jpeg", "jpg"),
        ("text/html; charset=utf-8", "bin"),
        ("", "bin"),
    ],
)
def test_extension_for(content_type, ext):
    assert extension_for(content_type) == ext


def test_asset_filename_defaults_to_certificate():
    assert asset_filename(None, "application/pdf") == "certificate.pdf"
    assert asset_filename("DIL-1", "image/png") == "DIL-1.png"


def _http(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fetch_design_asset_success():
    def handler(request):
        return httpx.Response(200, content=b"%PDF-1.7", headers={"content-type": "application/pdf"})

    asset = fetch_design_asset("https://assets.example.org/a.pdf", "DIL-1", _http(handler))
    assert asset.filename == "DIL-1.pdf"
    assert asset.content == b"%PDF-1.7"
    assert asset.media_type == "application/pdf"


def test_fetch_design_asset_http_error():
    def handler(request):
        return httpx.Response(403)

    with pytest.raises(AssetUnavailable) as info:
        fetch_design_asset("https://www.canva.com/design/X/view", "DIL-1", _http(handler))
    assert info.value.url == "https://www.canva.com/design/X/view"


def test_fetch_design_asset_transport_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(AssetUnavailable):
        fetch_design_asset("https://www.canva.com/design/X/view", "DIL-1", _http(handler))


def test_content_disposition_plain_name():
    assert content_disposition("DIL-1.pdf") == "attachment; filename=\"DIL-1.pdf\"; filename*=UTF-8''DIL-1.pdf"


def test_content_disposition_quotes_and_non_latin_names():
    header = content_disposition('Ré"9.pdf')
    assert header == "attachment; filename=\"R__9.pdf\"; filename*=UTF-8''R%C3%A9%229.pdf"
    header.encode("latin-1")
