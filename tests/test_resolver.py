import pytest

from adapters.http_client import build_async_client
from adapters.proxy_client import ProxyClient
from core.errors import ResolutionExhausted, TransportError
from core.services.resolver import ModuleResolver, subpackage_of


async def _resolve(fake_proxy, settings, import_path, version="v1.0.0"):
    async with build_async_client(settings, transport=fake_proxy.transport()) as client:
        resolver = ModuleResolver(ProxyClient(settings.proxy_url, client))
        resolved = await resolver.resolve(import_path, version)
        await resolved.download.aclose()
        return resolved.module


@pytest.mark.asyncio
async def test_resolves_module_root_and_subpackage(fake_proxy, settings):
    fake_proxy.add_module("example.com/mod", "v1.0.0", {"go.mod": "module example.com/mod"})

    module = await _resolve(fake_proxy, settings, "example.com/mod/sub")

    assert module.module_root == "example.com/mod"
    assert module.subpackage == "sub"
    assert fake_proxy.requests == [
        "example.com/mod/sub/@v/v1.0.0.zip",
        "example.com/mod/@v/v1.0.0.zip",
    ]


@pytest.mark.asyncio
async def test_import_path_that_is_the_module_root_has_empty_subpackage(fake_proxy, settings):
    fake_proxy.add_module("example.com/mod", "v1.0.0", {"a.go": "package mod"})

    module = await _resolve(fake_proxy, settings, "example.com/mod")

    assert module.module_root == "example.com/mod"
    assert module.subpackage == ""
    assert module.import_path == "example.com/mod"


@pytest.mark.asyncio
async def test_subpackage_is_relative_to_the_winning_prefix(fake_proxy, settings):
    fake_proxy.add_module("example.com/mod", "v1.0.0", {"a.go": "package mod"})

    module = await _resolve(fake_proxy, settings, "example.com/mod/a/b/c")

    assert module.subpackage == "a/b/c"
    assert f"{module.module_root}/{module.subpackage}" == "example.com/mod/a/b/c"


@pytest.mark.asyncio
async def test_deepest_served_prefix_wins(fake_proxy, settings):
    fake_proxy.add_module("example.com/mod", "v1.0.0", {"a.go": "package mod"})
    fake_proxy.add_module("example.com/mod/sub", "v1.0.0", {"s.go": "package sub"})

    module = await _resolve(fake_proxy, settings, "example.com/mod/sub/deep")

    assert module.module_root == "example.com/mod/sub"
    assert module.subpackage == "deep"


@pytest.mark.asyncio
async def test_exhaustion_when_no_prefix_is_a_module(fake_proxy, settings):
    with pytest.raises(ResolutionExhausted) as info:
        await _resolve(fake_proxy, settings, "example.com/none/here")

    assert info.value.import_path == "example.com/none/here"
    assert fake_proxy.requests == [
        "example.com/none/here/@v/v1.0.0.zip",
        "example.com/none/@v/v1.0.0.zip",
        "example.com/@v/v1.0.0.zip",
    ]
    assert "zip-found" not in fake_proxy.events


@pytest.mark.asyncio
async def test_empty_import_path_is_exhausted_without_probing(fake_proxy, settings):
    with pytest.raises(ResolutionExhausted):
        await _resolve(fake_proxy, settings, "/")
    assert fake_proxy.requests == []


@pytest.mark.asyncio
async def test_transport_errors_propagate(fake_proxy, settings):
    fake_proxy.zip_error = True

    with pytest.raises(TransportError) as info:
        await _resolve(fake_proxy, settings, "example.com/mod")

    assert info.value.url == f"{settings.proxy_url}/example.com/mod/@v/v1.0.0.zip"


def test_subpackage_of():
    assert subpackage_of("a.com/m/x/y", "a.com/m") == "x/y"
    assert subpackage_of("a.com/m", "a.com/m") == ""
