import importlib

from channels.routing import ProtocolTypeRouter
from django.conf import settings
from django.urls import get_resolver, resolve, reverse


def test_included_namespaces_resolve():
    assert reverse("admin:index").startswith("/admin/")
    assert reverse("tournaments:api_tournament_list") == "/api/tournaments/"
    assert reverse("brackets:generate") == "/api/brackets/single-elimination/generate/"
    namespaces = set(get_resolver().namespace_dict.keys())
    assert {"tournaments", "brackets"}.issubset(namespaces)


def test_bracket_routes():
    match = resolve("/api/brackets/matches/3/reopen/")
    assert match.url_name == "match_reopen"
    assert match.kwargs == {"match_id": 3}
    match = resolve("/api/brackets/single-elimination/7/")
    assert match.url_name == "detail"
    assert match.kwargs == {"tournament_id": 7}


def test_token_endpoints():
    assert reverse("token_obtain_pair") == "/api/token/"
    assert reverse("token_refresh") == "/api/token/refresh/"


def test_exception_handler_is_wired():
    assert settings.REST_FRAMEWORK["EXCEPTION_HANDLER"] == "brackets.exceptions.api_exception_handler"


def test_asgi_protocoltyperouter_has_http_and_ws():
    mod = importlib.import_module("esportshub.asgi")
    app = mod.application
    assert isinstance(app, ProtocolTypeRouter)
    mapping = getattr(app, "application_mapping", {})
    assert "http" in mapping and "websocket" in mapping
    assert callable(mapping["http"])


def test_websocket_route():
    from brackets.routing import websocket_urlpatterns

    pattern = websocket_urlpatterns[0].pattern
    assert pattern.match("ws/tournaments/12/bracket/")
    assert not pattern.match("ws/tournaments/abc/bracket/")


def test_wsgi_application_callable():
    mod = importlib.import_module("esportshub.wsgi")
    assert callable(mod.application)
