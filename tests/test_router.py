"""Tests for groute.router — groups, middleware capture, registration."""

import pytest

from groute.compose import join_path
from groute.config import RouterConfig
from groute.errors import PatternError, RouteConflictError
from groute.http.request import Request
from groute.routing.mux import ServeMux
from groute.router import Router

from _helpers import RecordingMux, tracer


def _ok(request: Request) -> str:
    return "ok"


class TestNewRouter:
    def test_defaults(self) -> None:
        router = Router()
        assert router.prefix == ""
        assert router.middleware == ()
        assert isinstance(router.mux, ServeMux)
        assert router.config == RouterConfig()

    def test_injected_mux(self, recording_mux: RecordingMux) -> None:
        router = Router(mux=recording_mux)
        assert router.mux is recording_mux

    def test_repr(self) -> None:
        assert repr(Router().group("/api")) == "Router(prefix='/api', middleware=0)"


class TestGroup:
    def test_prefix_joined(self) -> None:
        assert Router().group("/api").prefix == "/api"

    def test_slashes_normalized(self) -> None:
        root = Router()
        assert root.group("/api/").group("/v1").prefix == "/api/v1"
        assert root.group("/api").group("v1").prefix == "/api/v1"

    def test_nested(self) -> None:
        assert Router().group("/api").group("/v1").group("/admin").prefix == "/api/v1/admin"

    def test_shares_mux_and_config(self) -> None:
        root = Router(RouterConfig(debug=True))
        child = root.group("/api").group("/v1")
        assert child.mux is root.mux
        assert child.config is root.config

    def test_group_registers_nothing(self, recording_mux: RecordingMux) -> None:
        Router(mux=recording_mux).group("/api")
        assert recording_mux.registered == {}

    def test_empty_group_matches_root(self, recording_mux: RecordingMux) -> None:
        root = Router(mux=recording_mux)
        root.get("/info", _ok)
        other = RecordingMux()
        Router(mux=other).group("").get("/info", _ok)
        assert list(recording_mux.registered) == list(other.registered) == ["GET /info"]

    def test_middleware_copied(self, calls: list[str]) -> None:
        root = Router()
        mw = tracer("root", calls)
        root.use(mw)
        child = root.group("/api")
        assert child.middleware == (mw,)

        child.use(tracer("child", calls))
        assert len(child.middleware) == 2
        assert root.middleware == (mw,)

        root.use(tracer("late", calls))
        assert len(child.middleware) == 2


class TestRegistration:
    def test_method_helpers(self, recording_mux: RecordingMux) -> None:
        router = Router(mux=recording_mux)
        for method in ("get", "post", "put", "delete", "patch", "head", "options", "connect", "trace"):
            getattr(router, method)("/test", _ok)

        assert sorted(recording_mux.registered) == sorted(
            f"{m} /test"
            for m in ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "CONNECT", "TRACE")
        )

    def test_handle_without_method(self, recording_mux: RecordingMux) -> None:
        Router(mux=recording_mux).group("/api").handle("/any", _ok)
        assert list(recording_mux.registered) == ["/api/any"]

    def test_handle_with_method(self, recording_mux: RecordingMux) -> None:
        Router(mux=recording_mux).group("/api/").handle("POST /users", _ok)
        assert list(recording_mux.registered) == ["POST /api/users"]

    def test_composition_matches_join_path(self, recording_mux: RecordingMux) -> None:
        group = Router(mux=recording_mux).group("/api").group("v1/")
        group.handle("DELETE //users/{id}", _ok)
        assert list(recording_mux.registered) == [join_path("/api/v1", "DELETE //users/{id}")]

    def test_decorator_form(self, recording_mux: RecordingMux) -> None:
        router = Router(mux=recording_mux)

        @router.get("/decorated")
        def decorated(request: Request) -> str:
            return "hi"

        assert decorated(None) == "hi"  # type: ignore[arg-type]
        assert list(recording_mux.registered) == ["GET /decorated"]

    def test_direct_form_returns_handler(self) -> None:
        assert Router().post("/x", _ok) is _ok

    def test_route_several_methods(self, recording_mux: RecordingMux) -> None:
        router = Router(mux=recording_mux).group("/items")

        @router.route("/{id}", methods=["get", "PUT"])
        def item(request: Request) -> str:
            return "item"

        assert sorted(recording_mux.registered) == ["GET /items/{id}", "PUT /items/{id}"]


class TestRegistrationErrors:
    def test_malformed_pattern_propagates(self) -> None:
        with pytest.raises(PatternError):
            Router().get("/files/{path...}/more", _ok)

    def test_duplicate_propagates(self) -> None:
        router = Router()
        router.get("/users", _ok)
        with pytest.raises(RouteConflictError):
            router.get("/users", _ok)

    def test_sibling_groups_composing_to_same_pattern(self) -> None:
        root = Router()
        root.group("/api").get("/v1/info", _ok)
        with pytest.raises(RouteConflictError):
            root.group("/api/v1").get("/info", _ok)

    def test_replace_policy(self) -> None:
        root = Router(RouterConfig(on_conflict="replace"))
        root.group("/api").get("/info", _ok)
        root.group("/api").get("/info", _ok)
        assert [r.pattern for r in root.mux.routes] == ["GET /api/info"]
