"""Tests for middleware chaining — order, capture time, group isolation."""

from _helpers import tracer

from groute.http.request import Request
from groute.http.response import Response
from groute.middleware.chain import apply_middleware
from groute.middleware.protocol import Handler
from groute.router import Router
from groute.testing import TestClient


def _recording_handler(calls: list[str], name: str = "handler"):
    def handler(request: Request) -> str:
        calls.append(name)
        return name

    return handler


class TestApplyMiddleware:
    async def test_first_added_is_outermost(self, calls: list[str]) -> None:
        async def terminal(request: Request) -> Response:
            calls.append("h")
            return Response("done")

        wrapped = apply_middleware(terminal, [tracer("m1", calls), tracer("m2", calls)])
        response = await wrapped(Request(method="GET", path="/"))

        assert response.text == "done"
        assert calls == ["m1:in", "m2:in", "h", "m2:out", "m1:out"]

    async def test_empty_chain_returns_handler(self) -> None:
        async def terminal(request: Request) -> Response:
            return Response()

        assert apply_middleware(terminal, []) is terminal

    async def test_class_middleware(self) -> None:
        class AddHeader:
            def __init__(self, value: str) -> None:
                self.value = value

            def __call__(self, next: Handler) -> Handler:
                async def handler(request: Request) -> Response:
                    return (await next(request)).with_header("X-Tag", self.value)

                return handler

        async def terminal(request: Request) -> Response:
            return Response()

        wrapped = apply_middleware(terminal, [AddHeader("outer"), AddHeader("inner")])
        response = await wrapped(Request(method="GET", path="/"))
        assert response.headers == (("X-Tag", "inner"), ("X-Tag", "outer"))


class TestRouterMiddlewareOrder:
    async def test_single_use_call(self, calls: list[str]) -> None:
        router = Router()
        router.use(tracer("m1", calls), tracer("m2", calls))
        router.get("/", _recording_handler(calls, "h"))

        async with TestClient(router) as client:
            await client.get("/")

        assert calls == ["m1:in", "m2:in", "h", "m2:out", "m1:out"]

    async def test_two_use_calls_same_order(self, calls: list[str]) -> None:
        router = Router()
        router.use(tracer("m1", calls))
        router.use(tracer("m2", calls))
        router.get("/", _recording_handler(calls, "h"))

        async with TestClient(router) as client:
            await client.get("/")

        assert calls == ["m1:in", "m2:in", "h", "m2:out", "m1:out"]

    async def test_use_after_registration_not_retroactive(self, calls: list[str]) -> None:
        router = Router()
        router.get("/early", _recording_handler(calls, "early"))
        router.use(tracer("late", calls))
        router.get("/later", _recording_handler(calls, "later"))

        async with TestClient(router) as client:
            await client.get("/early")
            assert calls == ["early"]
            calls.clear()
            await client.get("/later")

        assert calls == ["late:in", "later", "late:out"]

    async def test_router_apply_middleware(self, calls: list[str]) -> None:
        router = Router()
        router.use(tracer("m1", calls))

        async def terminal(request: Request) -> Response:
            calls.append("h")
            return Response()

        await router.apply_middleware(terminal)(Request(method="GET", path="/"))
        assert calls == ["m1:in", "h", "m1:out"]


class TestGroupMiddlewareIsolation:
    async def test_group_inherits_parent_middleware(self, calls: list[str]) -> None:
        router = Router()
        router.use(tracer("root", calls))
        api = router.group("/api")
        api.use(tracer("api", calls))
        api.get("/users", _recording_handler(calls, "users"))

        async with TestClient(router) as client:
            await client.get("/api/users")

        assert calls == ["root:in", "api:in", "users", "api:out", "root:out"]

    async def test_child_middleware_not_on_parent_routes(self, calls: list[str]) -> None:
        router = Router()
        router.get("/public", _recording_handler(calls, "public"))
        admin = router.group("/admin")
        admin.use(tracer("auth", calls))
        admin.get("/panel", _recording_handler(calls, "panel"))
        router.get("/also-public", _recording_handler(calls, "also-public"))

        async with TestClient(router) as client:
            await client.get("/public")
            await client.get("/also-public")
            assert calls == ["public", "also-public"]
            calls.clear()
            await client.get("/admin/panel")

        assert calls == ["auth:in", "panel", "auth:out"]

    async def test_parent_middleware_added_later_not_on_child(self, calls: list[str]) -> None:
        router = Router()
        child = router.group("/child")
        router.use(tracer("parent-late", calls))
        child.get("/route", _recording_handler(calls, "child"))
        router.get("/route", _recording_handler(calls, "parent"))

        async with TestClient(router) as client:
            await client.get("/child/route")
            assert calls == ["child"]
            calls.clear()
            await client.get("/route")

        assert calls == ["parent-late:in", "parent", "parent-late:out"]

    async def test_short_circuit(self) -> None:
        def deny(next: Handler) -> Handler:
            async def handler(request: Request) -> Response:
                if request.headers.get("authorization") != "Bearer ok":
                    return Response("forbidden", status=403)
                return await next(request)

            return handler

        router = Router()
        secure = router.group("/secure")
        secure.use(deny)
        secure.get("/data", lambda request: "secret")

        async with TestClient(router) as client:
            denied = await client.get("/secure/data")
            allowed = await client.get("/secure/data", headers={"Authorization": "Bearer ok"})

        assert denied.status == 403
        assert allowed.status == 200
        assert allowed.text == "secret"
