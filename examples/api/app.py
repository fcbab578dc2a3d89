"""API — a versioned JSON API built from route groups.

CRUD for a simple "items" resource under ``/api/v1``. Demonstrates:
- nested groups (``/api`` then ``/v1``) sharing one multiplexer
- middleware scoped to a group (token check on ``/api/v1/admin`` only)
- method-qualified patterns, ``{name}`` and ``{name...}`` wildcards
- dict/list returns becoming JSON, ``(value, status)`` tuples

Run with any ASGI server::

    uvicorn app:app
"""

import json
import threading
from dataclasses import dataclass

from groute import Request, Response, Router
from groute.middleware import AccessLog, CORSConfig, CORSMiddleware, Handler

app = Router()
app.use(AccessLog())

api = app.group("/api")
api.use(CORSMiddleware(CORSConfig(
    allow_origins=("*",),
    allow_methods=("GET", "POST", "PUT", "DELETE", "OPTIONS"),
    allow_headers=("Content-Type", "Authorization"),
)))

v1 = api.group("/v1")


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Item:
    id: int
    title: str
    done: bool


_items: dict[int, Item] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return n


def _to_dict(item: Item) -> dict:
    return {"id": item.id, "title": item.title, "done": item.done}


def _item_id(request: Request) -> int | None:
    try:
        return int(request.path_value("item_id"))
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@v1.get("/info")
def info(request: Request):
    return {"name": "items", "version": 1}


@v1.get("/items")
def list_items(request: Request):
    """List items with optional limit and offset."""
    limit = min(max(request.query.get_int("limit", default=50) or 50, 1), 100)
    offset = max(request.query.get_int("offset", default=0) or 0, 0)

    with _lock:
        all_items = sorted(_items.values(), key=lambda x: x.id)
    page = all_items[offset : offset + limit]

    return {
        "data": [_to_dict(i) for i in page],
        "meta": {"limit": limit, "offset": offset, "total": len(all_items)},
    }


@v1.post("/items")
async def create_item(request: Request):
    body = await request.json()
    title = body.get("title", "").strip()
    if not title:
        return ({"error": "title is required"}, 400)

    item = Item(id=_get_next_id(), title=title, done=False)
    with _lock:
        _items[item.id] = item
    return {"data": _to_dict(item)}, 201


@v1.get("/items/{item_id}")
def get_item(request: Request):
    with _lock:
        item = _items.get(_item_id(request))
    if item is None:
        return ({"error": "Not found"}, 404)
    return {"data": _to_dict(item)}


@v1.put("/items/{item_id}")
async def update_item(request: Request):
    with _lock:
        item = _items.get(_item_id(request))
    if item is None:
        return ({"error": "Not found"}, 404)

    body = await request.json()
    title = str(body["title"]).strip() if "title" in body else item.title
    done = bool(body["done"]) if "done" in body else item.done

    updated = Item(id=item.id, title=title, done=done)
    with _lock:
        _items[item.id] = updated
    return {"data": _to_dict(updated)}


@v1.delete("/items/{item_id}")
def delete_item(request: Request):
    with _lock:
        item = _items.pop(_item_id(request), None)
    if item is None:
        return ({"error": "Not found"}, 404)
    return {"data": _to_dict(item)}


@v1.get("/files/{path...}")
def file_info(request: Request):
    """Echo the captured remainder of the path."""
    return {"path": request.path_value("path")}


# ---------------------------------------------------------------------------
# Admin group: token required
# ---------------------------------------------------------------------------


def require_token(next: Handler) -> Handler:
    async def handler(request: Request) -> Response:
        if request.headers.get("authorization") != "Bearer secret":
            return Response(
                json.dumps({"error": "unauthorized"}),
                status=401,
                content_type="application/json",
            )
        return await next(request)

    return handler


admin = v1.group("/admin")
admin.use(require_token)


@admin.delete("/items")
def clear_items(request: Request):
    with _lock:
        count = len(_items)
        _items.clear()
    return {"deleted": count}
